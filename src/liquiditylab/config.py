"""Utilities for loading monitor configuration from YAML/JSON sources."""

from __future__ import annotations

import json
from copy import deepcopy
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from .core.buckets import DEFAULT_EXCLUDED_INCOME_MARKERS
from .core.errors import ConfigError
from .core.granularity import Granularity
from .core.highlight import DateRangeHighlight
from .core.monitor import DEFAULT_STARTING_BALANCE
from .core.navigation import DEFAULT_WINDOW_SIZE

__all__ = [
    "DEFAULT_STARTING_BALANCE",
    "MonitorConfig",
    "WorkbookLayout",
    "load_config",
]


@dataclass(frozen=True, slots=True)
class WorkbookLayout:
    """Where the importer finds each series and column in a workbook."""

    income_sheet: str = "收入明细"
    expense_sheet: str = "支出明细"
    emergency_fund_sheet: str = "紧急备用金"
    date_column: int = 2  # C
    category_column: int = 4  # E
    amount_column: int = 8  # I
    default_category: str = "未分类"


@dataclass(frozen=True, slots=True)
class MonitorConfig:
    """Structured representation of a monitor configuration."""

    starting_balance: Decimal = DEFAULT_STARTING_BALANCE
    currency: str = "CNY"
    granularity: Granularity = Granularity.WEEKLY
    window_size: int = DEFAULT_WINDOW_SIZE
    excluded_income_markers: tuple[str, ...] = DEFAULT_EXCLUDED_INCOME_MARKERS
    workbook: WorkbookLayout = field(default_factory=WorkbookLayout)
    highlight: DateRangeHighlight | None = None
    source: str = "<defaults>"


def load_config(
    source: str | Path | dict[str, Any] | None = None, *, format: str | None = None
) -> MonitorConfig:
    """Parse a monitor configuration from YAML/JSON/dict; ``None`` gives defaults."""

    if source is None:
        return MonitorConfig()

    mapping, label = _read_source(source, format=format)
    defaults = MonitorConfig()
    return MonitorConfig(
        starting_balance=_coerce_decimal(
            mapping.get("starting_balance", defaults.starting_balance),
            f"{label}::starting_balance",
        ),
        currency=_coerce_str(
            mapping.get("currency", defaults.currency), f"{label}::currency"
        ),
        granularity=_coerce_granularity(
            mapping.get("granularity", defaults.granularity.value),
            f"{label}::granularity",
        ),
        window_size=_coerce_positive_int(
            mapping.get("window_size", defaults.window_size), f"{label}::window_size"
        ),
        excluded_income_markers=tuple(
            _ensure_str_list(
                mapping.get(
                    "excluded_income_markers", list(defaults.excluded_income_markers)
                ),
                f"{label}::excluded_income_markers",
            )
        ),
        workbook=_normalize_workbook(mapping.get("workbook"), label),
        highlight=_normalize_highlight(mapping.get("highlight"), label),
        source=label,
    )


def _read_source(
    source: str | Path | dict[str, Any], *, format: str | None
) -> tuple[dict[str, Any], str]:
    if isinstance(source, dict):
        return deepcopy(source), "<mapping>"

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(path)

    fmt = (format or path.suffix.lstrip(".")).lower()
    text = path.read_text(encoding="utf-8")
    if fmt in {"yaml", "yml", ""}:
        data = yaml.safe_load(text)
    elif fmt == "json":
        data = json.loads(text)
    else:
        raise ConfigError(f"Unsupported config format '{fmt}' for {path}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping (source={path})")
    return data, str(path)


def _normalize_workbook(raw: Any, label: str) -> WorkbookLayout:
    data = _ensure_dict(raw, f"{label}::workbook")
    defaults = WorkbookLayout()
    ctx = f"{label}::workbook"
    return WorkbookLayout(
        income_sheet=_coerce_str(
            data.get("income_sheet", defaults.income_sheet), f"{ctx}.income_sheet"
        ),
        expense_sheet=_coerce_str(
            data.get("expense_sheet", defaults.expense_sheet), f"{ctx}.expense_sheet"
        ),
        emergency_fund_sheet=_coerce_str(
            data.get("emergency_fund_sheet", defaults.emergency_fund_sheet),
            f"{ctx}.emergency_fund_sheet",
        ),
        date_column=_coerce_column(
            data.get("date_column", defaults.date_column), f"{ctx}.date_column"
        ),
        category_column=_coerce_column(
            data.get("category_column", defaults.category_column),
            f"{ctx}.category_column",
        ),
        amount_column=_coerce_column(
            data.get("amount_column", defaults.amount_column), f"{ctx}.amount_column"
        ),
        default_category=_coerce_str(
            data.get("default_category", defaults.default_category),
            f"{ctx}.default_category",
        ),
    )


def _normalize_highlight(raw: Any, label: str) -> DateRangeHighlight | None:
    if raw is None:
        return None
    ctx = f"{label}::highlight"
    data = _ensure_dict(raw, ctx)
    start = _coerce_date(data.get("start"), f"{ctx}.start")
    end = _coerce_date(data.get("end"), f"{ctx}.end")
    if start is None or end is None:
        raise ConfigError(f"{ctx}: both 'start' and 'end' are required")
    try:
        return DateRangeHighlight(start, end)
    except ValueError as exc:
        raise ConfigError(f"{ctx}: {exc}") from exc


def _coerce_decimal(value: Any, ctx: str) -> Decimal:
    if isinstance(value, bool):
        raise ConfigError(f"{ctx}: expected a number")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).replace(",", ""))
        except InvalidOperation as exc:
            raise ConfigError(f"{ctx}: invalid number '{value}'") from exc
    else:
        raise ConfigError(f"{ctx}: expected a number")
    if not result.is_finite():
        raise ConfigError(f"{ctx}: must be finite")
    return result


def _coerce_granularity(value: Any, ctx: str) -> Granularity:
    try:
        return Granularity.parse(value)
    except ConfigError as exc:
        raise ConfigError(f"{ctx}: {exc}") from exc


def _coerce_positive_int(value: Any, ctx: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{ctx}: expected an integer")
    if value < 1:
        raise ConfigError(f"{ctx}: must be >= 1")
    return value


def _coerce_column(value: Any, ctx: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{ctx}: expected a zero-based column index")
    if value < 0:
        raise ConfigError(f"{ctx}: column index must be >= 0")
    return value


def _coerce_date(value: Any, ctx: str) -> date | None:
    if value is None:
        return None
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError as exc:
            raise ConfigError(f"{ctx}: invalid ISO date '{value}'") from exc
    raise ConfigError(f"{ctx}: expected ISO date string")


def _coerce_str(value: Any, ctx: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{ctx}: expected non-empty string")
    return value


def _ensure_dict(value: Any, ctx: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{ctx}: expected a mapping")
    return deepcopy(value)


def _ensure_str_list(value: Any, ctx: str) -> list[str]:
    if not isinstance(value, list):
        raise ConfigError(f"{ctx}: expected a list")
    out: list[str] = []
    for idx, item in enumerate(value):
        if not isinstance(item, str) or not item.strip():
            raise ConfigError(f"{ctx}[{idx}]: expected non-empty string")
        out.append(item)
    return out
