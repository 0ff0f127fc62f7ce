"""
Ledger import from tabular sources.

Reads an xlsx workbook with one sheet per series (incomes, expenses,
emergency fund) and normalizes its rows into :class:`Transaction` records.
Rows whose date cannot be parsed are dropped; an unparseable amount becomes
zero. Nothing malformed reaches the pipeline as NaN or None.
"""

from __future__ import annotations

import logging
import math
import re
import zipfile
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Iterable, Sequence

import numpy as np
import pandas as pd

from .config import WorkbookLayout
from .core.errors import IngestError
from .core.ledger import Ledger, Transaction

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Day zero of Excel's 1900 date system (accounts for the 1900 leap-year bug).
EXCEL_EPOCH = pd.Timestamp("1899-12-30")

# Leading numeric prefix, matching how spreadsheet exports are usually read.
_NUMBER_PREFIX = re.compile(r"^[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_AMOUNT_NOISE = re.compile(r"[,\s¥￥$€£]")


def _is_missing(cell: Any) -> bool:
    if cell is None or cell is pd.NaT:
        return True
    if isinstance(cell, (str, date)):
        return False
    try:
        return bool(pd.isna(cell))
    except (TypeError, ValueError):
        return False


def parse_date(cell: Any) -> date | None:
    """
    Coerce a spreadsheet cell to a calendar date.

    Accepts datetime/date objects, ISO-like strings and Excel serial day
    numbers. Returns ``None`` for anything unparseable or out of range.
    """
    if _is_missing(cell) or isinstance(cell, bool):
        return None
    if isinstance(cell, datetime):
        return cell.date()
    if isinstance(cell, date):
        return cell
    if isinstance(cell, (int, float, np.integer, np.floating)):
        if not math.isfinite(float(cell)):
            return None
        try:
            return (EXCEL_EPOCH + pd.to_timedelta(float(cell), unit="D")).date()
        except (OverflowError, ValueError):
            return None
    if isinstance(cell, str):
        text = cell.strip()
        if not text:
            return None
        parsed = pd.to_datetime(text, errors="coerce")
        if pd.isna(parsed):
            return None
        return parsed.date()
    return None


def parse_amount(cell: Any) -> Decimal:
    """
    Coerce a spreadsheet cell to a finite Decimal.

    Numbers are taken as-is; strings lose thousands separators and currency
    symbols and are read up to the first non-numeric character. Anything
    else, including NaN and infinities, becomes zero.

    Example:
        >>> parse_amount("¥1,234.50")
        Decimal('1234.50')
        >>> parse_amount("n/a")
        Decimal('0')
    """
    if _is_missing(cell) or isinstance(cell, bool):
        return ZERO
    if isinstance(cell, Decimal):
        return cell if cell.is_finite() else ZERO
    if isinstance(cell, (int, np.integer)):
        return Decimal(int(cell))
    if isinstance(cell, (float, np.floating)):
        return Decimal(str(float(cell))) if math.isfinite(cell) else ZERO
    if isinstance(cell, str):
        match = _NUMBER_PREFIX.match(_AMOUNT_NOISE.sub("", cell))
        if match is None:
            return ZERO
        try:
            value = Decimal(match.group(0))
        except InvalidOperation:
            return ZERO
        return value if value.is_finite() else ZERO
    return ZERO


def parse_category(cell: Any, default: str) -> str:
    if _is_missing(cell):
        return default
    text = str(cell).strip()
    return text or default


def _cell(row: Sequence[Any], idx: int) -> Any:
    return row[idx] if idx < len(row) else None


def normalize_rows(
    rows: Iterable[Sequence[Any]],
    layout: WorkbookLayout | None = None,
    *,
    source: str = "<rows>",
) -> list[Transaction]:
    """
    Turn raw data rows into transactions using ``layout`` column positions.

    Args:
        rows: Data rows (header already removed)
        layout: Column positions and default category
        source: Label used in log messages

    Returns:
        Transactions in row order; rows with an unparseable date are dropped
    """
    layout = layout or WorkbookLayout()
    out: list[Transaction] = []
    dropped = 0
    for idx, row in enumerate(rows):
        day = parse_date(_cell(row, layout.date_column))
        if day is None:
            dropped += 1
            logger.debug("%s: dropping row %d with unparseable date", source, idx)
            continue
        out.append(
            Transaction(
                date=day,
                amount=parse_amount(_cell(row, layout.amount_column)),
                category=parse_category(
                    _cell(row, layout.category_column), layout.default_category
                ),
            )
        )
    if dropped:
        logger.info("%s: kept %d rows, dropped %d", source, len(out), dropped)
    return out


def read_sheets(path: str | Path) -> dict[str, pd.DataFrame]:
    """Read every sheet of a workbook without header inference."""
    path = Path(path)
    try:
        return pd.read_excel(path, sheet_name=None, header=None)
    except FileNotFoundError as exc:
        raise IngestError(str(path), "workbook not found") from exc
    except (OSError, ValueError, zipfile.BadZipFile) as exc:
        raise IngestError(str(path), f"cannot read workbook: {exc}") from exc


def _sheet_rows(sheets: dict[str, pd.DataFrame], name: str) -> list[tuple]:
    frame = sheets.get(name)
    if frame is None:
        logger.info("Sheet '%s' not found; treating it as empty", name)
        return []
    # first row is the header
    return list(frame.iloc[1:].itertuples(index=False, name=None))


def ledger_from_sheets(
    sheets: dict[str, pd.DataFrame], layout: WorkbookLayout | None = None
) -> Ledger:
    """Build a Ledger from already loaded sheet frames."""
    layout = layout or WorkbookLayout()
    return Ledger.from_iterables(
        incomes=normalize_rows(
            _sheet_rows(sheets, layout.income_sheet), layout, source=layout.income_sheet
        ),
        expenses=normalize_rows(
            _sheet_rows(sheets, layout.expense_sheet),
            layout,
            source=layout.expense_sheet,
        ),
        emergency_funds=normalize_rows(
            _sheet_rows(sheets, layout.emergency_fund_sheet),
            layout,
            source=layout.emergency_fund_sheet,
        ),
    )


def load_workbook(
    path: str | Path, layout: WorkbookLayout | None = None
) -> Ledger:
    """
    Load the three transaction series from an xlsx workbook.

    A missing sheet yields an empty series.

    Raises:
        IngestError: If the file cannot be read as a workbook
    """
    ledger = ledger_from_sheets(read_sheets(path), layout)
    logger.info(
        "Loaded %s: %d incomes, %d expenses, %d emergency-fund entries",
        path,
        len(ledger.incomes),
        len(ledger.expenses),
        len(ledger.emergency_funds),
    )
    return ledger
