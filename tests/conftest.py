"""
Shared fixtures for LiquidityLab tests.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

import pandas as pd
import pytest
from liquiditylab.core.ledger import Ledger, Transaction

HEADER = ["序号", "类型", "归属日期", "账户", "摘要明细", "币种", "原币金额", "汇率", "人民币金额"]


def _sheet_row(idx, day, category, amount) -> list:
    # date in column C, category in E, amount in I
    return [idx, "", day, "", category, "", "", "", amount]


@pytest.fixture()
def write_workbook(tmp_path: Path):
    """Factory writing ``{sheet: [(day, category, amount), ...]}`` to an xlsx file."""

    def _write(sheets: dict[str, list[tuple]], name: str = "ledger.xlsx") -> Path:
        path = tmp_path / name
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            for sheet, rows in sheets.items():
                body = [_sheet_row(i + 1, *row) for i, row in enumerate(rows)]
                pd.DataFrame([HEADER, *body]).to_excel(
                    writer, sheet_name=sheet, header=False, index=False
                )
        return path

    return _write


@pytest.fixture()
def workbook_path(write_workbook) -> Path:
    """Workbook with March 2024 incomes and expenses and no fund sheet."""
    return write_workbook(
        {
            "收入明细": [
                (datetime(2024, 3, 5), "工资", 5000),
                ("not a date", "奖金", 100),
                ("2024-03-12", None, "1,200.50"),
                (datetime(2024, 3, 1), "期初余额-2024", 1_000_000),
            ],
            "支出明细": [
                (datetime(2024, 3, 10), "房租", 2000),
            ],
        }
    )


@pytest.fixture()
def scenario_ledger() -> Ledger:
    """Income 5000 in week 1 and expense 2000 in week 2 of March 2024."""
    return Ledger.from_iterables(
        incomes=[Transaction(date(2024, 3, 5), Decimal("5000"), "工资")],
        expenses=[Transaction(date(2024, 3, 10), Decimal("2000"), "房租")],
    )
