"""
Week bucketing for LiquidityLab.

Every month of the observed range is split into four fixed week buckets
(see :func:`~liquiditylab.core.utils.week_of_month`). Buckets are a property
of the month, not of activity: a month with no transactions still yields four
zero-valued buckets, so the rolling balance walks a gap-free timeline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, NamedTuple

from .ledger import Ledger, Transaction
from .utils import (
    WEEKS_PER_MONTH,
    month_range,
    months_between,
    week_bounds,
    week_of_month,
    year_month,
)

logger = logging.getLogger(__name__)

#: Income categories containing any of these markers are balance carry-ins.
DEFAULT_EXCLUDED_INCOME_MARKERS: tuple[str, ...] = ("期初余额", "现金备用")

#: Ranges spanning more calendar years than this yield no buckets.
MAX_SPAN_YEARS = 10

ZERO = Decimal("0")


class WeekKey(NamedTuple):
    """Structured key of a week bucket."""

    year: int
    month: int
    week: int

    @classmethod
    def from_date(cls, day: date) -> WeekKey:
        return cls(day.year, day.month, week_of_month(day.day))

    @property
    def start(self) -> date:
        return week_bounds(self.year, self.month, self.week)[0]

    @property
    def end(self) -> date:
        return week_bounds(self.year, self.month, self.week)[1]


@dataclass(frozen=True, slots=True)
class WeekBucket:
    """
    Summed activity of one week bucket.

    Attributes:
        year: Calendar year
        month: Calendar month (1-12)
        week: Week of month (1-4)
        income: Sum of included income amounts
        expense: Sum of expense amounts
        emergency_fund: Sum of emergency-fund entries in the week
    """

    year: int
    month: int
    week: int
    income: Decimal = ZERO
    expense: Decimal = ZERO
    emergency_fund: Decimal = ZERO

    @property
    def key(self) -> WeekKey:
        return WeekKey(self.year, self.month, self.week)


def is_excluded_income(
    tx: Transaction, markers: Iterable[str] = DEFAULT_EXCLUDED_INCOME_MARKERS
) -> bool:
    """True when an income transaction is a balance carry-in, not an inflow."""
    return any(marker in tx.category for marker in markers)


def bucket_range(first: date, last: date) -> list[WeekKey]:
    """
    Build the ordered, gap-free list of week keys covering ``first``..``last``.

    Returns an empty list when the span exceeds :data:`MAX_SPAN_YEARS`
    calendar years, which guards against malformed dates.
    """
    if last.year - first.year > MAX_SPAN_YEARS:
        logger.warning(
            "Date range %s..%s spans more than %d years; no buckets generated",
            first.isoformat(),
            last.isoformat(),
            MAX_SPAN_YEARS,
        )
        return []

    keys: list[WeekKey] = []
    for month in month_range(first, months_between(first, last)):
        year, month_num = year_month(month)
        for week in range(1, WEEKS_PER_MONTH + 1):
            keys.append(WeekKey(year, month_num, week))
    return keys


def bucketize(
    ledger: Ledger,
    today: date,
    excluded_income_markers: Iterable[str] = DEFAULT_EXCLUDED_INCOME_MARKERS,
) -> tuple[WeekBucket, ...]:
    """
    Assign every transaction to its week bucket.

    The range spans from the month of the earliest transaction (across all
    three series) to the month of the later of the latest transaction and
    ``today``, so a bucket for the current week exists even when data is stale.

    Args:
        ledger: Normalized transactions
        today: Current date, used to extend the range
        excluded_income_markers: Category substrings that exclude an income
            transaction from the income sum

    Returns:
        Chronologically ordered buckets, four per month; empty for an empty
        ledger or an oversized range
    """
    dates = ledger.all_dates()
    if not dates:
        return ()

    keys = bucket_range(min(dates), max(max(dates), today))
    if not keys:
        return ()

    markers = tuple(excluded_income_markers)
    sums: dict[WeekKey, dict[str, Decimal]] = {
        key: {"income": ZERO, "expense": ZERO, "emergency_fund": ZERO}
        for key in keys
    }

    def populate(items: Iterable[Transaction], field: str) -> None:
        for tx in items:
            if field == "income" and is_excluded_income(tx, markers):
                continue
            target = sums.get(WeekKey.from_date(tx.date))
            if target is None:
                logger.debug("Dropping %s outside bucket range: %s", field, tx)
                continue
            target[field] += tx.amount

    populate(ledger.incomes, "income")
    populate(ledger.expenses, "expense")
    populate(ledger.emergency_funds, "emergency_fund")

    return tuple(WeekBucket(*key, **values) for key, values in sums.items())
