"""
Rolling balance over the weekly timeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable

from .buckets import WeekBucket, WeekKey
from .labels import week_label


@dataclass(frozen=True, slots=True)
class BalancedWeek:
    """
    A week bucket with its opening and closing balance.

    Invariant: ``closing == opening + income - expense`` and ``opening`` equals
    the previous week's ``closing`` across the whole generated sequence.
    """

    year: int
    month: int
    week: int
    income: Decimal
    expense: Decimal
    emergency_fund: Decimal
    opening: Decimal
    closing: Decimal
    name: str

    @property
    def key(self) -> WeekKey:
        return WeekKey(self.year, self.month, self.week)

    @property
    def net(self) -> Decimal:
        return self.income - self.expense

    @property
    def start(self) -> date:
        return self.key.start

    @property
    def end(self) -> date:
        return self.key.end


def roll_balances(
    buckets: Iterable[WeekBucket], starting_balance: Decimal | int | str
) -> tuple[BalancedWeek, ...]:
    """
    Thread a running balance through chronologically ordered buckets.

    Args:
        buckets: Week buckets in chronological order
        starting_balance: Opening balance of the first bucket

    Returns:
        One BalancedWeek per bucket, in the same order

    Example:
        >>> from liquiditylab.core.buckets import WeekBucket
        >>> weeks = roll_balances([WeekBucket(2024, 3, 1, income=Decimal(5))], 100)
        >>> weeks[0].closing
        Decimal('105')
    """
    balance = Decimal(str(starting_balance))
    out: list[BalancedWeek] = []
    for bucket in buckets:
        opening = balance
        closing = opening + bucket.income - bucket.expense
        balance = closing
        out.append(
            BalancedWeek(
                year=bucket.year,
                month=bucket.month,
                week=bucket.week,
                income=bucket.income,
                expense=bucket.expense,
                emergency_fund=bucket.emergency_fund,
                opening=opening,
                closing=closing,
                name=week_label(bucket.year, bucket.month, bucket.week),
            )
        )
    return tuple(out)
