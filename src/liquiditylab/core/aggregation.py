"""
Period aggregation with flow and snapshot semantics.

Flows (income, expense) are summed over the constituent weeks. Balances take
period-end values: ``opening`` comes from the first week and ``closing`` from
the last. The emergency fund is a balance checked at fixed checkpoints, so it
is taken from one designated week instead of being summed:

==================  ===========================
Period              Emergency-fund source week
==================  ===========================
semi-monthly, 1st   week 2 of the month
semi-monthly, 2nd   week 4 of the month
monthly             week 4 of the month
weekly              the week itself
==================  ===========================

A designated week missing from the input resolves to zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, NamedTuple

from .balance import BalancedWeek
from .buckets import ZERO, WeekKey
from .granularity import Granularity, Half
from .labels import half_label, month_label, week_label

#: Week that carries the month-end emergency-fund snapshot.
MONTH_END_SNAPSHOT_WEEK = 4


class PeriodKey(NamedTuple):
    """
    Structured key of an aggregated period.

    ``half`` is set for semi-monthly periods, ``week`` for weekly ones; both
    are ``None`` for monthly periods.
    """

    year: int
    month: int
    half: Half | None = None
    week: int | None = None

    @classmethod
    def of_week(cls, week: BalancedWeek, granularity: Granularity) -> PeriodKey:
        if granularity is Granularity.WEEKLY:
            return cls(week.year, week.month, week=week.week)
        if granularity is Granularity.SEMI_MONTHLY:
            return cls(week.year, week.month, half=Half.of_week(week.week))
        return cls(week.year, week.month)

    @classmethod
    def of_date(cls, day: date, granularity: Granularity) -> PeriodKey:
        week = WeekKey.from_date(day).week
        if granularity is Granularity.WEEKLY:
            return cls(day.year, day.month, week=week)
        if granularity is Granularity.SEMI_MONTHLY:
            return cls(day.year, day.month, half=Half.of_week(week))
        return cls(day.year, day.month)

    @property
    def name(self) -> str:
        if self.week is not None:
            return week_label(self.year, self.month, self.week)
        if self.half is not None:
            return half_label(self.year, self.month, self.half)
        return month_label(self.year, self.month)


@dataclass(frozen=True, slots=True)
class AggregatedPeriod:
    """
    A period of the requested granularity built from balanced weeks.

    Attributes:
        name: Display label
        year: Calendar year
        month: Calendar month
        sub_type: Half of the month for semi-monthly periods, else ``None``
        income: Sum of constituent week incomes
        expense: Sum of constituent week expenses
        emergency_fund: Snapshot value (see module docstring)
        opening: Opening balance of the first constituent week
        closing: Closing balance of the last constituent week
        net: ``income - expense``
        weeks: Constituent weeks in chronological order
        key: Structured period key used for matching
    """

    name: str
    year: int
    month: int
    sub_type: Half | None
    income: Decimal
    expense: Decimal
    emergency_fund: Decimal
    opening: Decimal
    closing: Decimal
    net: Decimal
    weeks: tuple[BalancedWeek, ...]
    key: PeriodKey

    @property
    def start(self) -> date:
        return self.weeks[0].start

    @property
    def end(self) -> date:
        return self.weeks[-1].end


def _snapshot(
    weeks_by_key: dict[WeekKey, BalancedWeek], year: int, month: int, week: int
) -> Decimal:
    hit = weeks_by_key.get(WeekKey(year, month, week))
    return hit.emergency_fund if hit is not None else ZERO


def _emergency_fund(
    key: PeriodKey,
    granularity: Granularity,
    weeks_by_key: dict[WeekKey, BalancedWeek],
) -> Decimal:
    if granularity is Granularity.SEMI_MONTHLY:
        return _snapshot(weeks_by_key, key.year, key.month, key.half.snapshot_week)
    return _snapshot(weeks_by_key, key.year, key.month, MONTH_END_SNAPSHOT_WEEK)


def promote_week(week: BalancedWeek) -> AggregatedPeriod:
    """Turn a single balanced week into a weekly period."""
    return AggregatedPeriod(
        name=week.name,
        year=week.year,
        month=week.month,
        sub_type=None,
        income=week.income,
        expense=week.expense,
        emergency_fund=week.emergency_fund,
        opening=week.opening,
        closing=week.closing,
        net=week.income - week.expense,
        weeks=(week,),
        key=PeriodKey(week.year, week.month, week=week.week),
    )


def aggregate(
    weeks: Iterable[BalancedWeek], granularity: Granularity | str
) -> tuple[AggregatedPeriod, ...]:
    """
    Fold the weekly timeline into periods of the requested granularity.

    Args:
        weeks: Balanced weeks in chronological order
        granularity: ``weekly``, ``semi-monthly`` or ``monthly``

    Returns:
        Periods in order of first appearance of their key

    Example:
        >>> monthly = aggregate(weeks, Granularity.MONTHLY)
        >>> monthly[0].closing == weeks[3].closing
        True
    """
    granularity = Granularity.parse(granularity)
    weeks = tuple(weeks)
    if granularity is Granularity.WEEKLY:
        return tuple(promote_week(week) for week in weeks)

    groups: dict[PeriodKey, list[BalancedWeek]] = {}
    for week in weeks:
        groups.setdefault(PeriodKey.of_week(week, granularity), []).append(week)

    weeks_by_key = {week.key: week for week in weeks}
    periods: list[AggregatedPeriod] = []
    for key, members in groups.items():
        income = sum((w.income for w in members), ZERO)
        expense = sum((w.expense for w in members), ZERO)
        periods.append(
            AggregatedPeriod(
                name=key.name,
                year=key.year,
                month=key.month,
                sub_type=key.half,
                income=income,
                expense=expense,
                emergency_fund=_emergency_fund(key, granularity, weeks_by_key),
                opening=members[0].opening,
                closing=members[-1].closing,
                net=income - expense,
                weeks=tuple(members),
                key=key,
            )
        )
    return tuple(periods)

