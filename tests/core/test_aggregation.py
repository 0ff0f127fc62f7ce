"""
Tests for period aggregation (flows summed, snapshots picked).
"""

from datetime import date
from decimal import Decimal

import pytest
from liquiditylab.core.aggregation import PeriodKey, aggregate
from liquiditylab.core.balance import roll_balances
from liquiditylab.core.buckets import WeekBucket, bucketize
from liquiditylab.core.granularity import Granularity, Half
from liquiditylab.core.ledger import Ledger, Transaction


def _weeks(*buckets, start=0):
    return roll_balances(buckets, start)


@pytest.fixture()
def scenario_weeks(scenario_ledger):
    return roll_balances(bucketize(scenario_ledger, date(2024, 3, 20)), 100_000)


class TestMonthly:
    """Monthly aggregation."""

    def test_scenario_month(self, scenario_weeks):
        (march,) = aggregate(scenario_weeks, Granularity.MONTHLY)

        assert march.name == "2024年3月"
        assert march.sub_type is None
        assert march.income == Decimal("5000")
        assert march.expense == Decimal("2000")
        assert march.net == Decimal("3000")
        assert march.opening == Decimal("100000")
        assert march.closing == Decimal("103000")
        assert march.key == PeriodKey(2024, 3)
        assert march.start == date(2024, 3, 1)
        assert march.end == date(2024, 3, 31)
        assert len(march.weeks) == 4

    def test_emergency_fund_is_week_four_snapshot(self):
        weeks = _weeks(
            WeekBucket(2024, 3, 1, emergency_fund=Decimal("100")),
            WeekBucket(2024, 3, 2, emergency_fund=Decimal("200")),
            WeekBucket(2024, 3, 3, emergency_fund=Decimal("300")),
            WeekBucket(2024, 3, 4, emergency_fund=Decimal("400")),
        )
        (march,) = aggregate(weeks, "monthly")
        assert march.emergency_fund == Decimal("400")

    def test_missing_snapshot_week_is_zero(self):
        weeks = _weeks(
            WeekBucket(2024, 3, 1, emergency_fund=Decimal("100")),
            WeekBucket(2024, 3, 2, emergency_fund=Decimal("200")),
        )
        (march,) = aggregate(weeks, "monthly")
        assert march.emergency_fund == Decimal("0")

    def test_months_chain(self):
        weeks = _weeks(
            *(WeekBucket(2024, 1, w, income=Decimal("1")) for w in range(1, 5)),
            *(WeekBucket(2024, 2, w, expense=Decimal("2")) for w in range(1, 5)),
            start=10,
        )
        jan, feb = aggregate(weeks, Granularity.MONTHLY)
        assert jan.closing == Decimal("14")
        assert feb.opening == jan.closing
        assert feb.closing == Decimal("6")


class TestSemiMonthly:
    """Semi-monthly aggregation."""

    def test_halves(self, scenario_weeks):
        first, second = aggregate(scenario_weeks, Granularity.SEMI_MONTHLY)

        assert first.name == "2024年3月 上半月"
        assert first.sub_type is Half.FIRST
        assert first.income == Decimal("5000")
        assert first.expense == Decimal("2000")
        assert first.opening == Decimal("100000")
        assert first.closing == Decimal("103000")
        assert first.end == date(2024, 3, 14)

        assert second.name == "2024年3月 下半月"
        assert second.sub_type is Half.SECOND
        assert second.income == Decimal("0")
        assert second.opening == Decimal("103000")
        assert second.closing == Decimal("103000")
        assert second.start == date(2024, 3, 15)

    def test_snapshot_weeks(self):
        weeks = _weeks(
            WeekBucket(2024, 3, 1, emergency_fund=Decimal("100")),
            WeekBucket(2024, 3, 2, emergency_fund=Decimal("200")),
            WeekBucket(2024, 3, 3, emergency_fund=Decimal("300")),
            WeekBucket(2024, 3, 4, emergency_fund=Decimal("400")),
        )
        first, second = aggregate(weeks, "semi-monthly")
        assert first.emergency_fund == Decimal("200")
        assert second.emergency_fund == Decimal("400")

    def test_fund_is_not_summed(self):
        weeks = _weeks(
            WeekBucket(2024, 3, 1, emergency_fund=Decimal("100")),
            WeekBucket(2024, 3, 2),
        )
        (first,) = aggregate(weeks, "semi-monthly")
        assert first.emergency_fund == Decimal("0")


class TestWeekly:
    """Weekly aggregation promotes each week."""

    def test_one_period_per_week(self, scenario_weeks):
        periods = aggregate(scenario_weeks, Granularity.WEEKLY)

        assert [p.name for p in periods] == [w.name for w in scenario_weeks]
        assert periods[1].expense == Decimal("2000")
        assert periods[1].net == Decimal("-2000")
        assert periods[1].key == PeriodKey(2024, 3, week=2)
        assert periods[2].opening == periods[1].closing

    def test_weekly_fund_is_the_week_itself(self):
        weeks = _weeks(WeekBucket(2024, 3, 3, emergency_fund=Decimal("7")))
        (period,) = aggregate(weeks, Granularity.WEEKLY)
        assert period.emergency_fund == Decimal("7")


def test_empty_input():
    for granularity in Granularity:
        assert aggregate((), granularity) == ()


def test_unknown_granularity():
    from liquiditylab.core.errors import ConfigError

    with pytest.raises(ConfigError):
        aggregate((), "quarterly")


def test_period_key_of_date():
    day = date(2024, 3, 16)
    assert PeriodKey.of_date(day, Granularity.WEEKLY).name == "2024年3月 第3周"
    assert PeriodKey.of_date(day, Granularity.SEMI_MONTHLY).name == "2024年3月 下半月"
    assert PeriodKey.of_date(day, Granularity.MONTHLY).name == "2024年3月"


def test_aggregation_covers_full_ledger():
    ledger = Ledger.from_iterables(
        incomes=[
            Transaction(date(2024, 1, 3), Decimal("10")),
            Transaction(date(2024, 2, 27), Decimal("5")),
        ]
    )
    weeks = roll_balances(bucketize(ledger, date(2024, 1, 1)), 0)
    months = aggregate(weeks, Granularity.MONTHLY)
    halves = aggregate(weeks, Granularity.SEMI_MONTHLY)

    assert len(months) == 2
    assert len(halves) == 4
    assert sum(m.income for m in months) == Decimal("15")
    assert months[-1].closing == halves[-1].closing == weeks[-1].closing


def test_monthly_fund_ignores_earlier_weeks():
    weeks = _weeks(
        WeekBucket(2024, 3, 1, emergency_fund=Decimal("10")),
        WeekBucket(2024, 3, 2),
        WeekBucket(2024, 3, 3),
        WeekBucket(2024, 3, 4, emergency_fund=Decimal("20")),
    )
    (march,) = aggregate(weeks, Granularity.MONTHLY)
    assert march.emergency_fund == Decimal("20")
