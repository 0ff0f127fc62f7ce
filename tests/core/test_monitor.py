"""
Tests for the LiquidityMonitor pipeline.
"""

from datetime import date
from decimal import Decimal

import pytest
from liquiditylab.config import load_config
from liquiditylab.core.granularity import Granularity
from liquiditylab.core.highlight import DateRangeHighlight
from liquiditylab.core.ledger import Ledger, Transaction
from liquiditylab.core.monitor import (
    DEFAULT_STARTING_BALANCE,
    LiquidityMonitor,
    build_timeline,
)

TODAY = date(2024, 3, 20)


@pytest.fixture()
def monitor(scenario_ledger):
    return LiquidityMonitor(starting_balance=100_000).load(scenario_ledger)


class TestLiquidityMonitor:
    """End-to-end monitor runs."""

    def test_default_starting_balance(self):
        assert LiquidityMonitor().starting_balance == DEFAULT_STARTING_BALANCE
        assert DEFAULT_STARTING_BALANCE == Decimal("1016000")

    def test_weekly_run(self, monitor):
        view = monitor.run(today=TODAY)

        assert view.granularity is Granularity.WEEKLY
        assert len(view.periods) == 4
        assert view.anchor == "2024年3月 第3周"
        assert [p.name for p in view.window()] == [
            "2024年3月 第3周",
            "2024年3月 第4周",
        ]

    def test_monthly_run(self, monitor):
        view = monitor.run("monthly", today=TODAY)
        (march,) = view.periods

        assert view.anchor == "2024年3月"
        assert march.income == Decimal("5000")
        assert march.expense == Decimal("2000")
        assert march.opening == Decimal("100000")
        assert march.closing == Decimal("103000")

    def test_explicit_anchor(self, monitor):
        view = monitor.run("weekly", anchor="2024年3月 第1周", today=TODAY)
        assert len(view.window()) == 4

    def test_empty_ledger(self):
        view = LiquidityMonitor().run("semi-monthly", today=TODAY)
        assert view.periods == ()
        assert view.anchor is None
        assert view.window() == ()

    def test_load_replaces_ledger(self, monitor):
        other = Ledger.from_iterables(
            incomes=[Transaction(date(2024, 3, 1), Decimal("1"))]
        )
        monitor.load(other)
        assert monitor.ledger is other
        (march,) = monitor.periods("monthly", today=TODAY)
        assert march.income == Decimal("1")

    def test_granularity_switch_reuses_timeline(self, monitor):
        monitor.run("weekly", today=TODAY)
        monitor.run("monthly", today=TODAY)
        monitor.run("semi-monthly", today=TODAY)
        monitor.run("monthly", today=TODAY)

        info = monitor.cache_info()
        assert info["timeline"]["misses"] == 1
        assert info["timeline"]["hits"] == 3
        assert info["aggregate"]["misses"] == 3
        assert info["aggregate"]["hits"] == 1

    def test_weeks_match_build_timeline(self, monitor, scenario_ledger):
        expected = build_timeline(scenario_ledger, Decimal("100000"), TODAY)
        assert monitor.weeks(TODAY) == expected

    def test_excluded_markers_are_configurable(self):
        ledger = Ledger.from_iterables(
            incomes=[Transaction(date(2024, 3, 1), Decimal("9"), "期初余额")]
        )
        monitor = LiquidityMonitor(0, excluded_income_markers=()).load(ledger)
        (march,) = monitor.periods("monthly", today=TODAY)
        assert march.income == Decimal("9")

    def test_from_config(self, scenario_ledger):
        config = load_config(
            {
                "starting_balance": 50,
                "window_size": 2,
                "highlight": {"start": "2024-03-01", "end": "2024-03-14"},
            }
        )
        monitor = LiquidityMonitor.from_config(config).load(scenario_ledger)
        view = monitor.run("weekly", anchor="2024年3月 第1周", today=TODAY)

        assert monitor.starting_balance == Decimal("50")
        assert isinstance(monitor.highlight, DateRangeHighlight)
        assert len(view.window()) == 2
        assert view.periods[-1].closing == Decimal("3050")
