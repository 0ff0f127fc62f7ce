"""
Tests for anchor selection, window slicing and stepping.
"""

from datetime import date

import pytest
from liquiditylab.core.aggregation import aggregate
from liquiditylab.core.balance import roll_balances
from liquiditylab.core.buckets import WeekBucket
from liquiditylab.core.granularity import Direction, Granularity
from liquiditylab.core.navigation import (
    default_anchor,
    index_of,
    select_window,
    step_anchor,
)


@pytest.fixture()
def weekly_periods():
    """Eight weekly periods spanning March and April 2024."""
    buckets = [WeekBucket(2024, m, w) for m in (3, 4) for w in range(1, 5)]
    return aggregate(roll_balances(buckets, 0), Granularity.WEEKLY)


def _names(periods):
    return [p.name for p in periods]


class TestDefaultAnchor:
    """Initial anchor selection."""

    def test_period_containing_today(self, weekly_periods):
        anchor = default_anchor(weekly_periods, Granularity.WEEKLY, date(2024, 3, 10))
        assert anchor == "2024年3月 第2周"

    def test_falls_back_to_last_period(self, weekly_periods):
        anchor = default_anchor(weekly_periods, "weekly", date(2030, 1, 1))
        assert anchor == "2024年4月 第4周"

    def test_empty_sequence(self):
        assert default_anchor((), Granularity.MONTHLY, date(2024, 3, 1)) is None


class TestSelectWindow:
    """Bounded window slicing."""

    def test_window_starts_at_anchor(self, weekly_periods):
        window = select_window(weekly_periods, "2024年3月 第2周")
        assert _names(window) == _names(weekly_periods[1:5])

    def test_window_is_truncated_near_end(self, weekly_periods):
        window = select_window(weekly_periods, "2024年4月 第3周")
        assert _names(window) == ["2024年4月 第3周", "2024年4月 第4周"]

    def test_unknown_anchor_shows_last_periods(self, weekly_periods):
        window = select_window(weekly_periods, "2020年1月 第1周")
        assert _names(window) == _names(weekly_periods[-4:])

    def test_none_anchor_shows_last_periods(self, weekly_periods):
        assert _names(select_window(weekly_periods, None)) == _names(
            weekly_periods[-4:]
        )

    def test_short_sequence(self, weekly_periods):
        assert len(select_window(weekly_periods[:2], "missing")) == 2

    def test_custom_size(self, weekly_periods):
        assert len(select_window(weekly_periods, weekly_periods[0].name, size=6)) == 6

    def test_empty(self, weekly_periods):
        assert select_window((), "x") == ()
        assert select_window(weekly_periods, None, size=0) == ()


class TestStepAnchor:
    """Saturating anchor navigation."""

    def test_forward_and_backward(self, weekly_periods):
        anchor = weekly_periods[3].name
        assert step_anchor(weekly_periods, anchor, Direction.FORWARD) == (
            weekly_periods[4].name
        )
        assert step_anchor(weekly_periods, anchor, "backward") == (
            weekly_periods[2].name
        )

    def test_saturates_at_start(self, weekly_periods):
        first = weekly_periods[0].name
        assert step_anchor(weekly_periods, first, Direction.BACKWARD) == first

    def test_saturates_at_end(self, weekly_periods):
        last = weekly_periods[-1].name
        assert step_anchor(weekly_periods, last, Direction.FORWARD) == last

    def test_unknown_anchor_forward_selects_first(self, weekly_periods):
        first = weekly_periods[0].name
        assert step_anchor(weekly_periods, "nowhere", Direction.FORWARD) == first
        assert step_anchor(weekly_periods, None, "forward") == first

    def test_unknown_anchor_backward_unchanged(self, weekly_periods):
        assert step_anchor(weekly_periods, "nowhere", Direction.BACKWARD) == "nowhere"
        assert step_anchor(weekly_periods, None, Direction.BACKWARD) is None

    def test_unknown_anchor_without_periods(self):
        assert step_anchor((), "nowhere", Direction.FORWARD) == "nowhere"

    def test_invalid_direction(self, weekly_periods):
        with pytest.raises(ValueError):
            step_anchor(weekly_periods, weekly_periods[0].name, "sideways")


def test_index_of(weekly_periods):
    assert index_of(weekly_periods, weekly_periods[5].name) == 5
    assert index_of(weekly_periods, "missing") == -1
    assert index_of(weekly_periods, None) == -1
