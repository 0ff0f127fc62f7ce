"""
Anchor selection and bounded display windows over aggregated periods.
"""

from __future__ import annotations

from datetime import date
from typing import Sequence

from .aggregation import AggregatedPeriod, PeriodKey
from .granularity import Direction, Granularity

#: Number of periods shown side by side.
DEFAULT_WINDOW_SIZE = 4


def index_of(periods: Sequence[AggregatedPeriod], anchor: str | None) -> int:
    """Position of the period named ``anchor``, or -1."""
    if anchor is None:
        return -1
    for idx, period in enumerate(periods):
        if period.name == anchor:
            return idx
    return -1


def default_anchor(
    periods: Sequence[AggregatedPeriod],
    granularity: Granularity | str,
    today: date,
) -> str | None:
    """
    Pick the initial anchor.

    The period containing ``today`` is chosen when it exists; otherwise the
    chronologically last period. Returns ``None`` for an empty sequence.
    """
    if not periods:
        return None
    todays_key = PeriodKey.of_date(today, Granularity.parse(granularity))
    for period in periods:
        if period.key == todays_key:
            return period.name
    return periods[-1].name


def select_window(
    periods: Sequence[AggregatedPeriod],
    anchor: str | None,
    size: int = DEFAULT_WINDOW_SIZE,
) -> tuple[AggregatedPeriod, ...]:
    """
    Bounded slice of periods to display.

    Starts at the anchor and holds at most ``size`` periods (fewer near the
    end of the sequence). An unknown anchor yields the last ``size`` periods.
    """
    if size < 1 or not periods:
        return ()
    idx = index_of(periods, anchor)
    if idx == -1:
        return tuple(periods[-size:])
    return tuple(periods[idx : idx + size])


def step_anchor(
    periods: Sequence[AggregatedPeriod],
    anchor: str | None,
    direction: Direction | str,
) -> str | None:
    """
    Move the anchor one period backward or forward.

    Saturates at both ends of the sequence. From an anchor that is not
    present, a forward step selects the first period and a backward step
    leaves the anchor unchanged.
    """
    if not isinstance(direction, Direction):
        direction = Direction(direction)
    idx = index_of(periods, anchor)
    if idx == -1:
        if direction is Direction.FORWARD and periods:
            return periods[0].name
        return anchor
    target = min(max(idx + direction.offset, 0), len(periods) - 1)
    return periods[target].name
