"""
Highlight predicates supplied by the presentation layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Protocol

from .aggregation import AggregatedPeriod


class HighlightPredicate(Protocol):
    """Callable deciding whether a period gets emphasized styling."""

    def __call__(self, period: AggregatedPeriod) -> bool: ...


@dataclass(frozen=True, slots=True)
class DateRangeHighlight:
    """
    Highlight periods whose whole calendar span lies within ``start``..``end``.

    Example:
        A range of 2026-01-22..2026-02-21 highlights the weekly periods
        ``2026年1月 第4周`` through ``2026年2月 第3周`` and no monthly period.
    """

    start: date
    end: date

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(
                f"Highlight range end {self.end} precedes start {self.start}"
            )

    def __call__(self, period: AggregatedPeriod) -> bool:
        return self.start <= period.start and period.end <= self.end


def never_highlight(period: AggregatedPeriod) -> bool:
    return False
