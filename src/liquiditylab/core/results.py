"""
Results and output structures for LiquidityLab.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Sequence

import pandas as pd

from .aggregation import AggregatedPeriod, PeriodKey
from .balance import BalancedWeek
from .granularity import Direction, Granularity
from .highlight import HighlightPredicate, never_highlight
from .navigation import DEFAULT_WINDOW_SIZE, select_window, step_anchor

#: Column order of :meth:`MonitorResults.to_frame`.
PERIOD_COLUMNS = [
    "year",
    "month",
    "sub_type",
    "start",
    "end",
    "opening",
    "income",
    "expense",
    "net",
    "emergency_fund",
    "closing",
]

WEEK_COLUMNS = [
    "year",
    "month",
    "week",
    "start",
    "end",
    "opening",
    "income",
    "expense",
    "emergency_fund",
    "closing",
]


class MonitorResults:
    """
    Read-only view over one aggregation run, handed to presentation.

    Holds the full ordered period sequence (for charting and tabulation), the
    selected anchor and the bounded window derived from it. Navigation returns
    new views; nothing here mutates the underlying sequences.
    """

    def __init__(
        self,
        periods: Sequence[AggregatedPeriod],
        granularity: Granularity,
        anchor: str | None,
        today: date,
        weeks: Sequence[BalancedWeek] = (),
        window_size: int = DEFAULT_WINDOW_SIZE,
        highlight: HighlightPredicate | None = None,
    ):
        """
        Initialize the view.

        Args:
            periods: Aggregated periods in chronological order
            granularity: Granularity the periods were built with
            anchor: Name of the selected period (may be absent from periods)
            today: Reference date for "today" markers
            weeks: Underlying weekly timeline
            window_size: Maximum number of periods in the display window
            highlight: Optional presentation predicate for emphasized periods
        """
        self._periods = tuple(periods)
        self._granularity = granularity
        self._anchor = anchor
        self._today = today
        self._weeks = tuple(weeks)
        self._window_size = window_size
        self._highlight = highlight or never_highlight

    @property
    def periods(self) -> tuple[AggregatedPeriod, ...]:
        return self._periods

    @property
    def weeks(self) -> tuple[BalancedWeek, ...]:
        return self._weeks

    @property
    def granularity(self) -> Granularity:
        return self._granularity

    @property
    def anchor(self) -> str | None:
        return self._anchor

    @property
    def today(self) -> date:
        return self._today

    def window(self) -> tuple[AggregatedPeriod, ...]:
        """Periods to display as cards, starting at the anchor."""
        return select_window(self._periods, self._anchor, self._window_size)

    def with_anchor(self, anchor: str | None) -> MonitorResults:
        return MonitorResults(
            self._periods,
            self._granularity,
            anchor,
            self._today,
            weeks=self._weeks,
            window_size=self._window_size,
            highlight=self._highlight,
        )

    def step(self, direction: Direction | str) -> MonitorResults:
        """Move the anchor one period, saturating at both ends."""
        return self.with_anchor(step_anchor(self._periods, self._anchor, direction))

    # --- Presentation predicates ---------------------------------------------
    def is_selected(self, period: AggregatedPeriod) -> bool:
        return period.name == self._anchor

    def is_today(self, period: AggregatedPeriod) -> bool:
        return period.key == PeriodKey.of_date(self._today, self._granularity)

    def is_highlighted(self, period: AggregatedPeriod) -> bool:
        return self.is_selected(period) or self._highlight(period)

    # --- Tabular exports ---------------------------------------------------
    def to_frame(self) -> pd.DataFrame:
        """
        Period table as a DataFrame indexed by period name.

        Monetary columns are floats, which is what charting libraries expect;
        the exact Decimal values stay available on :attr:`periods`.
        """
        rows = [
            {
                "year": p.year,
                "month": p.month,
                "sub_type": p.sub_type.value if p.sub_type is not None else "",
                "start": p.start,
                "end": p.end,
                "opening": float(p.opening),
                "income": float(p.income),
                "expense": float(p.expense),
                "net": float(p.net),
                "emergency_fund": float(p.emergency_fund),
                "closing": float(p.closing),
            }
            for p in self._periods
        ]
        df = pd.DataFrame(
            rows, columns=PERIOD_COLUMNS, index=[p.name for p in self._periods]
        )
        df.index.name = "period"
        return df

    def weekly_frame(self) -> pd.DataFrame:
        """Weekly timeline as a DataFrame indexed by week name."""
        rows = [
            {
                "year": w.year,
                "month": w.month,
                "week": w.week,
                "start": w.start,
                "end": w.end,
                "opening": float(w.opening),
                "income": float(w.income),
                "expense": float(w.expense),
                "emergency_fund": float(w.emergency_fund),
                "closing": float(w.closing),
            }
            for w in self._weeks
        ]
        df = pd.DataFrame(rows, columns=WEEK_COLUMNS, index=[w.name for w in self._weeks])
        df.index.name = "week"
        return df

    # --- Introspection helpers -------------------------------------------------
    def summary(self) -> dict:
        """
        Lightweight summary for API/CLI usage.

        All values are JSON serializable.
        """
        periods = self._periods
        total_income = sum((p.income for p in periods), Decimal("0"))
        total_expense = sum((p.expense for p in periods), Decimal("0"))
        today_period = next((p.name for p in periods if self.is_today(p)), None)

        return {
            "type": "monitor_view",
            "granularity": self._granularity.value,
            "frame": {
                "rows": len(periods),
                "date_start": periods[0].start.isoformat() if periods else None,
                "date_end": periods[-1].end.isoformat() if periods else None,
            },
            "anchor": self._anchor,
            "window": [p.name for p in self.window()],
            "today_period": today_period,
            "kpis": {
                "opening_balance": float(periods[0].opening) if periods else None,
                "closing_balance": float(periods[-1].closing) if periods else None,
                "total_income": float(total_income),
                "total_expense": float(total_expense),
                "last_emergency_fund": (
                    float(periods[-1].emergency_fund) if periods else None
                ),
            },
        }
