"""
Monitor engine wiring the bucketing, balance, aggregation and navigation stages.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from functools import lru_cache
from typing import TYPE_CHECKING, Iterable

from .aggregation import AggregatedPeriod, aggregate
from .balance import BalancedWeek, roll_balances
from .buckets import DEFAULT_EXCLUDED_INCOME_MARKERS, bucketize
from .granularity import Granularity
from .highlight import HighlightPredicate
from .ledger import Ledger
from .navigation import DEFAULT_WINDOW_SIZE, default_anchor
from .results import MonitorResults

if TYPE_CHECKING:
    from ..config import MonitorConfig

logger = logging.getLogger(__name__)

#: Opening balance of the first week when no configuration overrides it.
DEFAULT_STARTING_BALANCE = Decimal("1016000")


def build_timeline(
    ledger: Ledger,
    starting_balance: Decimal,
    today: date,
    excluded_income_markers: tuple[str, ...] = DEFAULT_EXCLUDED_INCOME_MARKERS,
) -> tuple[BalancedWeek, ...]:
    """Bucketize ``ledger`` and roll the balance over the resulting weeks."""
    buckets = bucketize(ledger, today, excluded_income_markers)
    return roll_balances(buckets, starting_balance)


class LiquidityMonitor:
    """
    Pure pipeline from a ledger to navigable periods.

    The weekly timeline depends only on the ledger, the starting balance and
    today's date; it is cached per monitor and reused across granularity
    changes, which only re-run aggregation and anchor selection.

    Example:
        ```python
        from datetime import date
        from liquiditylab import LiquidityMonitor
        from liquiditylab.ingest import load_workbook

        monitor = LiquidityMonitor(starting_balance=100_000)
        monitor.load(load_workbook("ledger.xlsx"))
        view = monitor.run("monthly", today=date(2024, 3, 20))
        for period in view.window():
            print(period.name, period.closing)
        ```
    """

    def __init__(
        self,
        starting_balance: Decimal | int | str = DEFAULT_STARTING_BALANCE,
        *,
        excluded_income_markers: Iterable[str] = DEFAULT_EXCLUDED_INCOME_MARKERS,
        window_size: int = DEFAULT_WINDOW_SIZE,
        highlight: HighlightPredicate | None = None,
        cache_size: int = 8,
    ):
        self.starting_balance = Decimal(str(starting_balance))
        self.excluded_income_markers = tuple(excluded_income_markers)
        self.window_size = window_size
        self.highlight = highlight
        self._ledger = Ledger()
        self._timeline = lru_cache(maxsize=cache_size)(build_timeline)
        self._aggregate = lru_cache(maxsize=cache_size)(aggregate)

    @classmethod
    def from_config(cls, config: MonitorConfig) -> LiquidityMonitor:
        return cls(
            config.starting_balance,
            excluded_income_markers=config.excluded_income_markers,
            window_size=config.window_size,
            highlight=config.highlight,
        )

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    def load(self, ledger: Ledger) -> LiquidityMonitor:
        """Replace the current ledger; later loads supersede earlier ones."""
        self._ledger = ledger
        logger.debug("Loaded ledger with %d transactions", len(ledger))
        return self

    def weeks(self, today: date | None = None) -> tuple[BalancedWeek, ...]:
        """Gap-free weekly timeline with rolling balances."""
        return self._timeline(
            self._ledger,
            self.starting_balance,
            today or date.today(),
            self.excluded_income_markers,
        )

    def periods(
        self, granularity: Granularity | str, today: date | None = None
    ) -> tuple[AggregatedPeriod, ...]:
        """Aggregated periods for ``granularity``."""
        return self._aggregate(self.weeks(today), Granularity.parse(granularity))

    def run(
        self,
        granularity: Granularity | str = Granularity.WEEKLY,
        anchor: str | None = None,
        today: date | None = None,
    ) -> MonitorResults:
        """
        Compute the full view for ``granularity``.

        Args:
            granularity: Period resolution
            anchor: Selected period name; the default anchor is used when
                omitted
            today: Reference date (defaults to the current date)

        Returns:
            MonitorResults with periods, anchor and window
        """
        today = today or date.today()
        granularity = Granularity.parse(granularity)
        weeks = self.weeks(today)
        periods = self._aggregate(weeks, granularity)
        if anchor is None:
            anchor = default_anchor(periods, granularity, today)
        logger.debug(
            "Computed %d %s periods from %d weeks (anchor=%s)",
            len(periods),
            granularity.value,
            len(weeks),
            anchor,
        )
        return MonitorResults(
            periods,
            granularity,
            anchor,
            today,
            weeks=weeks,
            window_size=self.window_size,
            highlight=self.highlight,
        )

    def cache_info(self) -> dict:
        return {
            "timeline": self._timeline.cache_info()._asdict(),
            "aggregate": self._aggregate.cache_info()._asdict(),
        }
