"""
Core module for LiquidityLab.

This module contains the pipeline stages: week bucketing, rolling balances,
period aggregation and window navigation, plus the monitor that wires them.
"""

from .aggregation import AggregatedPeriod, PeriodKey, aggregate
from .balance import BalancedWeek, roll_balances
from .buckets import (
    DEFAULT_EXCLUDED_INCOME_MARKERS,
    WeekBucket,
    WeekKey,
    bucketize,
    is_excluded_income,
)
from .errors import ConfigError, IngestError
from .granularity import Direction, Granularity, Half
from .highlight import DateRangeHighlight, HighlightPredicate
from .ledger import Ledger, Transaction
from .monitor import DEFAULT_STARTING_BALANCE, LiquidityMonitor, build_timeline
from .navigation import (
    DEFAULT_WINDOW_SIZE,
    default_anchor,
    select_window,
    step_anchor,
)
from .results import MonitorResults
from .utils import month_range, week_of_month

__all__ = [
    # Errors
    "ConfigError",
    "IngestError",
    # Records
    "Transaction",
    "Ledger",
    "WeekKey",
    "WeekBucket",
    "BalancedWeek",
    "PeriodKey",
    "AggregatedPeriod",
    # Enums
    "Granularity",
    "Half",
    "Direction",
    # Stages
    "bucketize",
    "is_excluded_income",
    "roll_balances",
    "aggregate",
    "default_anchor",
    "select_window",
    "step_anchor",
    # Monitor and results
    "LiquidityMonitor",
    "MonitorResults",
    "build_timeline",
    "DateRangeHighlight",
    "HighlightPredicate",
    # Constants
    "DEFAULT_EXCLUDED_INCOME_MARKERS",
    "DEFAULT_STARTING_BALANCE",
    "DEFAULT_WINDOW_SIZE",
    # Utils
    "month_range",
    "week_of_month",
]
