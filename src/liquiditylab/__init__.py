"""
LiquidityLab - Rolling balance and period monitor for transaction ledgers

LiquidityLab turns dated income, expense and emergency-fund records into a
gap-free weekly timeline with a rolling balance, folds it into semi-monthly
or monthly periods, and selects a bounded window of periods for display.

Pipeline Overview:
- **Ledger Normalizer** (``liquiditylab.ingest``): workbook rows to transactions
- **Week Bucketizer**: four fixed week buckets per month, no gaps
- **Rolling Balance Calculator**: opening/closing threaded across every week
- **Period Aggregator**: flows summed, emergency fund taken as a snapshot
- **Window Navigator**: default anchor, bounded window, saturating steps

Quick Start:
    ```python
    from datetime import date
    from decimal import Decimal
    from liquiditylab import Ledger, LiquidityMonitor, Transaction

    ledger = Ledger.from_iterables(
        incomes=[Transaction(date(2024, 3, 5), Decimal("5000"), "工资")],
        expenses=[Transaction(date(2024, 3, 10), Decimal("2000"), "房租")],
    )
    monitor = LiquidityMonitor(starting_balance=100_000).load(ledger)
    view = monitor.run("monthly", today=date(2024, 3, 20))
    print(view.window()[0].closing)  # Decimal('103000')
    ```
"""

# Version information
__version__ = "0.1.0"
__author__ = "LiquidityLab Team"
__description__ = "Rolling balance and period monitor for transaction ledgers"

from .config import MonitorConfig, WorkbookLayout, load_config
from .core import (
    DEFAULT_STARTING_BALANCE,
    AggregatedPeriod,
    BalancedWeek,
    ConfigError,
    DateRangeHighlight,
    Direction,
    Granularity,
    Half,
    IngestError,
    Ledger,
    LiquidityMonitor,
    MonitorResults,
    PeriodKey,
    Transaction,
    WeekBucket,
    WeekKey,
    aggregate,
    bucketize,
    default_anchor,
    roll_balances,
    select_window,
    step_anchor,
)
from .ingest import load_workbook, normalize_rows

# Import KPI utilities
from .kpi import cumulative_net, liquidity_runway, max_drawdown, savings_rate

# Import chart functions (calling them requires plotly)
from .charts import PLOTLY_AVAILABLE as CHARTS_AVAILABLE
from .charts import closing_balance_area, save_chart

__all__ = [
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
    # Pipeline stages
    "bucketize",
    "roll_balances",
    "aggregate",
    "default_anchor",
    "select_window",
    "step_anchor",
    # Monitor
    "LiquidityMonitor",
    "MonitorResults",
    "DateRangeHighlight",
    "DEFAULT_STARTING_BALANCE",
    # Config and ingest
    "MonitorConfig",
    "WorkbookLayout",
    "load_config",
    "load_workbook",
    "normalize_rows",
    # Errors
    "ConfigError",
    "IngestError",
    # KPI utilities
    "cumulative_net",
    "liquidity_runway",
    "max_drawdown",
    "savings_rate",
    # Charts
    "CHARTS_AVAILABLE",
    "closing_balance_area",
    "save_chart",
    # Version info
    "__version__",
    "__author__",
    "__description__",
]
