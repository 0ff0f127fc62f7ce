"""
Display labels for weeks and aggregated periods.

Labels are presentational only. Matching between stages uses structured keys
(:class:`~liquiditylab.core.buckets.WeekKey`,
:class:`~liquiditylab.core.aggregation.PeriodKey`), never these strings.
"""

from __future__ import annotations

from .granularity import Half


def week_label(year: int, month: int, week: int) -> str:
    return f"{year}年{month}月 第{week}周"


def half_label(year: int, month: int, half: Half) -> str:
    return f"{year}年{month}月 {half.label}"


def month_label(year: int, month: int) -> str:
    return f"{year}年{month}月"
