"""
Calendar utility functions for LiquidityLab.
"""

from __future__ import annotations

import calendar
from datetime import date

import numpy as np

#: Number of week buckets in every month.
WEEKS_PER_MONTH = 4


def month_range(start: date, months: int) -> np.ndarray:
    """
    Generate a range of monthly dates starting from a given date.

    **Args:**
        start: The starting date for the range (only year and month are used)
        months: Number of months to generate

    **Returns:**
        A numpy array of datetime64[M] objects representing monthly intervals

    **Example:**
        ```python
        from datetime import date
        from liquiditylab.core.utils import month_range

        months = month_range(date(2024, 11, 20), 3)
        print(months)
        # Output: ['2024-11' '2024-12' '2025-01']
        ```
    """
    s = np.datetime64(start, "M")
    return s + np.arange(months).astype("timedelta64[M]")


def months_between(start: date, end: date) -> int:
    """
    Count calendar months from ``start`` to ``end``, both months included.

    Returns 0 when ``end`` lies in a month before ``start``.
    """
    span = (end.year - start.year) * 12 + (end.month - start.month) + 1
    return max(span, 0)


def year_month(month: np.datetime64) -> tuple[int, int]:
    """Split a datetime64[M] value into ``(year, month)``."""
    months_since_epoch = int(month.astype("datetime64[M]").astype(int))
    year, month_idx = divmod(months_since_epoch, 12)
    return 1970 + year, month_idx + 1


def week_of_month(day: int) -> int:
    """
    Map a day of month to its week bucket.

    Days 1-7 -> 1, 8-14 -> 2, 15-21 -> 3, 22 and later -> 4. Week 4 therefore
    spans 7 to 10 days depending on the month length.
    """
    if day <= 7:
        return 1
    if day <= 14:
        return 2
    if day <= 21:
        return 3
    return 4


def week_bounds(year: int, month: int, week: int) -> tuple[date, date]:
    """Return the first and last calendar day covered by a week bucket."""
    first_day = 7 * (week - 1) + 1
    if week >= WEEKS_PER_MONTH:
        last_day = calendar.monthrange(year, month)[1]
    else:
        last_day = 7 * week
    return date(year, month, first_day), date(year, month, last_day)
