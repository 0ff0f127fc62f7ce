"""
KPI calculation utilities for period tables.

Functions operate on the DataFrame returned by
:meth:`~liquiditylab.core.results.MonitorResults.to_frame` (or any frame with
the same column names) and return pandas Series aligned on its index.
"""

from __future__ import annotations

import numpy as np
import pandas as pd


def liquidity_runway(
    df: pd.DataFrame,
    lookback_periods: int = 4,
    closing_col: str = "closing",
    expense_col: str = "expense",
) -> pd.Series:
    """
    Calculate liquidity runway in periods.

    Liquidity runway = closing / rolling_average(expense, lookback_periods)

    Args:
        df: Period table
        lookback_periods: Number of periods to average expenses over
        closing_col: Column name for closing balance
        expense_col: Column name for expenses

    Returns:
        Series with runway in periods (inf where there are no expenses)
    """
    closing = df[closing_col]
    rolling_avg_expense = (
        df[expense_col].rolling(window=lookback_periods, min_periods=1).mean()
    )

    runway = np.where(
        rolling_avg_expense > 0,
        closing / rolling_avg_expense.where(rolling_avg_expense > 0, 1.0),
        np.inf,
    )

    return pd.Series(runway, index=df.index, name="liquidity_runway_periods")


def savings_rate(
    df: pd.DataFrame,
    income_col: str = "income",
    expense_col: str = "expense",
) -> pd.Series:
    """
    Calculate savings rate per period: (income - expense) / income.

    Returns:
        Series with savings rate (NaN where income <= 0)
    """
    income = df[income_col]
    expense = df[expense_col]

    rate = np.where(
        income > 0,
        (income - expense) / income.where(income > 0, 1.0),
        np.nan,
    )

    return pd.Series(rate, index=df.index, name="savings_rate")


def max_drawdown(series: pd.Series) -> float:
    """
    Largest relative drop of a balance series from its running peak.

    Returns a non-positive fraction (e.g. -0.25 for a 25% drop); 0.0 for an
    empty or never-declining series. Peaks at or below zero are ignored.
    """
    if series.empty:
        return 0.0
    running_max = series.expanding().max()
    drawdown = (series - running_max) / running_max.where(running_max > 0)
    worst = drawdown.min()
    return float(worst) if pd.notna(worst) else 0.0


def cumulative_net(df: pd.DataFrame, net_col: str = "net") -> pd.Series:
    """Running total of net flow across periods."""
    return df[net_col].cumsum().rename("cumulative_net")
