"""
Chart functions for visualizing period tables.

All chart functions return (figure, tidy_dataframe_used) for consistency.
"""

from __future__ import annotations

import pandas as pd

# Plotly imports with graceful fallback
try:
    import plotly.graph_objects as go

    PLOTLY_AVAILABLE = True
except ImportError:
    PLOTLY_AVAILABLE = False


def _check_plotly() -> None:
    """Check if Plotly is available and raise helpful error if not."""
    if not PLOTLY_AVAILABLE:
        raise ImportError(
            "Plotly is required for chart functions. Install with:\n"
            "pip install plotly\n"
            "or\n"
            "pip install 'liquiditylab[viz]'"
        )


def closing_balance_area(
    df: pd.DataFrame, title: str = "资金存量滚动全景", unit: float = 10_000
) -> tuple[go.Figure, pd.DataFrame]:
    """
    Plot closing balances of every period as a filled area.

    **Args:**
        df: Period table from ``MonitorResults.to_frame()``
        title: Chart title
        unit: Divisor for the y axis (10,000 = 万)

    **Returns:**
        Tuple of (plotly_figure, tidy_dataframe_used)

    **Example:**
        ```python
        from liquiditylab.charts import closing_balance_area

        view = monitor.run("semi-monthly")
        fig, data = closing_balance_area(view.to_frame())
        fig.write_html("closing.html")
        ```
    """
    _check_plotly()

    tidy = df.reset_index()[["period", "closing"]].copy()
    tidy["closing_scaled"] = tidy["closing"] / unit

    fig = go.Figure(
        go.Scatter(
            x=tidy["period"],
            y=tidy["closing_scaled"],
            mode="lines+markers",
            fill="tozeroy",
            name="存量结余",
            line={"color": "#6366f1", "width": 4},
            marker={"size": 6},
        )
    )
    fig.update_layout(
        title=title,
        xaxis_title="Period",
        yaxis_title="Closing (万)" if unit == 10_000 else "Closing",
        showlegend=False,
    )
    # long timelines get unreadable tick labels
    if len(tidy) > 20:
        fig.update_xaxes(showticklabels=False)

    return fig, tidy


def save_chart(fig: go.Figure, path: str) -> None:
    """Write a figure to HTML (or an image format when kaleido is installed)."""
    _check_plotly()
    if str(path).lower().endswith(".html"):
        fig.write_html(path)
    else:
        fig.write_image(path)
