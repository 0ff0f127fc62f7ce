"""
Command-line interface for LiquidityLab.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date

from liquiditylab import __version__
from liquiditylab.config import MonitorConfig, load_config
from liquiditylab.core.aggregation import AggregatedPeriod
from liquiditylab.core.granularity import Direction, Granularity
from liquiditylab.core.monitor import LiquidityMonitor
from liquiditylab.core.results import MonitorResults
from liquiditylab.ingest import load_workbook

EXAMPLE_CONFIG = """\
# LiquidityLab monitor configuration
starting_balance: 1016000
currency: CNY
granularity: weekly        # weekly | semi-monthly | monthly
window_size: 4
excluded_income_markers: ["期初余额", "现金备用"]
workbook:
  income_sheet: 收入明细
  expense_sheet: 支出明细
  emergency_fund_sheet: 紧急备用金
  date_column: 2           # C
  category_column: 4       # E
  amount_column: 8         # I
  default_category: 未分类
highlight:
  start: 2026-01-22
  end: 2026-02-21
"""


def _fmt_amount(value) -> str:
    return f"{float(value):,.0f}"


def _build_view(args) -> tuple[MonitorConfig, MonitorResults]:
    """Load config and workbook, then run the monitor for the requested view."""
    config = load_config(args.config) if args.config else load_config()
    ledger = load_workbook(args.input, config.workbook)
    monitor = LiquidityMonitor.from_config(config).load(ledger)
    granularity = (
        Granularity.parse(args.granularity) if args.granularity else config.granularity
    )
    today = date.fromisoformat(args.today) if args.today else None
    view = monitor.run(granularity, anchor=getattr(args, "anchor", None), today=today)
    return config, view


def _period_flags(view: MonitorResults, period: AggregatedPeriod) -> str:
    flags = []
    if view.is_selected(period):
        flags.append("*")
    if view.is_today(period):
        flags.append("today")
    if view.is_highlighted(period) and not view.is_selected(period):
        flags.append("hl")
    if period.emergency_fund > 0:
        flags.append("fund")
    return ",".join(flags)


def _print_table(view: MonitorResults, periods, currency: str) -> None:
    """Print periods as an aligned text table."""
    header = (
        f"{'Period':<20} {'Opening':>14} {'Income':>12} {'Expense':>12} "
        f"{'Fund':>12} {'Closing':>14}  Flags"
    )
    print(f"{header}\n{'-' * len(header)}")
    for p in periods:
        print(
            f"{p.name:<20} {_fmt_amount(p.opening):>14} {_fmt_amount(p.income):>12} "
            f"{_fmt_amount(p.expense):>12} {_fmt_amount(p.emergency_fund):>12} "
            f"{_fmt_amount(p.closing):>14}  {_period_flags(view, p)}"
        )
    print(f"({len(periods)} periods, amounts in {currency})")


def _frame_records(view: MonitorResults, periods) -> list[dict]:
    names = {p.name for p in periods}
    df = view.to_frame()
    df = df[df.index.isin(names)].copy()
    df["start"] = df["start"].map(date.isoformat)
    df["end"] = df["end"].map(date.isoformat)
    return df.reset_index().to_dict("records")


def cmd_example(_) -> int:
    """Print an example configuration file."""
    sys.stdout.write(EXAMPLE_CONFIG)
    return 0


def cmd_periods(args) -> int:
    """Print the full aggregated period table."""
    try:
        config, view = _build_view(args)
        if args.json:
            json.dump(
                _frame_records(view, view.periods),
                sys.stdout,
                indent=2,
                ensure_ascii=False,
            )
            sys.stdout.write("\n")
        else:
            _print_table(view, view.periods, config.currency)
        return 0

    except Exception as e:
        print(f"Error computing periods: {e}", file=sys.stderr)
        return 1


def cmd_window(args) -> int:
    """Print the bounded window around the anchor after optional steps."""
    try:
        config, view = _build_view(args)
        for step in args.step or []:
            view = view.step(Direction(step))

        if args.json:
            output = {
                "anchor": view.anchor,
                "granularity": view.granularity.value,
                "window": _frame_records(view, view.window()),
            }
            json.dump(output, sys.stdout, indent=2, ensure_ascii=False)
            sys.stdout.write("\n")
        else:
            print(f"Anchor: {view.anchor}")
            _print_table(view, view.window(), config.currency)
        return 0

    except Exception as e:
        print(f"Error computing window: {e}", file=sys.stderr)
        return 1


def cmd_summary(args) -> int:
    """Print the JSON summary of the view."""
    try:
        _, view = _build_view(args)
        json.dump(view.summary(), sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
        return 0

    except Exception as e:
        print(f"Error building summary: {e}", file=sys.stderr)
        return 1


def cmd_chart(args) -> int:
    """Write the closing-balance chart."""
    try:
        from liquiditylab.charts import closing_balance_area, save_chart

        _, view = _build_view(args)
        fig, _ = closing_balance_area(view.to_frame())
        save_chart(fig, args.output)
        print(f"Chart saved to {args.output}")
        return 0

    except Exception as e:
        print(f"Error writing chart: {e}", file=sys.stderr)
        return 1


def _add_view_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-i", "--input", required=True, help="Input workbook (.xlsx)")
    parser.add_argument("-c", "--config", help="Configuration file (YAML or JSON)")
    parser.add_argument(
        "--granularity",
        choices=[g.value for g in Granularity],
        help="Period granularity (default: from config, else weekly)",
    )
    parser.add_argument(
        "--today", help="Reference date (YYYY-MM-DD, default: current date)"
    )


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="liquidity",
        description="LiquidityLab - Rolling balance and period monitor",
    )

    parser.add_argument(
        "--version", action="version", version=f"LiquidityLab {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Increase log verbosity"
    )

    subparsers = parser.add_subparsers(
        dest="cmd", required=True, help="Available commands"
    )

    # Example command
    example_parser = subparsers.add_parser(
        "example", help="Print an example configuration file"
    )
    example_parser.set_defaults(func=cmd_example)

    # Periods command
    periods_parser = subparsers.add_parser(
        "periods", help="Print every aggregated period"
    )
    _add_view_arguments(periods_parser)
    periods_parser.add_argument(
        "--json", action="store_true", help="Output in JSON format"
    )
    periods_parser.set_defaults(func=cmd_periods)

    # Window command
    window_parser = subparsers.add_parser(
        "window", help="Print the display window around an anchor period"
    )
    _add_view_arguments(window_parser)
    window_parser.add_argument(
        "--anchor", help="Anchor period name (default: period containing today)"
    )
    window_parser.add_argument(
        "--step",
        action="append",
        choices=[d.value for d in Direction],
        help="Move the anchor one period (repeatable)",
    )
    window_parser.add_argument(
        "--json", action="store_true", help="Output in JSON format"
    )
    window_parser.set_defaults(func=cmd_window)

    # Summary command
    summary_parser = subparsers.add_parser("summary", help="Print a JSON summary")
    _add_view_arguments(summary_parser)
    summary_parser.set_defaults(func=cmd_summary)

    # Chart command
    chart_parser = subparsers.add_parser(
        "chart", help="Write the closing-balance chart (requires plotly)"
    )
    _add_view_arguments(chart_parser)
    chart_parser.add_argument(
        "-o", "--output", required=True, help="Output file (.html or image)"
    )
    chart_parser.set_defaults(func=cmd_chart)

    # Parse arguments and execute
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose > 1 else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
        )
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
