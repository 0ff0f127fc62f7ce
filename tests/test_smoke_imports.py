"""
Smoke tests to verify basic imports and functionality.
"""

from datetime import date
from decimal import Decimal


def test_import_liquiditylab():
    """Test that we can import the main package."""
    import liquiditylab

    assert hasattr(liquiditylab, "__version__")
    assert liquiditylab.__version__ == "0.1.0"


def test_public_api_exports():
    """Test that everything listed in __all__ is importable."""
    import liquiditylab

    for name in liquiditylab.__all__:
        assert hasattr(liquiditylab, name), name


def test_quick_start():
    """Test the quick start from the package docstring."""
    from liquiditylab import Ledger, LiquidityMonitor, Transaction

    ledger = Ledger.from_iterables(
        incomes=[Transaction(date(2024, 3, 5), Decimal("5000"), "工资")],
        expenses=[Transaction(date(2024, 3, 10), Decimal("2000"), "房租")],
    )
    monitor = LiquidityMonitor(starting_balance=100_000).load(ledger)
    view = monitor.run("monthly", today=date(2024, 3, 20))
    assert view.window()[0].closing == Decimal("103000")
