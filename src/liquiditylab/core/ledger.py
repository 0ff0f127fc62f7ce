"""
Normalized transaction records consumed by the pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable


@dataclass(frozen=True, slots=True)
class Transaction:
    """
    A single dated, categorized monetary movement.

    Attributes:
        date: Calendar date the transaction is attributed to
        amount: Signed, finite decimal amount
        category: Free-text category; only the income exclusion rule reads it
    """

    date: date
    amount: Decimal
    category: str = ""


@dataclass(frozen=True, slots=True)
class Ledger:
    """
    The three transaction series the pipeline consumes.

    The emergency fund is a separate series rather than a category filter:
    its entries are balance snapshots, not flows, and never touch income or
    expense sums.

    Attributes:
        incomes: Inflow transactions
        expenses: Outflow transactions (positive amounts reduce the balance)
        emergency_funds: Emergency-fund entries
    """

    incomes: tuple[Transaction, ...] = ()
    expenses: tuple[Transaction, ...] = ()
    emergency_funds: tuple[Transaction, ...] = ()

    @classmethod
    def from_iterables(
        cls,
        incomes: Iterable[Transaction] = (),
        expenses: Iterable[Transaction] = (),
        emergency_funds: Iterable[Transaction] = (),
    ) -> Ledger:
        return cls(tuple(incomes), tuple(expenses), tuple(emergency_funds))

    def all_dates(self) -> list[date]:
        """Dates across all three series combined."""
        return [
            tx.date
            for series in (self.incomes, self.expenses, self.emergency_funds)
            for tx in series
        ]

    def is_empty(self) -> bool:
        return not (self.incomes or self.expenses or self.emergency_funds)

    def __len__(self) -> int:
        return len(self.incomes) + len(self.expenses) + len(self.emergency_funds)
