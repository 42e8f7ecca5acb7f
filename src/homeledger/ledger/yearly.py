#!/usr/bin/env python3
"""
Yearly Ledger

All expenses and incomes of one year. Ordering and equality are defined by
the year number alone, so a YearlyLedger also compares against a bare int.
"""

from collections.abc import Iterator

from .monthly import MonthlyLedgerCollection
from .records import Expense, Income, Record, RecordKind


class YearlyLedger:
    """One year's expense and income collections."""

    def __init__(self, year: int, changes: bool = True):
        self.year = year
        self._expenses: MonthlyLedgerCollection[Expense] = MonthlyLedgerCollection(changes)
        self._incomes: MonthlyLedgerCollection[Income] = MonthlyLedgerCollection(changes)

    @property
    def expenses(self) -> MonthlyLedgerCollection[Expense]:
        return self._expenses

    @property
    def incomes(self) -> MonthlyLedgerCollection[Income]:
        return self._incomes

    def edit_expenses(self) -> MonthlyLedgerCollection[Expense]:
        """Mutable access; marks the expense collection dirty."""
        self._expenses.set_changes(True)
        return self._expenses

    def edit_incomes(self) -> MonthlyLedgerCollection[Income]:
        """Mutable access; marks the income collection dirty."""
        self._incomes.set_changes(True)
        return self._incomes

    def collection(self, kind: RecordKind) -> MonthlyLedgerCollection:
        return self._expenses if kind is RecordKind.EXPENSE else self._incomes

    def edit_collection(self, kind: RecordKind) -> MonthlyLedgerCollection:
        return self.edit_expenses() if kind is RecordKind.EXPENSE else self.edit_incomes()

    def iter_records(self, kind: RecordKind) -> Iterator[Record]:
        return self.collection(kind).iter_records()

    def merge(self, other: "YearlyLedger") -> None:
        """Merge both of other's collections into this year's."""
        self._expenses.merge(other._expenses)
        self._incomes.merge(other._incomes)

    def has_changes(self) -> bool:
        return self._expenses.has_changes() or self._incomes.has_changes()

    def set_changes(self, changes: bool) -> None:
        self._expenses.set_changes(changes)
        self._incomes.set_changes(changes)

    @staticmethod
    def _year_of(other: object) -> int | None:
        if isinstance(other, YearlyLedger):
            return other.year
        if isinstance(other, int) and not isinstance(other, bool):
            return other
        return None

    def __eq__(self, other: object) -> bool:
        year = self._year_of(other)
        if year is None:
            return NotImplemented
        return self.year == year

    def __lt__(self, other: object) -> bool:
        year = self._year_of(other)
        if year is None:
            return NotImplemented
        return self.year < year

    def __le__(self, other: object) -> bool:
        year = self._year_of(other)
        if year is None:
            return NotImplemented
        return self.year <= year

    def __gt__(self, other: object) -> bool:
        year = self._year_of(other)
        if year is None:
            return NotImplemented
        return self.year > year

    def __ge__(self, other: object) -> bool:
        year = self._year_of(other)
        if year is None:
            return NotImplemented
        return self.year >= year

    def __hash__(self) -> int:
        return hash(self.year)

    def __repr__(self) -> str:
        return f"YearlyLedger(year={self.year}, expenses={self._expenses!r}, incomes={self._incomes!r})"
