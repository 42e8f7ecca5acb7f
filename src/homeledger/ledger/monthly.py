#!/usr/bin/env python3
"""
Monthly Ledgers

A MonthlyLedger is the date-sorted list of one kind of record for a month.
A MonthlyLedgerCollection holds at most one MonthlyLedger per month, sorted by
month, and carries the dirty flag deciding whether its year file is rewritten.
"""

import logging
from bisect import bisect_left, bisect_right
from collections.abc import Iterator
from typing import Generic, TypeVar

from ..core.dates import Month
from .records import Expense, Income

logger = logging.getLogger(__name__)

R = TypeVar("R", Expense, Income)


class MonthlyLedger(Generic[R]):
    """
    Records of one month, ascending by date.

    Records sharing a date keep their insertion order: push() places a new
    record after every record with the same date.
    """

    def __init__(self, month: Month = Month.JANUARY, records: list[R] | None = None):
        self.month = month
        self._records: list[R] = []
        for record in records or []:
            self.push(record)

    def push(self, record: R) -> int:
        """Insert keeping date order; returns the index the record landed at."""
        idx = bisect_right(self._records, record.date, key=lambda r: r.date)
        self._records.insert(idx, record)
        return idx

    def remove_at(self, index: int) -> R:
        return self._records.pop(index)

    def get_at(self, index: int) -> R | None:
        """Record at index, or None when out of range."""
        if not 0 <= index < len(self._records):
            return None
        return self._records[index]

    def resort_at(self, index: int) -> int:
        """Move the record at index to its place after its date was edited."""
        return self.push(self._records.pop(index))

    def merge(self, other: "MonthlyLedger[R]") -> None:
        """Push every record of other, one at a time, in other's order."""
        records, other._records = other._records, []
        for record in records:
            self.push(record)

    def records(self) -> list[R]:
        return list(self._records)

    def __iter__(self) -> Iterator[R]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> R:
        return self._records[index]

    def __repr__(self) -> str:
        return f"MonthlyLedger(month={self.month.display_name}, records={len(self._records)})"


class MonthlyLedgerCollection(Generic[R]):
    """
    Sparse, month-sorted set of MonthlyLedgers for one year and record kind.

    Any accessor that hands out something mutable marks the collection dirty,
    whether or not a change follows.
    """

    def __init__(self, changes: bool = False):
        self._changes = changes
        self._months: list[MonthlyLedger[R]] = []

    def _position(self, month: Month) -> tuple[int, bool]:
        idx = bisect_left(self._months, month, key=lambda m: m.month)
        found = idx < len(self._months) and self._months[idx].month == month
        return idx, found

    def has_changes(self) -> bool:
        return self._changes

    def set_changes(self, changes: bool) -> None:
        self._changes = changes

    def has(self, month: Month) -> bool:
        return self._position(month)[1]

    def get(self, month: Month) -> MonthlyLedger[R] | None:
        """Read-only lookup."""
        idx, found = self._position(month)
        return self._months[idx] if found else None

    def edit(self, month: Month) -> MonthlyLedger[R] | None:
        """Mutable lookup; marks the collection dirty when the month exists."""
        idx, found = self._position(month)
        if not found:
            return None
        self._changes = True
        return self._months[idx]

    def add(self, month: Month) -> MonthlyLedger[R]:
        """Get or create the ledger for month; marks the collection dirty."""
        self._changes = True
        idx, found = self._position(month)
        if not found:
            self._months.insert(idx, MonthlyLedger(month))
        return self._months[idx]

    def push(self, monthly: MonthlyLedger[R]) -> bool:
        """
        Adopt a whole MonthlyLedger if its month is absent.

        Returns False, leaving the collection as it was, when the month is
        already present.
        """
        self._changes = True
        idx, found = self._position(monthly.month)
        if found:
            logger.debug("Month %s already present, pushed ledger discarded", monthly.month.display_name)
            return False
        self._months.insert(idx, monthly)
        return True

    def merge(self, other: "MonthlyLedgerCollection[R]") -> None:
        """Adopt absent months wholesale and merge the rest record by record."""
        self._changes = True
        months, other._months = other._months, []
        for monthly in months:
            existing = self.get(monthly.month)
            if existing is None:
                self.push(monthly)
            else:
                existing.merge(monthly)

    def months(self) -> list[Month]:
        return [m.month for m in self._months]

    def iter_records(self) -> Iterator[R]:
        """All records of the year in date order."""
        for monthly in self._months:
            yield from monthly

    def record_count(self) -> int:
        return sum(len(m) for m in self._months)

    def __iter__(self) -> Iterator[MonthlyLedger[R]]:
        return iter(self._months)

    def __len__(self) -> int:
        return len(self._months)

    def __repr__(self) -> str:
        months = [m.display_name for m in self.months()]
        return f"MonthlyLedgerCollection(months={months!r}, changes={self._changes})"
