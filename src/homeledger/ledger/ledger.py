#!/usr/bin/env python3
"""
Ledger

The complete in-memory store: yearly ledgers sorted by year, the cached
year bounds used to reject lookups early, and the expense and income
taxonomies.
"""

import logging
from bisect import bisect_left
from collections.abc import Iterator

from ..concepts.taxonomy import ConceptTaxonomy
from ..core.dates import Month
from .monthly import MonthlyLedger
from .records import RecordKind
from .yearly import YearlyLedger

logger = logging.getLogger(__name__)


class Ledger:
    """
    Year-sorted collection of YearlyLedgers plus both taxonomies.

    min_year and max_year are None while the ledger is empty. Years are never
    removed, so the bounds only widen.
    """

    def __init__(self):
        self.min_year: int | None = None
        self.max_year: int | None = None
        self.expense_concepts = ConceptTaxonomy()
        self.income_concepts = ConceptTaxonomy()
        self._years: list[YearlyLedger] = []

    def _position(self, year: int) -> tuple[int, bool]:
        idx = bisect_left(self._years, year, key=lambda y: y.year)
        found = idx < len(self._years) and self._years[idx].year == year
        return idx, found

    def _widen_bounds(self, year: int) -> None:
        if self.min_year is None or year < self.min_year:
            self.min_year = year
        if self.max_year is None or year > self.max_year:
            self.max_year = year

    def _in_bounds(self, year: int) -> bool:
        if self.min_year is None or self.max_year is None:
            return False
        return self.min_year <= year <= self.max_year

    def concepts(self, kind: RecordKind) -> ConceptTaxonomy:
        return self.expense_concepts if kind is RecordKind.EXPENSE else self.income_concepts

    def has_year(self, year: int) -> bool:
        return self._position(year)[1]

    def get_year(self, year: int) -> YearlyLedger | None:
        """Read-only lookup; years outside [min_year, max_year] are rejected without searching."""
        if not self._in_bounds(year):
            return None
        idx, found = self._position(year)
        return self._years[idx] if found else None

    def edit_year(self, year: int) -> YearlyLedger | None:
        """Mutable lookup; marks both of the year's collections dirty."""
        yearly = self.get_year(year)
        if yearly is not None:
            yearly.set_changes(True)
        return yearly

    def add_year(self, year: int) -> YearlyLedger:
        """Get or create the ledger for year; a created year starts with no pending changes."""
        idx, found = self._position(year)
        if not found:
            self._years.insert(idx, YearlyLedger(year, changes=False))
            self._widen_bounds(year)
        return self._years[idx]

    def push_year(self, yearly: YearlyLedger) -> bool:
        """
        Insert a whole YearlyLedger if its year is absent.

        When the year already exists the given ledger is dropped and False is
        returned; use merge() to combine records instead.
        """
        idx, found = self._position(yearly.year)
        if found:
            logger.debug("Year %d already present, pushed ledger discarded", yearly.year)
            return False
        self._years.insert(idx, yearly)
        self._widen_bounds(yearly.year)
        return True

    def merge(self, yearly: YearlyLedger) -> None:
        """Push yearly wholesale if its year is absent, else merge it into the existing year."""
        existing = self.get_year(yearly.year)
        if existing is None:
            self.push_year(yearly)
        else:
            existing.merge(yearly)

    def get_month_records(self, year: int, month: Month, kind: RecordKind) -> MonthlyLedger | None:
        """Year, then collection, then month; None at the first missing level."""
        yearly = self.get_year(year)
        if yearly is None:
            return None
        return yearly.collection(kind).get(month)

    def years(self) -> list[int]:
        return [y.year for y in self._years]

    def set_changes(self, changes: bool) -> None:
        """Set the flag on every collection and on both taxonomies."""
        self.expense_concepts.set_changes(changes)
        self.income_concepts.set_changes(changes)
        for yearly in self._years:
            yearly.set_changes(changes)

    def has_changes(self) -> bool:
        return (
            self.expense_concepts.has_changes()
            or self.income_concepts.has_changes()
            or any(y.has_changes() for y in self._years)
        )

    def __iter__(self) -> Iterator[YearlyLedger]:
        return iter(self._years)

    def __len__(self) -> int:
        return len(self._years)

    def __repr__(self) -> str:
        return f"Ledger(years={self.years()!r})"
