#!/usr/bin/env python3
"""
Error Types for the Home Ledger

Parse and load failures are fatal for the file (or batch) being processed.
Lookup misses are never errors: accessors return None instead.
"""

from pathlib import Path


class LedgerError(Exception):
    """Base class for all ledger failures."""


class TaxonomyParseError(LedgerError, ValueError):
    """Malformed nested-parenthesis taxonomy text."""


class RecordParseError(LedgerError, ValueError):
    """A record line that cannot be turned into an Expense or Income."""

    def __init__(self, message: str, path: Path | None = None, line_number: int | None = None):
        self.message = message
        self.path = path
        self.line_number = line_number
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.path is None:
            return self.message
        if self.line_number is None:
            return f"{self.path}: {self.message}"
        return f"{self.path}:{self.line_number}: {self.message}"

    def at(self, path: Path, line_number: int) -> "RecordParseError":
        """Return a copy of this error located at a file line."""
        return type(self)(self.message, path=path, line_number=line_number)


class DateParseError(RecordParseError):
    """Malformed YYYY/MonthName/DD date."""


class LedgerLoadError(LedgerError):
    """A data directory or file could not be read; the whole load is aborted."""
