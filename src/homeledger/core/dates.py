#!/usr/bin/env python3
"""
Ledger Date Primitives

Immutable dates in the on-disk form ``YYYY/MonthName/DD`` with the English
month name spelled out, plus year-month ranges used for recurring entries.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date
from enum import IntEnum

from .errors import DateParseError


class Month(IntEnum):
    """Calendar months, ordered by their index."""

    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    @classmethod
    def from_name(cls, name: str) -> "Month":
        """
        Parse an English month name ("January", "february", ...).

        Raises:
            DateParseError: If the name is not a month
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise DateParseError(f"'{name}' is not a valid month") from None

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    def next(self) -> "Month":
        """Following month, wrapping December to January."""
        return Month(self.value % 12 + 1)

    def __str__(self) -> str:
        return self.display_name


@dataclass(frozen=True, order=True)
class LedgerDate:
    """Day of a record. Field order matters: comparisons go year, month, day."""

    year: int
    month: Month
    day: int

    def __post_init__(self) -> None:
        if not 1 <= self.day <= 31:
            raise DateParseError(f"Day {self.day} out of range in {self.year}/{self.month.display_name}")

    @classmethod
    def from_string(cls, date_str: str) -> "LedgerDate":
        """
        Parse ``YYYY/MonthName/DD``.

        Args:
            date_str: Date text such as "2024/January/5"

        Returns:
            LedgerDate object

        Raises:
            DateParseError: If the text is not a valid date
        """
        parts = date_str.strip().split("/")
        if len(parts) != 3:
            raise DateParseError(f"Can't split date '{date_str}' into year/month/day")

        year_str, month_str, day_str = parts
        try:
            year = int(year_str)
            day = int(day_str)
        except ValueError:
            raise DateParseError(f"Invalid numbers in date '{date_str}'") from None

        return cls(year=year, month=Month.from_name(month_str), day=day)

    @classmethod
    def from_date(cls, value: date) -> "LedgerDate":
        return cls(year=value.year, month=Month(value.month), day=value.day)

    @classmethod
    def today(cls) -> "LedgerDate":
        """Get today's date."""
        return cls.from_date(date.today())

    def year_month(self) -> "YearMonth":
        return YearMonth(self.year, self.month)

    def __str__(self) -> str:
        return f"{self.year}/{self.month.display_name}/{self.day}"


@dataclass(frozen=True, order=True)
class YearMonth:
    """A month of a specific year."""

    year: int
    month: Month

    def next(self) -> "YearMonth":
        month = self.month.next()
        year = self.year + 1 if month == Month.JANUARY else self.year
        return YearMonth(year, month)

    def __str__(self) -> str:
        return f"{self.year}/{self.month.display_name}"


def month_range(start: YearMonth, end: YearMonth) -> Iterator[YearMonth]:
    """
    Iterate every month from start to end, both inclusive.

    Yields nothing when end precedes start.
    """
    current = start
    while current <= end:
        yield current
        current = current.next()
