#!/usr/bin/env python3
"""
Ledger Record Models

Expense and Income entries and their one-line file representation: six
tab-separated, double-quoted fields

    "date"  "amount"  "concept;path"  "counterparty"  "place"  "description"

where the two counterparty fields are shop/city for expenses and
source/place for incomes.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum

from ..concepts.codec import validate_concept_key
from ..core.currency import format_amount, parse_amount
from ..core.dates import LedgerDate
from ..core.errors import RecordParseError, TaxonomyParseError

CONCEPT_SEPARATOR = ";"
FIELD_SEPARATOR = "\t"
NUM_FIELDS = 6

# Free text may not contain these; they would split or unquote a field.
RESERVED_TEXT_CHARS = "\"\t\r\n"


class RecordKind(Enum):
    """Kinds of ledger records."""

    EXPENSE = "expense"
    INCOME = "income"

    @property
    def directory(self) -> str:
        """Name of the per-year files directory."""
        return "expenses" if self is RecordKind.EXPENSE else "incomes"

    @property
    def types_filename(self) -> str:
        """Name of the taxonomy file."""
        return "expense_types.txt" if self is RecordKind.EXPENSE else "income_types.txt"


@dataclass
class Expense:
    """
    Money spent on a day.

    Ordering between records is by date only; see MonthlyLedger.
    """

    date: LedgerDate
    price: Decimal
    concepts: list[str]
    shop: str
    city: str
    description: str = ""

    kind = RecordKind.EXPENSE

    @property
    def counterparty(self) -> str:
        return self.shop

    @property
    def place(self) -> str:
        return self.city

    def counterparty_fields(self) -> tuple[str, str]:
        return self.shop, self.city

    def with_date(self, date: LedgerDate) -> "Expense":
        """Copy of this record on another date."""
        return replace(self, date=date, concepts=list(self.concepts))


@dataclass
class Income:
    """Money received on a day, from a source at a place."""

    date: LedgerDate
    price: Decimal
    concepts: list[str]
    source: str
    place: str
    description: str = ""

    kind = RecordKind.INCOME

    @property
    def counterparty(self) -> str:
        return self.source

    def counterparty_fields(self) -> tuple[str, str]:
        return self.source, self.place

    def with_date(self, date: LedgerDate) -> "Income":
        return replace(self, date=date, concepts=list(self.concepts))


Record = Expense | Income

COUNTERPARTY_FIELDS = {
    RecordKind.EXPENSE: ("shop", "city"),
    RecordKind.INCOME: ("source", "place"),
}


def split_concepts(concept_list: str) -> list[str]:
    """Split a ``;``-separated concept path, dropping empty labels."""
    return [c.strip() for c in concept_list.split(CONCEPT_SEPARATOR) if c.strip()]


def _split_fields(line: str) -> list[str]:
    parts = [part.strip() for part in line.split(FIELD_SEPARATOR)]
    parts = [part for part in parts if part]

    if len(parts) != NUM_FIELDS:
        raise RecordParseError(f"Expected {NUM_FIELDS} fields, found {len(parts)} in '{line.strip()}'")

    fields = []
    for part in parts:
        if len(part) < 2 or not (part.startswith('"') and part.endswith('"')):
            raise RecordParseError(f"Field {part} is not enclosed in double quotes")
        fields.append(part[1:-1])
    return fields


def parse_record_line(line: str, kind: RecordKind) -> Record:
    """
    Parse one line of a per-year record file.

    Args:
        line: Line text (trailing newline allowed)
        kind: Whether the file holds expenses or incomes

    Returns:
        Expense or Income

    Raises:
        RecordParseError: On wrong field count, bad date, bad amount, or empty concept path
    """
    date_str, amount_str, concept_list, first, second, description = _split_fields(line)

    concepts = split_concepts(concept_list)
    if not concepts:
        raise RecordParseError(f"Empty concept path in '{line.strip()}'")

    date = LedgerDate.from_string(date_str)
    price = parse_amount(amount_str)

    if kind is RecordKind.EXPENSE:
        return Expense(date=date, price=price, concepts=concepts, shop=first, city=second, description=description)
    return Income(date=date, price=price, concepts=concepts, source=first, place=second, description=description)


def check_text_field(name: str, value: str) -> str:
    """
    Check that a free-text field survives a write and reload.

    Raises:
        RecordParseError: If value contains a quote, tab or line break
    """
    if any(char in RESERVED_TEXT_CHARS for char in value):
        raise RecordParseError(f"{name.capitalize()} may not contain quotes, tabs or line breaks: {value!r}")
    return value


def validate_record(record: Record) -> Record:
    """
    Check that a record can be written as one line and parsed back.

    Raises:
        RecordParseError: On an empty concept path, a bad concept label, or bad free text
    """
    if not record.concepts:
        raise RecordParseError(f"Empty concept path for {record.kind.value} on {record.date}")
    for label in record.concepts:
        try:
            validate_concept_key(label)
        except TaxonomyParseError as e:
            raise RecordParseError(str(e)) from e

    first, second = record.counterparty_fields()
    first_name, second_name = COUNTERPARTY_FIELDS[record.kind]
    check_text_field(first_name, first)
    check_text_field(second_name, second)
    check_text_field("description", record.description)
    return record


def format_record_line(record: Record) -> str:
    """
    Inverse of parse_record_line, without the trailing newline.

    Raises:
        RecordParseError: If the record would not parse back (see validate_record)
    """
    validate_record(record)
    first, second = record.counterparty_fields()
    fields = [
        str(record.date),
        format_amount(record.price),
        CONCEPT_SEPARATOR.join(record.concepts),
        first,
        second,
        record.description,
    ]
    return FIELD_SEPARATOR.join(f'"{value}"' for value in fields)


def concept_path_matches(path: Sequence[str], prefix: Sequence[str]) -> bool:
    """
    Case-insensitive comparison over the common length of both paths.

    A record filed under ["Food", "Groceries"] matches the prefix ["food"] and
    also the longer prefix ["Food", "Groceries", "Fruit"].
    """
    return all(a.lower() == b.lower() for a, b in zip(path, prefix))
