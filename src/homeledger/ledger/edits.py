#!/usr/bin/env python3
"""
Ledger Editing Operations

Record and concept edits applied to a loaded Ledger. Lookup misses return
None so the caller can report them and ask again.
"""

import logging
from collections.abc import Sequence
from dataclasses import replace
from typing import Any

from ..concepts.codec import validate_concept_key
from ..core.dates import LedgerDate, Month, YearMonth, month_range
from .ledger import Ledger
from .records import Record, RecordKind, concept_path_matches, validate_record

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {
    RecordKind.EXPENSE: {"date", "price", "concepts", "shop", "city", "description"},
    RecordKind.INCOME: {"date", "price", "concepts", "source", "place", "description"},
}


def add_record(ledger: Ledger, record: Record) -> int:
    """
    File a record under its year and month, creating them as needed.

    Raises:
        RecordParseError: If the record could not be written back to its file

    Returns:
        Index of the record within its month
    """
    validate_record(record)
    yearly = ledger.add_year(record.date.year)
    monthly = yearly.edit_collection(record.kind).add(record.date.month)
    return monthly.push(record)


def add_recurring(ledger: Ledger, template: Record, start: YearMonth, end: YearMonth, day: int) -> int:
    """
    Add a copy of template on the given day of every month from start to end.

    Returns:
        Number of records added
    """
    count = 0
    for year_month in month_range(start, end):
        add_record(ledger, template.with_date(LedgerDate(year_month.year, year_month.month, day)))
        count += 1

    logger.info("Added %d monthly %s records from %s to %s", count, template.kind.value, start, end)
    return count


def edit_record(
    ledger: Ledger, kind: RecordKind, year: int, month: Month, index: int, **changes: Any
) -> Record | None:
    """
    Change fields of an existing record.

    A new date moves the record: within its month it is re-sorted, into a
    different month or year it is removed and filed again.

    Raises:
        ValueError: If a field name is not editable for this kind, or the
                    edited record could not be written back (RecordParseError)

    Returns:
        The edited record, or None if year, month or index do not exist
    """
    unknown = set(changes) - EDITABLE_FIELDS[kind]
    if unknown:
        raise ValueError(f"Cannot edit {kind.value} fields: {', '.join(sorted(unknown))}")

    yearly = ledger.get_year(year)
    if yearly is None:
        return None
    monthly = yearly.edit_collection(kind).edit(month)
    if monthly is None or monthly.get_at(index) is None:
        return None

    record = monthly[index]
    if "concepts" in changes:
        changes["concepts"] = list(changes["concepts"])
    validate_record(replace(record, **changes))

    for name, value in changes.items():
        setattr(record, name, value)

    new_date = changes.get("date")
    if new_date is not None:
        if new_date.year == year and new_date.month == month:
            monthly.resort_at(index)
        else:
            monthly.remove_at(index)
            add_record(ledger, record)

    return record


def remove_record(ledger: Ledger, kind: RecordKind, year: int, month: Month, index: int) -> Record | None:
    """Remove and return a record, or None if it does not exist."""
    yearly = ledger.get_year(year)
    if yearly is None:
        return None
    monthly = yearly.edit_collection(kind).edit(month)
    if monthly is None or monthly.get_at(index) is None:
        return None
    return monthly.remove_at(index)


def add_concept(ledger: Ledger, kind: RecordKind, branch: Sequence[str], key: str) -> str:
    """
    Add key as a leaf under branch, creating the branch if needed.

    Raises:
        TaxonomyParseError: If key or a branch label is not a valid concept name

    Returns:
        The stored key, stripped of surrounding whitespace
    """
    labels = [validate_concept_key(label) for label in branch]
    key = validate_concept_key(key)
    ledger.concepts(kind).edit_tree().make_path(labels).insert(key)
    return key


def remove_concept(ledger: Ledger, kind: RecordKind, branch: Sequence[str]) -> bool:
    """
    Remove the last concept of branch and everything below it.

    Records filed under it are left untouched.

    Returns:
        False if the branch does not exist
    """
    if not branch:
        return False
    tree = ledger.concepts(kind).tree
    if not tree.has_path(branch):
        return False
    parent = ledger.concepts(kind).edit_tree().lookup(branch[:-1])
    parent.remove_child(branch[-1])  # type: ignore[union-attr]
    return True


def rename_concept(ledger: Ledger, kind: RecordKind, branch: Sequence[str], new_key: str) -> int:
    """
    Rename the last concept of branch and update every record filed under it.

    The taxonomy is normalized after the rename. Records whose concept path
    starts with branch (case-insensitively) get the matching label replaced.
    Every year's collection of this kind is marked dirty.

    Raises:
        TaxonomyParseError: If new_key is not a valid concept name

    Returns:
        Number of records updated, or -1 if the branch does not exist
    """
    new_key = validate_concept_key(new_key)
    if not branch or not ledger.concepts(kind).tree.has_path(branch):
        return -1

    tree = ledger.concepts(kind).edit_tree()
    parent = tree.lookup(branch[:-1])
    parent.rename_key(branch[-1], new_key)  # type: ignore[union-attr]
    tree.normalize()

    depth = len(branch)
    updated = 0
    for yearly in ledger:
        for record in yearly.edit_collection(kind).iter_records():
            if len(record.concepts) >= depth and concept_path_matches(record.concepts, branch):
                record.concepts[depth - 1] = new_key
                updated += 1

    logger.info("Renamed concept %s to '%s' in %d records", "/".join(branch), new_key, updated)
    return updated
