#!/usr/bin/env python3
"""
History Statistics

Groups records by concept prefix or counterparty and reports how many records
fell into each group and how much they add up to. Rows can be ordered by key,
by frequency or by value; the last two break ties on the key so output is
reproducible.
"""

from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

import pandas as pd

from ..ledger.records import Record
from .summary import SummaryAggregator, truncate_path

GroupBy = Callable[[Record], tuple[str, ...]]


@dataclass(frozen=True)
class HistoryEntry:
    """One group of a history report."""

    key: tuple[str, ...]
    count: int
    total: Decimal
    classifier: str = ""


class HistoryOrder(Enum):
    """Row orderings for history reports."""

    CONCEPT = "concept"
    TIMES = "times"
    VALUE = "value"


def _sort_by_concept(entry: HistoryEntry):
    return entry.key


def _sort_by_times(entry: HistoryEntry):
    return (-entry.count, entry.key)


def _sort_by_value(entry: HistoryEntry):
    return (-entry.total, entry.key)


SORT_KEYS = {
    HistoryOrder.CONCEPT: _sort_by_concept,
    HistoryOrder.TIMES: _sort_by_times,
    HistoryOrder.VALUE: _sort_by_value,
}


def by_concept(depth: int) -> GroupBy:
    """Group by the first depth labels of the concept path."""
    if depth < 1:
        raise ValueError(f"Grouping depth must be at least 1, got {depth}")
    return lambda record: truncate_path(record.concepts, depth)


def by_counterparty(record: Record) -> tuple[str, ...]:
    """Shop for expenses, source for incomes."""
    return (record.counterparty,)


def by_place(record: Record) -> tuple[str, ...]:
    """City for expenses, place for incomes."""
    return (record.place,)


def by_counterparty_and_place(record: Record) -> tuple[str, ...]:
    return (f"{record.counterparty} - {record.place}",)


def history(
    records: Iterable[Record],
    group_by: GroupBy,
    order: HistoryOrder = HistoryOrder.CONCEPT,
    classifier: Callable[[Record], str] | None = None,
) -> list[HistoryEntry]:
    """
    Build an ordered history report.

    Args:
        records: Records to group
        group_by: Function giving the group key of a record
        order: Row ordering
        classifier: Optional label taken from the first record of each group
                    (e.g. the city of a shop)

    Returns:
        List of HistoryEntry rows
    """
    summary = SummaryAggregator()
    counts: Counter[tuple[str, ...]] = Counter()
    labels: dict[tuple[str, ...], str] = {}

    for record in records:
        key = group_by(record)
        summary.add(key, record.price)
        counts[key] += 1
        if classifier is not None and key not in labels:
            labels[key] = classifier(record)

    entries = [HistoryEntry(key, counts[key], total, labels.get(key, "")) for key, total in summary]
    entries.sort(key=SORT_KEYS[order])
    return entries


def history_to_dataframe(entries: list[HistoryEntry], separator: str = " / ") -> pd.DataFrame:
    """
    Convert history rows to a DataFrame for export.

    Amounts become floats; row order is preserved.
    """
    df = pd.DataFrame(
        [
            {
                "group": separator.join(entry.key),
                "classifier": entry.classifier,
                "count": entry.count,
                "total": float(entry.total),
            }
            for entry in entries
        ],
        columns=["group", "classifier", "count", "total"],
    )
    return df
