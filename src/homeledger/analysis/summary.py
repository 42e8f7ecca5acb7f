#!/usr/bin/env python3
"""
Summary Aggregation

Totals amounts under concept-path prefixes of a caller-chosen depth. Buckets
iterate in lexicographic order of their prefix; richer orderings are applied
by the statistics layer on the produced rows.
"""

from collections.abc import Iterable, Iterator, Sequence
from decimal import Decimal

from ..core.currency import ZERO
from ..ledger.records import Record


def truncate_path(concepts: Sequence[str], depth: int) -> tuple[str, ...]:
    """First depth labels of a concept path."""
    if depth < 1:
        raise ValueError(f"Grouping depth must be at least 1, got {depth}")
    return tuple(concepts[:depth])


class SummaryAggregator:
    """Mapping from concept-path prefix to accumulated amount, plus a grand total."""

    def __init__(self):
        self._buckets: dict[tuple[str, ...], Decimal] = {}
        self._total: Decimal = ZERO

    @classmethod
    def from_records(cls, records: Iterable[Record], depth: int) -> "SummaryAggregator":
        summary = cls()
        for record in records:
            summary.add_record(record, depth)
        return summary

    def add(self, path: Sequence[str], amount: Decimal) -> None:
        """Accumulate amount into the bucket for exactly this prefix."""
        key = tuple(path)
        self._buckets[key] = self._buckets.get(key, ZERO) + amount
        self._total += amount

    def add_record(self, record: Record, depth: int) -> None:
        self.add(truncate_path(record.concepts, depth), record.price)

    def merge(self, other: "SummaryAggregator") -> None:
        """Sum other's buckets into this one's, and its total into this total."""
        for key, amount in other._buckets.items():
            self._buckets[key] = self._buckets.get(key, ZERO) + amount
        self._total += other._total

    def get_total(self) -> Decimal:
        return self._total

    def get(self, path: Sequence[str]) -> Decimal | None:
        return self._buckets.get(tuple(path))

    def has_data(self) -> bool:
        return bool(self._buckets)

    def max_widths(self) -> list[int]:
        """Widest label at each prefix level, for column layout."""
        widths: list[int] = []
        for key in self._buckets:
            for level, label in enumerate(key):
                if level == len(widths):
                    widths.append(0)
                widths[level] = max(widths[level], len(label))
        return widths

    def __iter__(self) -> Iterator[tuple[tuple[str, ...], Decimal]]:
        for key in sorted(self._buckets):
            yield key, self._buckets[key]

    def __len__(self) -> int:
        return len(self._buckets)

    def __repr__(self) -> str:
        return f"SummaryAggregator(buckets={len(self._buckets)}, total={self._total})"
