#!/usr/bin/env python3
"""
Record Queries

Iteration over a Ledger's records with optional year/month restriction,
predicate builders for the usual filters, and per-year summary reports.
"""

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from decimal import Decimal

from ..core.dates import Month
from ..ledger.ledger import Ledger
from ..ledger.records import Record, RecordKind, concept_path_matches
from .summary import SummaryAggregator

Predicate = Callable[[Record], bool]


def iter_records(
    ledger: Ledger,
    kind: RecordKind,
    year: int | None = None,
    month: Month | None = None,
    predicate: Predicate | None = None,
) -> Iterator[Record]:
    """Records of one kind in date order, optionally restricted and filtered."""
    for yearly in ledger:
        if year is not None and yearly.year != year:
            continue
        for monthly in yearly.collection(kind):
            if month is not None and monthly.month != month:
                continue
            for record in monthly:
                if predicate is None or predicate(record):
                    yield record


def concept_prefix(prefix: Sequence[str]) -> Predicate:
    """Records filed under prefix, compared case-insensitively."""
    wanted = list(prefix)
    return lambda record: concept_path_matches(record.concepts, wanted)


def price_range(lower: Decimal | None = None, upper: Decimal | None = None) -> Predicate:
    """Records whose amount lies in [lower, upper]; a missing bound is open."""

    def matches(record: Record) -> bool:
        if lower is not None and record.price < lower:
            return False
        return upper is None or record.price <= upper

    return matches


def counterparty_is(name: str) -> Predicate:
    """Shop (expenses) or source (incomes) equal to name."""
    return lambda record: record.counterparty == name


def counterparty_contains(fragment: str) -> Predicate:
    return lambda record: fragment in record.counterparty


def place_is(name: str) -> Predicate:
    """City (expenses) or place (incomes) equal to name."""
    return lambda record: record.place == name


def all_of(*predicates: Predicate) -> Predicate:
    return lambda record: all(p(record) for p in predicates)


@dataclass
class YearlyReport:
    """Summaries per year and their merge."""

    depth: int
    years: dict[int, SummaryAggregator] = field(default_factory=dict)
    overall: SummaryAggregator = field(default_factory=SummaryAggregator)

    def get_total(self) -> Decimal:
        return self.overall.get_total()


def yearly_report(
    ledger: Ledger, kind: RecordKind, depth: int, predicate: Predicate | None = None
) -> YearlyReport:
    """
    Summarize matching records per year at the given grouping depth.

    Years with no matching record are left out.
    """
    report = YearlyReport(depth=depth)
    for yearly in ledger:
        summary = SummaryAggregator.from_records(
            iter_records(ledger, kind, year=yearly.year, predicate=predicate), depth
        )
        if summary.has_data():
            report.years[yearly.year] = summary
            report.overall.merge(summary)
    return report
