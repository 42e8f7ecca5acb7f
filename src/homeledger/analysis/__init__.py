"""
Analysis Package

Summaries and statistics over ledger records.

This package provides:
- SummaryAggregator: totals keyed by truncated concept path
- History reports grouped by concept or counterparty, sorted by key, frequency or value
- Record queries and per-year reports
"""

from .queries import (
    YearlyReport,
    all_of,
    concept_prefix,
    counterparty_contains,
    counterparty_is,
    iter_records,
    place_is,
    price_range,
    yearly_report,
)
from .statistics import (
    HistoryEntry,
    HistoryOrder,
    by_concept,
    by_counterparty,
    by_counterparty_and_place,
    by_place,
    history,
    history_to_dataframe,
)
from .summary import SummaryAggregator, truncate_path

__all__ = [
    "HistoryEntry",
    "HistoryOrder",
    "SummaryAggregator",
    "YearlyReport",
    "all_of",
    "by_concept",
    "by_counterparty",
    "by_counterparty_and_place",
    "by_place",
    "concept_prefix",
    "counterparty_contains",
    "counterparty_is",
    "history",
    "history_to_dataframe",
    "iter_records",
    "place_is",
    "price_range",
    "truncate_path",
    "yearly_report",
]
