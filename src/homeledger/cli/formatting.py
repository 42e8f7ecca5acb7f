#!/usr/bin/env python3
"""
Table Formatting

Plain-text rendering of months, summaries and history reports. Widths are
computed from the data; padding and amount style come from DisplayConfig.
"""

from collections.abc import Callable, Sequence

from ..analysis.statistics import HistoryEntry
from ..analysis.summary import SummaryAggregator
from ..concepts.codec import format_taxonomy_text
from ..concepts.tree import ConceptTree
from ..core.config import DisplayConfig
from ..core.currency import format_display
from ..ledger.monthly import MonthlyLedger
from ..ledger.records import Record


def _table(headers: Sequence[str], rows: list[list[str]], display: DisplayConfig, right: set[int]) -> list[str]:
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    pad = " " * display.column_padding

    def line(cells: Sequence[str]) -> str:
        parts = [cell.rjust(widths[i]) if i in right else cell.ljust(widths[i]) for i, cell in enumerate(cells)]
        return pad.join(parts).rstrip()

    lines = [line(headers), pad.join("-" * w for w in widths)]
    lines.extend(line(row) for row in rows)
    return lines


def render_tree(tree: ConceptTree) -> str:
    return format_taxonomy_text(tree, indent="    ")


def render_month(
    monthly: MonthlyLedger,
    display: DisplayConfig,
    headers: Sequence[str],
    predicate: Callable[[Record], bool] | None = None,
) -> list[str]:
    """
    Numbered records of one month; the number is the index used by edit/remove.

    Records rejected by predicate are skipped but keep their numbering.
    """
    rows = []
    for idx, record in enumerate(monthly):
        if predicate is not None and not predicate(record):
            continue
        first, second = record.counterparty_fields()
        rows.append(
            [
                str(idx),
                str(record.date),
                format_display(record.price, display.amount_decimals, display.currency_symbol),
                display.concept_separator.join(record.concepts),
                first,
                second,
                record.description,
            ]
        )
    return _table(["#", "Date", "Amount", "Concepts", *headers, "Description"], rows, display, right={0, 2})


def render_summary(summary: SummaryAggregator, display: DisplayConfig) -> list[str]:
    """One row per concept prefix, then the total."""
    levels = len(summary.max_widths())
    rows = []
    for key, amount in summary:
        labels = list(key) + [""] * (levels - len(key))
        rows.append(labels + [format_display(amount, display.amount_decimals, display.currency_symbol)])

    headers = [f"Level {i + 1}" for i in range(levels)] + ["Amount"]
    lines = _table(headers, rows, display, right={levels})
    lines.append(f"Total: {format_display(summary.get_total(), display.amount_decimals, display.currency_symbol)}")
    return lines


def render_history(entries: list[HistoryEntry], title: str, display: DisplayConfig, classifier: str = "") -> list[str]:
    headers = [title] + ([classifier] if classifier else []) + ["Times", "Total"]
    rows = []
    for entry in entries:
        row = [display.concept_separator.join(entry.key)]
        if classifier:
            row.append(entry.classifier)
        row.extend([str(entry.count), format_display(entry.total, display.amount_decimals, display.currency_symbol)])
        rows.append(row)
    return _table(headers, rows, display, right={len(headers) - 2, len(headers) - 1})
