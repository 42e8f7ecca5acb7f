#!/usr/bin/env python3
"""
Stats CLI - Summaries and Histories

Concept summaries for a period, counterparty histories, and per-year
reports. History tables can also be exported to CSV.
"""

import logging
from pathlib import Path

import click

from ..analysis.queries import all_of, concept_prefix, counterparty_is, iter_records, yearly_report
from ..analysis.statistics import (
    HistoryOrder,
    by_concept,
    by_counterparty,
    by_counterparty_and_place,
    by_place,
    history,
    history_to_dataframe,
)
from ..analysis.summary import SummaryAggregator
from ..core.currency import format_display
from ..core.dates import Month
from ..ledger.records import RecordKind
from .formatting import render_history, render_summary
from .session import BRANCH, MONTH, kind_option, open_ledger

logger = logging.getLogger(__name__)

GROUPINGS = {
    "counterparty": (by_counterparty, "Counterparty"),
    "place": (by_place, "Place"),
    "both": (by_counterparty_and_place, "Counterparty - Place"),
}

order_option = click.option(
    "--sort",
    "order",
    type=click.Choice([order.value for order in HistoryOrder]),
    default=HistoryOrder.CONCEPT.value,
    show_default=True,
    help="Row order",
)
csv_option = click.option(
    "--csv", "csv_path", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Also export to CSV"
)


def _export(entries, csv_path: Path | None, separator: str) -> None:
    if csv_path is None:
        return
    history_to_dataframe(entries, separator).to_csv(csv_path, index=False)
    click.echo(f"Exported {len(entries)} row(s) to {csv_path}")


@click.group()
def stats() -> None:
    """Summaries and histories."""


@stats.command(name="summary")
@kind_option
@click.option("--year", "-y", type=int, default=None, help="Restrict to one year")
@click.option("--month", "-m", type=MONTH, default=None, help="Restrict to one month")
@click.option("--depth", type=click.IntRange(min=1), default=1, show_default=True, help="Concept levels")
@click.pass_context
def summary(ctx: click.Context, kind: str, year: int | None, month: Month | None, depth: int) -> None:
    """Totals per concept prefix."""
    _, ledger = open_ledger(ctx)
    aggregator = SummaryAggregator.from_records(iter_records(ledger, RecordKind(kind), year, month), depth)
    if not aggregator.has_data():
        click.echo("No records found")
        return
    for line in render_summary(aggregator, ctx.obj["config"].display):
        click.echo(line)


@stats.command(name="concepts")
@kind_option
@click.option("--year", "-y", type=int, default=None)
@click.option("--depth", type=click.IntRange(min=1), default=1, show_default=True)
@order_option
@csv_option
@click.pass_context
def concept_history(
    ctx: click.Context, kind: str, year: int | None, depth: int, order: str, csv_path: Path | None
) -> None:
    """How often and how much per concept prefix."""
    display = ctx.obj["config"].display
    _, ledger = open_ledger(ctx)
    entries = history(iter_records(ledger, RecordKind(kind), year), by_concept(depth), HistoryOrder(order))
    if not entries:
        click.echo("No records found")
        return
    for line in render_history(entries, "Concept", display):
        click.echo(line)
    _export(entries, csv_path, display.concept_separator)


@stats.command()
@kind_option
@click.option("--year", "-y", type=int, default=None)
@click.option("--by", "grouping", type=click.Choice(list(GROUPINGS)), default="counterparty", show_default=True)
@click.option("--concepts", "concept_path", type=BRANCH, default=None, help="Only records under this path")
@order_option
@csv_option
@click.pass_context
def counterparties(
    ctx: click.Context,
    kind: str,
    year: int | None,
    grouping: str,
    concept_path: list[str] | None,
    order: str,
    csv_path: Path | None,
) -> None:
    """How often and how much per shop/source or place."""
    display = ctx.obj["config"].display
    group_by, title = GROUPINGS[grouping]
    predicate = concept_prefix(concept_path) if concept_path else None

    _, ledger = open_ledger(ctx)
    entries = history(
        iter_records(ledger, RecordKind(kind), year, predicate=predicate),
        group_by,
        HistoryOrder(order),
        classifier=(lambda record: record.place) if grouping == "counterparty" else None,
    )
    if not entries:
        click.echo("No records found")
        return
    for line in render_history(entries, title, display, classifier="Place" if grouping == "counterparty" else ""):
        click.echo(line)
    _export(entries, csv_path, display.concept_separator)


@stats.command()
@kind_option
@click.option("--depth", type=click.IntRange(min=1), default=1, show_default=True)
@click.option("--concepts", "concept_path", type=BRANCH, default=None, help="Only records under this path")
@click.option("--counterparty", "-c", default=None, help="Only records with this shop/source")
@click.pass_context
def years(
    ctx: click.Context, kind: str, depth: int, concept_path: list[str] | None, counterparty: str | None
) -> None:
    """Per-year summaries followed by the overall total."""
    display = ctx.obj["config"].display
    predicates = []
    if concept_path:
        predicates.append(concept_prefix(concept_path))
    if counterparty:
        predicates.append(counterparty_is(counterparty))

    _, ledger = open_ledger(ctx)
    report = yearly_report(ledger, RecordKind(kind), depth, all_of(*predicates) if predicates else None)
    if not report.years:
        click.echo("No records found")
        return

    for year, year_summary in report.years.items():
        click.echo(f"\n{year}")
        for line in render_summary(year_summary, display):
            click.echo(line)
    click.echo(
        f"\nAll years: {format_display(report.get_total(), display.amount_decimals, display.currency_symbol)}"
    )
