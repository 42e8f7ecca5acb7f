#!/usr/bin/env python3
"""
Records CLI - Expense and Income Entry

List records month by month for one year or all years, filtered by concept,
amount or counterparty. Add single or monthly recurring records, and edit
or remove a record by its year, month and index.
"""

import logging
from decimal import Decimal

import click

from ..analysis.queries import (
    all_of,
    concept_prefix,
    counterparty_contains,
    counterparty_is,
    iter_records,
    place_is,
    price_range,
)
from ..core.currency import format_display
from ..core.dates import LedgerDate, Month, YearMonth
from ..ledger.edits import add_record, add_recurring, edit_record, remove_record
from ..ledger.records import COUNTERPARTY_FIELDS, Expense, Income, Record, RecordKind
from .formatting import render_month
from .session import (
    AMOUNT,
    BRANCH,
    DATE,
    MONTH,
    TEXT,
    YEAR_MONTH,
    commit,
    kind_option,
    open_ledger,
    require_concepts,
)

logger = logging.getLogger(__name__)

COUNTERPARTY_HEADERS = {
    RecordKind.EXPENSE: ("Shop", "City"),
    RecordKind.INCOME: ("Source", "Place"),
}


def build_record(
    kind: RecordKind,
    date: LedgerDate,
    amount: Decimal,
    concepts: list[str],
    counterparty: str,
    place: str,
    description: str,
) -> Record:
    if kind is RecordKind.EXPENSE:
        return Expense(date, amount, concepts, shop=counterparty, city=place, description=description)
    return Income(date, amount, concepts, source=counterparty, place=place, description=description)


def record_options(f):
    """Options shared by add and add-monthly."""
    f = click.option("--description", "-d", type=TEXT, default="", help="Free text")(f)
    f = click.option("--place", "-p", type=TEXT, required=True, help="City (expenses) or place (incomes)")(f)
    f = click.option("--counterparty", "-c", type=TEXT, required=True, help="Shop (expenses) or source (incomes)")(f)
    f = click.option("--concepts", "concept_path", type=BRANCH, required=True, help="Path like 'Food;Groceries'")(f)
    f = click.option("--amount", "-a", type=AMOUNT, required=True, help="Amount, e.g. 12.50")(f)
    return f


@click.group()
def records() -> None:
    """List and edit records."""


@records.command(name="list")
@kind_option
@click.option("--year", "-y", type=int, default=None, help="Year (default: current year)")
@click.option("--all", "all_years", is_flag=True, help="List every year instead of one")
@click.option("--month", "-m", type=MONTH, default=None, help="Single month, e.g. March")
@click.option("--concepts", "concept_path", type=BRANCH, default=None, help="Only records under this path")
@click.option("--min", "min_amount", type=AMOUNT, default=None, help="Smallest amount to show")
@click.option("--max", "max_amount", type=AMOUNT, default=None, help="Largest amount to show")
@click.option("--counterparty", "-c", default=None, help="Exact shop (expenses) or source (incomes)")
@click.option("--counterparty-contains", "counterparty_part", default=None, help="Text within shop or source")
@click.option("--place", "-p", default=None, help="Exact city (expenses) or place (incomes)")
@click.pass_context
def list_records(
    ctx: click.Context,
    kind: str,
    year: int | None,
    all_years: bool,
    month: Month | None,
    concept_path: list[str] | None,
    min_amount: Decimal | None,
    max_amount: Decimal | None,
    counterparty: str | None,
    counterparty_part: str | None,
    place: str | None,
) -> None:
    """
    Show records month by month with their edit index.

    Filters combine; each record shown matches all of them.

    Examples:

      homeledger records list --all --concepts Food --min 20

      homeledger records list -y 2024 --counterparty-contains Grocery
    """
    if all_years and year is not None:
        raise click.UsageError("Use either --year or --all")
    if min_amount is not None and max_amount is not None and max_amount < min_amount:
        raise click.BadParameter("Largest amount is below smallest amount", param_hint="--max")

    record_kind = RecordKind(kind)
    filters = []
    if concept_path is not None:
        filters.append(concept_prefix(concept_path))
    if min_amount is not None or max_amount is not None:
        filters.append(price_range(min_amount, max_amount))
    if counterparty is not None:
        filters.append(counterparty_is(counterparty))
    if counterparty_part is not None:
        filters.append(counterparty_contains(counterparty_part))
    if place is not None:
        filters.append(place_is(place))
    predicate = all_of(*filters) if filters else None

    display = ctx.obj["config"].display
    _, ledger = open_ledger(ctx)
    if all_years:
        years = list(ledger)
    else:
        year = year if year is not None else LedgerDate.today().year
        yearly = ledger.get_year(year)
        if yearly is None:
            click.echo(f"No records for {year}")
            return
        years = [yearly]

    for yearly in years:
        for monthly in yearly.collection(record_kind):
            if month is not None and monthly.month != month:
                continue
            if not any(predicate is None or predicate(record) for record in monthly):
                continue
            click.echo(f"\n{monthly.month.display_name} {yearly.year}")
            for line in render_month(monthly, display, COUNTERPARTY_HEADERS[record_kind], predicate):
                click.echo(line)

    matched = [
        record
        for yearly in years
        for record in iter_records(ledger, record_kind, year=yearly.year, month=month, predicate=predicate)
    ]
    if not matched:
        scope = "in any year" if all_years else f"for {years[0].year}"
        click.echo(f"No {kind} records {scope}")
        return
    total = sum((record.price for record in matched), Decimal(0))
    click.echo(
        f"\n{len(matched)} record(s), total "
        f"{format_display(total, display.amount_decimals, display.currency_symbol)}"
    )


@records.command()
@kind_option
@click.option("--date", "date", type=DATE, default=None, help="Date like 2024/March/5 (default: today)")
@record_options
@click.pass_context
def add(
    ctx: click.Context,
    kind: str,
    date: LedgerDate | None,
    amount: Decimal,
    concept_path: list[str],
    counterparty: str,
    place: str,
    description: str,
) -> None:
    """Add one record."""
    record_kind = RecordKind(kind)
    store, ledger = open_ledger(ctx)
    require_concepts(ledger.concepts(record_kind).tree, concept_path)

    record = build_record(
        record_kind, date or LedgerDate.today(), amount, concept_path, counterparty, place, description
    )
    index = add_record(ledger, record)
    commit(ctx, store, ledger)
    click.echo(f"Added {kind} on {record.date} at index {index}")


@records.command(name="add-monthly")
@kind_option
@click.option("--start", type=YEAR_MONTH, required=True, help="First month, e.g. 2024/January")
@click.option("--end", type=YEAR_MONTH, required=True, help="Last month, e.g. 2024/December")
@click.option("--day", type=click.IntRange(1, 31), default=1, show_default=True, help="Day of month")
@record_options
@click.pass_context
def add_monthly(
    ctx: click.Context,
    kind: str,
    start: YearMonth,
    end: YearMonth,
    day: int,
    amount: Decimal,
    concept_path: list[str],
    counterparty: str,
    place: str,
    description: str,
) -> None:
    """Add the same record on one day of every month from START to END."""
    if end < start:
        raise click.BadParameter("End month is before start month", param_hint="--end")

    record_kind = RecordKind(kind)
    store, ledger = open_ledger(ctx)
    require_concepts(ledger.concepts(record_kind).tree, concept_path)

    template = build_record(
        record_kind, LedgerDate(start.year, start.month, day), amount, concept_path, counterparty, place, description
    )
    count = add_recurring(ledger, template, start, end, day)
    commit(ctx, store, ledger)
    click.echo(f"Added {count} {kind} record(s)")


@records.command()
@kind_option
@click.option("--year", "-y", type=int, required=True)
@click.option("--month", "-m", type=MONTH, required=True)
@click.option("--index", "-i", type=click.IntRange(min=0), required=True, help="Index shown by 'records list'")
@click.option("--date", "date", type=DATE, default=None)
@click.option("--amount", "-a", type=AMOUNT, default=None)
@click.option("--concepts", "concept_path", type=BRANCH, default=None)
@click.option("--counterparty", "-c", type=TEXT, default=None)
@click.option("--place", "-p", type=TEXT, default=None)
@click.option("--description", "-d", type=TEXT, default=None)
@click.pass_context
def edit(
    ctx: click.Context,
    kind: str,
    year: int,
    month: Month,
    index: int,
    date: LedgerDate | None,
    amount: Decimal | None,
    concept_path: list[str] | None,
    counterparty: str | None,
    place: str | None,
    description: str | None,
) -> None:
    """Change fields of one record; a new date moves it."""
    record_kind = RecordKind(kind)
    first_field, second_field = COUNTERPARTY_FIELDS[record_kind]
    changes = {
        "date": date,
        "price": amount,
        "concepts": concept_path,
        first_field: counterparty,
        second_field: place,
        "description": description,
    }
    changes = {name: value for name, value in changes.items() if value is not None}
    if not changes:
        raise click.UsageError("Nothing to change")

    store, ledger = open_ledger(ctx)
    if concept_path is not None:
        require_concepts(ledger.concepts(record_kind).tree, concept_path)

    try:
        record = edit_record(ledger, record_kind, year, month, index, **changes)
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    if record is None:
        raise click.ClickException(f"No {kind} record {index} in {month.display_name} {year}")
    commit(ctx, store, ledger)
    click.echo(f"Updated {kind} on {record.date}")


@records.command()
@kind_option
@click.option("--year", "-y", type=int, required=True)
@click.option("--month", "-m", type=MONTH, required=True)
@click.option("--index", "-i", type=click.IntRange(min=0), required=True, help="Index shown by 'records list'")
@click.pass_context
def remove(ctx: click.Context, kind: str, year: int, month: Month, index: int) -> None:
    """Remove one record."""
    store, ledger = open_ledger(ctx)
    record = remove_record(ledger, RecordKind(kind), year, month, index)
    if record is None:
        raise click.ClickException(f"No {kind} record {index} in {month.display_name} {year}")
    commit(ctx, store, ledger)
    click.echo(f"Removed {kind} of {record.price} on {record.date}")
