#!/usr/bin/env python3
"""
CLI Session Helpers

Shared parameter types and the load/apply/save cycle used by every command.
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from ..concepts.codec import validate_concept_key
from ..concepts.tree import ConceptTree
from ..core.currency import parse_amount
from ..core.dates import LedgerDate, Month, YearMonth
from ..core.errors import LedgerError
from ..ledger.datastore import LedgerStore
from ..ledger.ledger import Ledger
from ..ledger.records import RecordKind, check_text_field, split_concepts

logger = logging.getLogger(__name__)


class LedgerParamType(click.ParamType):
    """Adapts a core parser to click, turning its ValueError into a usage error."""

    def __init__(self, name: str, parser: Callable[[str], Any]):
        self.name = name
        self._parser = parser

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Any:
        if not isinstance(value, str):
            return value
        try:
            return self._parser(value)
        except ValueError as e:
            self.fail(str(e), param, ctx)


def _parse_year_month(value: str) -> YearMonth:
    parts = value.split("/")
    if len(parts) != 2:
        raise ValueError(f"Expected YEAR/Month, got '{value}'")
    return YearMonth(int(parts[0]), Month.from_name(parts[1]))


def _parse_branch(value: str) -> list[str]:
    branch = split_concepts(value)
    if not branch:
        raise ValueError("Concept path is empty")
    return [validate_concept_key(label) for label in branch]


DATE = LedgerParamType("date", LedgerDate.from_string)
MONTH = LedgerParamType("month", Month.from_name)
YEAR_MONTH = LedgerParamType("year/month", _parse_year_month)
BRANCH = LedgerParamType("concepts", _parse_branch)
AMOUNT = LedgerParamType("amount", parse_amount)
TEXT = LedgerParamType("text", lambda value: check_text_field("text", value))
KIND = click.Choice([kind.value for kind in RecordKind])

kind_option = click.option(
    "--kind", "-k", type=KIND, default=RecordKind.EXPENSE.value, show_default=True, help="Record kind"
)


def get_store(ctx: click.Context) -> LedgerStore:
    return LedgerStore(Path(ctx.obj["data_dir"]))


def open_ledger(ctx: click.Context) -> tuple[LedgerStore, Ledger]:
    """Load the ledger for this invocation, as a click error on failure."""
    store = get_store(ctx)
    try:
        ledger = store.load()
    except LedgerError as e:
        raise click.ClickException(str(e)) from e
    return store, ledger


def commit(ctx: click.Context, store: LedgerStore, ledger: Ledger, force: bool = False) -> list[Path]:
    """Save dirty parts of the ledger and echo what was written."""
    try:
        written = store.save(ledger, force=force)
    except (OSError, LedgerError) as e:
        raise click.ClickException(f"Could not write data: {e}") from e

    if ctx.obj.get("verbose", False):
        for path in written:
            click.echo(f"Wrote {path}")
    return written


def require_concepts(tree: ConceptTree, concepts: list[str]) -> None:
    if not tree.has_path(concepts):
        raise click.ClickException(f"Unknown concept path: {';'.join(concepts)}")
