#!/usr/bin/env python3
"""
Concepts CLI - Taxonomy Editing

Show the expense and income concept trees and add, rename or remove nodes.
"""

import logging

import click

from ..concepts.codec import validate_concept_key
from ..ledger.edits import add_concept, remove_concept, rename_concept
from ..ledger.records import RecordKind
from .formatting import render_tree
from .session import BRANCH, commit, kind_option, open_ledger

logger = logging.getLogger(__name__)


def _concept_name(value: str, hint: str) -> str:
    try:
        return validate_concept_key(value)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint=hint) from e


@click.group()
def concepts() -> None:
    """Show and edit concept taxonomies."""


@concepts.command()
@kind_option
@click.pass_context
def show(ctx: click.Context, kind: str) -> None:
    """Print the taxonomy as an indented tree."""
    _, ledger = open_ledger(ctx)
    tree = ledger.concepts(RecordKind(kind)).tree
    if not len(tree):
        click.echo(f"No {kind} concepts defined")
        return
    click.echo(render_tree(tree), nl=False)


@concepts.command()
@kind_option
@click.option("--under", type=BRANCH, help="Parent path, e.g. 'Home;Utilities'")
@click.argument("key")
@click.pass_context
def add(ctx: click.Context, kind: str, under: list[str] | None, key: str) -> None:
    """
    Add KEY as a concept.

    Example:

      homeledger concepts add --under 'Home;Utilities' Water
    """
    key = _concept_name(key, "KEY")

    store, ledger = open_ledger(ctx)
    add_concept(ledger, RecordKind(kind), under or [], key)
    commit(ctx, store, ledger)
    click.echo(f"Added {kind} concept '{key}'")


@concepts.command()
@kind_option
@click.argument("path", type=BRANCH)
@click.argument("new_key")
@click.pass_context
def rename(ctx: click.Context, kind: str, path: list[str], new_key: str) -> None:
    """Rename the last concept of PATH and update matching records."""
    new_key = _concept_name(new_key, "NEW_KEY")
    store, ledger = open_ledger(ctx)
    updated = rename_concept(ledger, RecordKind(kind), path, new_key)
    if updated < 0:
        raise click.ClickException(f"Unknown concept path: {';'.join(path)}")
    commit(ctx, store, ledger)
    click.echo(f"Renamed '{path[-1]}' to '{new_key}' ({updated} record(s) updated)")


@concepts.command()
@kind_option
@click.argument("path", type=BRANCH)
@click.pass_context
def remove(ctx: click.Context, kind: str, path: list[str]) -> None:
    """Remove the last concept of PATH and everything below it."""
    store, ledger = open_ledger(ctx)
    if not remove_concept(ledger, RecordKind(kind), path):
        raise click.ClickException(f"Unknown concept path: {';'.join(path)}")
    commit(ctx, store, ledger)
    click.echo(f"Removed '{path[-1]}'")
