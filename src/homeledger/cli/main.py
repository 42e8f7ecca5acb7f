#!/usr/bin/env python3
"""
Main CLI Entry Point for the Home Ledger

Provides unified command-line interface for all ledger tools.
"""

import logging
import os

import click

from ..core.config import get_config, reload_config
from .session import commit, get_store, open_ledger

logger = logging.getLogger(__name__)


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=str),
    help="Override the data directory",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, data_dir: str | None, verbose: bool, debug: bool) -> None:
    """
    Home Ledger - Personal Expense and Income Manager

    Keeps dated expense and income records in plain-text year files,
    classified by hierarchical concept taxonomies, and summarizes them.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)

    # Set environment if specified
    if config_env:
        os.environ["LEDGER_ENV"] = config_env

    # Configure debug logging if requested
    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("homeledger").setLevel(logging.DEBUG)

    try:
        config_obj = reload_config() if config_env or debug else get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    # Store global options
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config_obj
    ctx.obj["data_dir"] = data_dir or str(config_obj.data_dir)

    if verbose:
        click.echo(f"Environment: {config_obj.environment.value}")
        click.echo(f"Data directory: {ctx.obj['data_dir']}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Show version information."""
    from homeledger import __author__, __version__

    click.echo(f"Home Ledger v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]
    display = config_obj.display

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {ctx.obj['data_dir']}")
    click.echo(f"  Column Padding: {display.column_padding}")
    click.echo(f"  Amount Decimals: {display.amount_decimals}")
    click.echo(f"  Currency Symbol: {display.currency_symbol or '(none)'}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


@main.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Create an empty data directory layout."""
    store = get_store(ctx)
    try:
        store.initialize()
    except OSError as e:
        raise click.ClickException(f"Could not create data directory: {e}") from e
    click.echo(f"Initialized ledger data in {store.root_dir}")


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show a summary of the data directory."""
    store = get_store(ctx)
    click.echo(store.summary_text())

    age = store.age_days()
    if age is not None:
        click.echo(f"Last modified: {age} day(s) ago")
    size = store.size_bytes()
    if size is not None:
        click.echo(f"Size: {size} bytes")

    if store.exists():
        _, ledger = open_ledger(ctx)
        if len(ledger):
            click.echo(f"Years: {ledger.min_year}-{ledger.max_year} ({len(ledger)} with records)")


@main.command()
@click.option("--force", is_flag=True, help="Rewrite every file, changed or not")
@click.pass_context
def save(ctx: click.Context, force: bool) -> None:
    """
    Load and write back the ledger.

    Without --force nothing is written, since nothing changed on load.
    With --force every year file and both taxonomies are rewritten in
    canonical form.
    """
    store, ledger = open_ledger(ctx)
    written = commit(ctx, store, ledger, force=force)
    click.echo(f"Wrote {len(written)} file(s)")


# Import command groups
from .concepts import concepts  # noqa: E402
from .records import records  # noqa: E402
from .stats import stats  # noqa: E402

main.add_command(concepts)
main.add_command(records)
main.add_command(stats)


if __name__ == "__main__":
    main()
