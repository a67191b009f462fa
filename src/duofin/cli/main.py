"""Main CLI entry point."""

import logging

import click

from duofin.cli.error_handling import handle_domain_error
from duofin.config import DATA_PATH_ENV, load_keyword_table, load_settings
from duofin.domain.errors import DomainError
from duofin.snapshot import load_snapshot

# Import and register all commands at module level
from duofin.cli.commands import (
    report,
    budget,
    bills,
    cards,
    suggest,
    projection,
)


@click.group()
@click.option(
    "--data",
    "data_path",
    type=click.Path(),
    help=f"Path to the JSON data snapshot (overrides {DATA_PATH_ENV} environment variable)",
    envvar=DATA_PATH_ENV,
)
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, data_path: str | None, verbose: bool):
    """Duofin - Shared household finance reports.

    Summarise a couple's transactions, bills, budgets and credit cards from a
    data snapshot exported by the application.
    """
    ctx.ensure_object(dict)

    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    # Load data only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            ctx.obj["settings"] = load_settings()
            ctx.obj["keywords"] = load_keyword_table()
            ctx.obj["snapshot"] = load_snapshot(data_path)
        except DomainError as e:
            handle_domain_error(ctx, e)


# Register all commands
report.register_commands(cli)
budget.register_commands(cli)
bills.register_commands(cli)
cards.register_commands(cli)
suggest.register_commands(cli)
projection.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
