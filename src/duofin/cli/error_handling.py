"""CLI error handling helpers."""

import click

from duofin.domain.errors import DomainError
from duofin.utils.date_parser import parse_date


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def parse_date_option(ctx: click.Context, value: str | None, label: str):
    """Parse an optional date option, exiting with an error when malformed."""
    if not value:
        return None
    try:
        return parse_date(value)
    except DomainError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)
