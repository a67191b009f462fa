"""Projection commands."""

from datetime import date

import click

from duofin.cli.error_handling import parse_date_option
from duofin.domain.bucketing import MonthlySummaryService
from duofin.domain.projection import ProjectionService


@click.command("projection")
@click.option("--as-of", help="Reference date (default: today)")
@click.option("--owner", help="Only use records of this user ID")
@click.pass_context
def projection(ctx, as_of: str | None, owner: str | None):
    """Show this month's totals and next month's projection."""
    snapshot = ctx.obj["snapshot"]
    reference = parse_date_option(ctx, as_of, "reference date") or date.today()

    current = MonthlySummaryService().current_month_summary(
        [r for r in snapshot.records if owner is None or r.owner_id == owner], reference
    )
    result = ProjectionService(ctx.obj["settings"]).project_from_records(
        snapshot.records, snapshot.bills, reference, owner_id=owner
    )

    click.echo(f"\nCurrent month ({current.period_label}):")
    click.echo("-" * 80)
    click.echo(f"{'Income':<50} {current.total_income:>20,.2f}")
    click.echo(f"{'Expenses':<50} {current.total_expense:>20,.2f}")
    click.echo(f"{'Balance':<50} {current.balance:>20,.2f}")

    click.echo(f"\nNext month projection ({result.months_of_history} months of history):")
    click.echo("-" * 80)
    click.echo(f"{'Projected income':<50} {result.projected_income:>20,.2f}")
    click.echo(f"{'Projected expenses':<50} {result.projected_expenses:>20,.2f}")
    click.echo(f"{'Projected balance':<50} {result.projected_balance:>20,.2f}")
    click.echo(
        f"{'Upcoming bills':<50} {result.upcoming_bills_count:>5} "
        f"{result.upcoming_bills_amount:>14,.2f}"
    )
    click.echo(
        f"{'Recurring bills':<50} {result.recurring_bills_count:>5} "
        f"{result.recurring_bills_amount:>14,.2f}"
    )


def register_commands(cli):
    """Register projection commands with main CLI."""
    cli.add_command(projection)
