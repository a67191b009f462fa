"""Bill commands."""

import click

from duofin.cli.error_handling import handle_domain_error, parse_date_option
from duofin.domain.bills import BillsService
from duofin.domain.errors import DomainError


def print_bills(bills) -> None:
    """Print bills as a table ordered as given."""
    click.echo(f"{'Due':<12} {'Title':<40} {'Status':<10} {'Amount':>15}")
    click.echo("-" * 80)
    for bill in bills:
        click.echo(
            f"{bill.due_on.isoformat():<12} {(bill.title or bill.id)[:40]:<40} "
            f"{bill.status.value:<10} {bill.amount:>15,.2f}"
        )


@click.group()
def bills_group():
    """Summarise bills."""
    pass


@bills_group.command("summary")
@click.option("--as-of", help="Reference date (default: today)")
@click.pass_context
def summary(ctx, as_of: str | None):
    """Show bill counts and amounts by status."""
    service = BillsService(ctx.obj["settings"])
    reference = parse_date_option(ctx, as_of, "reference date")
    totals = service.totals(ctx.obj["snapshot"].bills, reference)

    click.echo("\nBills:")
    click.echo("-" * 80)
    click.echo(f"{'Status':<30} {'Count':>10} {'Amount':>20}")
    click.echo("-" * 80)
    click.echo(f"{'Pending (incl. overdue)':<30} {totals.pending:>10} {totals.pending_amount:>20,.2f}")
    click.echo(f"{'Overdue':<30} {totals.overdue:>10} {totals.overdue_amount:>20,.2f}")
    click.echo(f"{'Paid':<30} {totals.paid:>10} {totals.paid_amount:>20,.2f}")
    click.echo("-" * 80)
    click.echo(f"{'Total':<30} {totals.total:>10} {totals.total_amount:>20,.2f}")


@bills_group.command("upcoming")
@click.option("--as-of", help="Reference date (default: today)")
@click.option("--days", type=int, help="Days ahead to include (default: 15)")
@click.pass_context
def upcoming(ctx, as_of: str | None, days: int | None):
    """List pending bills due soon."""
    service = BillsService(ctx.obj["settings"])
    reference = parse_date_option(ctx, as_of, "reference date")
    try:
        bills = service.upcoming(ctx.obj["snapshot"].bills, reference, days)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not bills:
        click.echo("No upcoming bills.")
        return
    print_bills(bills)


@bills_group.command("overdue")
@click.option("--as-of", help="Reference date (default: today)")
@click.pass_context
def overdue(ctx, as_of: str | None):
    """List overdue bills."""
    service = BillsService(ctx.obj["settings"])
    reference = parse_date_option(ctx, as_of, "reference date")
    bills = service.overdue(ctx.obj["snapshot"].bills, reference)

    if not bills:
        click.echo("No overdue bills.")
        return
    print_bills(bills)


def register_commands(cli):
    """Register bill commands with main CLI."""
    cli.add_command(bills_group, name="bills")
