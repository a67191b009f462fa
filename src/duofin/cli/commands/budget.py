"""Budget adherence commands."""

from datetime import date

import click

from duofin.cli.error_handling import handle_domain_error
from duofin.domain.budget import BudgetAdherenceService
from duofin.domain.errors import DomainError
from duofin.domain.export import ReportExporter


@click.command("budget")
@click.option("--month", type=int, help="Budget month 1-12 (default: current month)")
@click.option("--year", type=int, help="Budget year (default: current year)")
@click.option("--history", is_flag=True, help="Also show budgeted vs spent for recent months")
@click.pass_context
def budget(ctx, month: int | None, year: int | None, history: bool):
    """Show budget adherence for a month."""
    snapshot = ctx.obj["snapshot"]
    settings = ctx.obj["settings"]
    service = BudgetAdherenceService(settings)
    exporter = ReportExporter(settings)

    today = date.today()
    if month is None:
        month = today.month
    if year is None:
        year = today.year

    try:
        plan = service.select_plan(snapshot.budgets, month, year)
        if plan is None:
            click.echo(f"No budget found for {year:04d}-{month:02d}.")
            return
        result = service.evaluate(plan, snapshot.records, plans=snapshot.budgets)
        points = (
            service.adherence_history(snapshot.budgets, snapshot.records, month, year)
            if history
            else []
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    names = snapshot.category_names
    click.echo(f"\nBudget Adherence {year:04d}-{month:02d}:")
    click.echo("-" * 80)
    click.echo(f"{'Category':<30} {'Planned':>12} {'Spent':>12} {'Adherence':>10} {'Status':>12}")
    click.echo("-" * 80)
    for item in result.categories:
        name = names.get(item.category_id, item.category_id)
        label = exporter.adherence_label(item.planned, item.spent).value
        click.echo(
            f"{name:<30} {item.planned:>12,.2f} {item.spent:>12,.2f} "
            f"{item.adherence_percent:>9.1f}% {label:>12}"
        )
    click.echo("-" * 80)
    click.echo(f"{'Overall adherence':<50} {result.overall_adherence_display:>19.1f}%")
    click.echo(
        f"On track: {result.on_track_count}  At risk: {result.at_risk_count}  "
        f"Over budget: {result.over_count}"
    )

    if result.comparison is not None:
        change = "improved" if result.comparison.is_improvement else "worsened"
        click.echo(
            f"Previous month: {result.comparison.previous_adherence:.1f}% "
            f"({result.comparison.difference:+.1f} points, {change})"
        )

    if points:
        click.echo("\nHistory:")
        click.echo(f"{'Month':<20} {'Budgeted':>15} {'Spent':>15} {'Adherence':>12}")
        for point in points:
            click.echo(
                f"{point.year:04d}-{point.month:02d}{'':<13} {point.budgeted:>15,.2f} "
                f"{point.spent:>15,.2f} {point.adherence:>11.1f}%"
            )


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget)
