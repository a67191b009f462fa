"""Report commands."""

from datetime import date

import click

from duofin.cli.date_filters import collect_period_flags, period_options, resolve_cli_date_range
from duofin.cli.error_handling import handle_domain_error, parse_date_option
from duofin.domain.bills import BillsService
from duofin.domain.bucketing import MonthlySummaryService
from duofin.domain.budget import BudgetAdherenceService
from duofin.domain.credit_cards import CreditCardService
from duofin.domain.entities import FinancialReport
from duofin.domain.errors import DomainError, NotFoundError, category_not_found
from duofin.domain.export import ExportFormat, ReportExporter, TabularReport
from duofin.domain.projection import ProjectionService
from duofin.utils.date_parser import get_date_range


def build_report(
    snapshot,
    settings,
    start_date=None,
    end_date=None,
    owner_id=None,
    category_ids=None,
    reference_date: date | None = None,
) -> FinancialReport:
    """Gather every aggregate of a snapshot into one report.

    Raises:
        NotFoundError: If a requested category ID is not in the snapshot
    """
    reference = reference_date or date.today()
    for category_id in category_ids or ():
        if category_id not in snapshot.category_names:
            raise NotFoundError(category_not_found(category_id))

    summary_service = MonthlySummaryService()
    budget_service = BudgetAdherenceService(settings)

    buckets = summary_service.bucket_by_month(
        snapshot.records,
        start_date=start_date,
        end_date=end_date,
        owner_id=owner_id,
        category_ids=category_ids,
    )

    adherence = None
    plan = budget_service.select_plan(snapshot.budgets, reference.month, reference.year)
    if plan is not None:
        adherence = budget_service.evaluate(plan, snapshot.records, plans=snapshot.budgets)

    return FinancialReport(
        start_date=start_date,
        end_date=end_date,
        buckets=tuple(buckets),
        category_totals=tuple(
            summary_service.category_breakdown(
                snapshot.records,
                snapshot.categories,
                start_date=start_date,
                end_date=end_date,
                owner_id=owner_id,
            )
        ),
        owner_totals=tuple(
            summary_service.owner_comparison(
                snapshot.records, start_date=start_date, end_date=end_date
            )
        ),
        trend=tuple(summary_service.balance_trend(buckets)),
        adherence=adherence,
        bills=BillsService(settings).totals(snapshot.bills, reference),
        projection=ProjectionService(settings).project_from_records(
            snapshot.records, snapshot.bills, reference, owner_id=owner_id
        ),
        credit_cards=CreditCardService(settings).summarize(snapshot.credit_cards),
        category_names=snapshot.category_names,
    )


@click.command("report")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.option("--owner", help="Only include records of this user ID")
@click.option("--category", "categories", multiple=True, help="Only include this category ID (repeatable)")
@click.option(
    "--format",
    "fmt",
    type=click.Choice([f.value for f in ExportFormat], case_sensitive=False),
    default=ExportFormat.PRINTABLE.value,
    help="Output format (default: printable)",
)
@click.option("--as-of", help="Reference date for bills, budget and projection (default: today)")
@click.pass_context
def report(ctx, start_date, end_date, owner, categories, fmt, as_of, **kwargs):
    """Show the financial report for a period (default: last 6 months)."""
    snapshot = ctx.obj["snapshot"]
    settings = ctx.obj["settings"]

    reference = parse_date_option(ctx, as_of, "reference date") or date.today()
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(kwargs),
        default_range=get_date_range("last-6-months", today=reference),
        today=reference,
    )

    try:
        financial_report = build_report(
            snapshot,
            settings,
            start_date=start,
            end_date=end,
            owner_id=owner,
            category_ids=list(categories) or None,
            reference_date=reference,
        )
        exporter = ReportExporter(settings)
        if fmt.lower() == ExportFormat.STRUCTURED.value:
            click.echo(exporter.dumps(financial_report))
            return
        output = exporter.export(financial_report, fmt.lower())
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if isinstance(output, TabularReport):
        click.echo(output.to_csv(), nl=False)
    else:
        click.echo(output, nl=False)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report)
