"""Report export domain service.

Renders aggregated report data as in-memory representations. Writing files,
triggering downloads or printing belongs to the caller.
"""

import csv
import io
import json
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Optional, Union

from duofin.config import DEFAULT_SETTINGS, EngineSettings
from duofin.domain.entities import (
    BudgetAdherenceReport,
    CategoryAdherence,
    FinancialReport,
    MonthBucket,
)
from duofin.domain.errors import UnsupportedFormatError, unsupported_format

TABULAR_COLUMNS = ("period", "income", "expenses", "balance")
LINE_WIDTH = 80


class ExportFormat(str, Enum):
    """Supported export representations."""

    TABULAR = "tabular"
    STRUCTURED = "structured"
    PRINTABLE = "printable"


class AdherenceLabel(str, Enum):
    """Printable status of a budget category."""

    EXCELLENT = "Excellent"
    AT_LIMIT = "AtLimit"
    EXCEEDED = "Exceeded"


@dataclass(frozen=True)
class TabularReport:
    """One row per month with period, income, expenses and balance."""

    columns: tuple[str, ...]
    rows: tuple[tuple[str, Decimal, Decimal, Decimal], ...]

    def to_csv(self) -> str:
        """Render the table as CSV text with a header line."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(self.columns)
        for row in self.rows:
            writer.writerow([str(value) for value in row])
        return buffer.getvalue()


def _format_amount(amount: Decimal) -> str:
    return f"{amount:,.2f}"


def _format_percent(value: Decimal) -> str:
    return f"{value:.1f}%"


class ReportExporter:
    """Service for rendering report aggregates in flat representations."""

    def __init__(
        self,
        settings: EngineSettings = DEFAULT_SETTINGS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize report exporter.

        Args:
            settings: Engine settings (uses ``excellent_ratio``)
            clock: Callable returning the generation timestamp (defaults to
                the current UTC time)
        """
        self.settings = settings
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def export(
        self, report: FinancialReport, fmt: Union[ExportFormat, str]
    ) -> Union[dict[str, Any], TabularReport, str]:
        """Render a report in the requested format.

        Raises:
            UnsupportedFormatError: If the format tag is not known
        """
        try:
            export_format = ExportFormat(fmt)
        except ValueError as e:
            raise UnsupportedFormatError(
                unsupported_format(fmt, [f.value for f in ExportFormat])
            ) from e

        if export_format == ExportFormat.STRUCTURED:
            return self.to_structured(report)
        if export_format == ExportFormat.TABULAR:
            return self.to_tabular(report)
        return self.to_printable(report)

    def adherence_label(self, planned: Decimal, spent: Decimal) -> AdherenceLabel:
        """Label spend against plan for printing."""
        if planned > 0:
            ratio = spent / planned
        else:
            ratio = Decimal("0") if spent == 0 else Decimal("Infinity")
        if ratio <= self.settings.excellent_ratio:
            return AdherenceLabel.EXCELLENT
        if ratio <= 1:
            return AdherenceLabel.AT_LIMIT
        return AdherenceLabel.EXCEEDED

    def to_tabular(self, report: FinancialReport) -> TabularReport:
        """One row per month bucket."""
        return TabularReport(
            columns=TABULAR_COLUMNS,
            rows=tuple(
                (bucket.period_key, bucket.total_income, bucket.total_expense, bucket.balance)
                for bucket in report.buckets
            ),
        )

    def to_structured(self, report: FinancialReport) -> dict[str, Any]:
        """All aggregates as one nested record plus a generation timestamp."""
        return {
            "generated_at": self.clock().isoformat(),
            "filters": {
                "start_date": report.start_date.isoformat() if report.start_date else None,
                "end_date": report.end_date.isoformat() if report.end_date else None,
            },
            "monthly": [self._bucket_record(bucket) for bucket in report.buckets],
            "categories": [
                {
                    "category_id": item.category_id,
                    "name": item.name,
                    "color": item.color,
                    "amount": item.amount,
                    "percentage": item.percentage,
                }
                for item in report.category_totals
            ],
            "owners": [
                {
                    "owner_id": item.owner_id,
                    "income": item.total_income,
                    "expenses": item.total_expense,
                    "balance": item.balance,
                }
                for item in report.owner_totals
            ],
            "trend": [
                {
                    "period": point.period_key,
                    "balance": point.balance,
                    "change": point.change,
                    "change_percent": point.change_percent,
                    "direction": point.direction.value,
                }
                for point in report.trend
            ],
            "adherence": self._adherence_record(report.adherence),
            "bills": self._plain(report.bills),
            "projection": self._projection_record(report),
            "credit_cards": self._plain(report.credit_cards),
        }

    def dumps(self, report: FinancialReport) -> str:
        """Structured export serialized as JSON; decimals become strings."""
        return json.dumps(self.to_structured(report), indent=2, default=str, ensure_ascii=False)

    def to_printable(self, report: FinancialReport) -> str:
        """Human-readable document with the monthly and adherence tables."""
        lines = ["Financial Report", "=" * LINE_WIDTH]

        if report.start_date or report.end_date:
            start = report.start_date.isoformat() if report.start_date else "..."
            end = report.end_date.isoformat() if report.end_date else "..."
            lines.append(f"Period: {start} - {end}")
        lines.append(f"Generated at: {self.clock().strftime('%Y-%m-%d %H:%M')}")
        lines.append("")

        total_income = sum((b.total_income for b in report.buckets), Decimal("0"))
        total_expense = sum((b.total_expense for b in report.buckets), Decimal("0"))
        lines.append(f"{'Total income':<50} {_format_amount(total_income):>20}")
        lines.append(f"{'Total expenses':<50} {_format_amount(total_expense):>20}")
        lines.append(f"{'Balance':<50} {_format_amount(total_income - total_expense):>20}")
        lines.append("")

        lines.extend(self._monthly_table(report.buckets))

        if report.adherence is not None:
            lines.append("")
            lines.extend(self._adherence_table(report.adherence, report.category_names))

        return "\n".join(lines) + "\n"

    def _monthly_table(self, buckets: tuple[MonthBucket, ...]) -> list[str]:
        lines = [
            "Monthly Evolution",
            "-" * LINE_WIDTH,
            f"{'Month':<20} {'Income':>19} {'Expenses':>19} {'Balance':>19}",
            "-" * LINE_WIDTH,
        ]
        if not buckets:
            lines.append("No transactions found.")
        for bucket in buckets:
            lines.append(
                f"{bucket.period_label:<20} "
                f"{_format_amount(bucket.total_income):>19} "
                f"{_format_amount(bucket.total_expense):>19} "
                f"{_format_amount(bucket.balance):>19}"
            )
        return lines

    def _adherence_table(
        self, adherence: BudgetAdherenceReport, category_names: dict[str, str]
    ) -> list[str]:
        lines = [
            f"Budget Adherence {adherence.year:04d}-{adherence.month:02d}",
            "-" * LINE_WIDTH,
            f"{'Category':<24} {'Planned':>13} {'Spent':>13} {'Variance':>13} {'Status':>13}",
            "-" * LINE_WIDTH,
        ]
        for item in adherence.categories:
            name = category_names.get(item.category_id, item.category_id)
            lines.append(
                f"{name:<24} "
                f"{_format_amount(item.planned):>13} "
                f"{_format_amount(item.spent):>13} "
                f"{_format_amount(item.variance):>13} "
                f"{self.adherence_label(item.planned, item.spent).value:>13}"
            )
        lines.append("-" * LINE_WIDTH)
        lines.append(
            f"{'Overall adherence':<50} "
            f"{_format_percent(adherence.overall_adherence_display):>20}"
        )
        return lines

    def _bucket_record(self, bucket: MonthBucket) -> dict[str, Any]:
        return {
            "period": bucket.period_key,
            "label": bucket.period_label,
            "income": bucket.total_income,
            "expenses": bucket.total_expense,
            "balance": bucket.balance,
        }

    def _category_record(self, item: CategoryAdherence) -> dict[str, Any]:
        return {
            "category_id": item.category_id,
            "planned": item.planned,
            "spent": item.spent,
            "adherence_percent": item.adherence_percent,
            "is_over": item.is_over,
            "variance": item.variance,
            "variance_percentage": item.variance_percentage,
            "status": item.status.value,
            "label": self.adherence_label(item.planned, item.spent).value,
        }

    def _adherence_record(
        self, adherence: Optional[BudgetAdherenceReport]
    ) -> Optional[dict[str, Any]]:
        if adherence is None:
            return None
        comparison = None
        if adherence.comparison is not None:
            comparison = {
                "previous_adherence": adherence.comparison.previous_adherence,
                "difference": adherence.comparison.difference,
                "is_improvement": adherence.comparison.is_improvement,
            }
        return {
            "plan_id": adherence.plan_id,
            "month": adherence.month,
            "year": adherence.year,
            "total_planned": adherence.total_planned,
            "total_spent": adherence.total_spent,
            "overall_adherence": adherence.overall_adherence,
            "categories": [self._category_record(item) for item in adherence.categories],
            "comparison": comparison,
        }

    def _projection_record(self, report: FinancialReport) -> Optional[dict[str, Any]]:
        if report.projection is None:
            return None
        record = self._plain(report.projection)
        record["projected_balance"] = report.projection.projected_balance
        return record

    def _plain(self, value) -> Optional[dict[str, Any]]:
        if value is None:
            return None
        return asdict(value)
