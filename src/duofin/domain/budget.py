"""Budget adherence domain service."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from duofin.config import DEFAULT_SETTINGS, EngineSettings
from duofin.domain.entities import (
    AdherenceStatus,
    BudgetAdherenceReport,
    BudgetHistoryPoint,
    BudgetPlan,
    CategoryAdherence,
    Kind,
    MonetaryRecord,
    MonthComparison,
    validate_month,
)
from duofin.utils.date_parser import add_months, coerce_date, month_key

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


class BudgetAdherenceService:
    """Service for comparing budget plans with actual spending."""

    def __init__(self, settings: EngineSettings = DEFAULT_SETTINGS):
        """Initialize budget adherence service.

        Args:
            settings: Engine settings (uses ``near_limit_ratio`` and
                ``budget_history_months``)
        """
        self.settings = settings

    def select_plan(
        self, plans: Iterable[BudgetPlan], month: int, year: int
    ) -> Optional[BudgetPlan]:
        """Find the plan for a period.

        When several plans exist for the same (month, year), the one with the
        latest ``created_at`` wins. Plans without ``created_at`` rank below any
        dated plan, and remaining ties go to the plan listed last.
        """
        validate_month(month, year)
        selected = None
        for plan in plans:
            if plan.month != month or plan.year != year:
                continue
            if selected is None or _creation_rank(plan) >= _creation_rank(selected):
                selected = plan
        return selected

    def expenses_by_category(
        self, records: Iterable[MonetaryRecord], month: int, year: int
    ) -> dict[Optional[str], Decimal]:
        """Sum expense amounts per category for one calendar month."""
        spent: dict[Optional[str], Decimal] = {}
        for record in records:
            if record.kind != Kind.EXPENSE:
                continue
            if month_key(coerce_date(record.occurred_on)) != (year, month):
                continue
            spent[record.category_id] = spent.get(record.category_id, ZERO) + record.amount
        return spent

    def classify(self, planned: Decimal, spent: Decimal) -> AdherenceStatus:
        """Classify spend against plan; first matching rule wins."""
        if spent > planned:
            return AdherenceStatus.OVER
        if planned > 0 and spent / planned >= self.settings.near_limit_ratio:
            return AdherenceStatus.NEAR
        return AdherenceStatus.UNDER

    def category_adherence(
        self, category_id: str, planned: Decimal, spent: Decimal
    ) -> CategoryAdherence:
        """Build adherence for one category.

        ``adherence_percent`` is capped at 100 for display; the uncapped
        overage lives in ``variance`` and ``variance_percentage``. A zero plan
        yields 0% adherence (and status Over when anything was spent).
        """
        if planned > 0:
            adherence = min(spent / planned * HUNDRED, HUNDRED)
            variance_percentage = (spent - planned) / planned * HUNDRED
        else:
            adherence = ZERO
            variance_percentage = ZERO
        return CategoryAdherence(
            category_id=category_id,
            planned=planned,
            spent=spent,
            adherence_percent=adherence,
            variance_percentage=variance_percentage,
            status=self.classify(planned, spent),
        )

    def overall_adherence(self, total_planned: Decimal, total_spent: Decimal) -> Decimal:
        """Raw (uncapped) overall adherence percentage; 0 for an empty plan."""
        if total_planned > 0:
            return total_spent / total_planned * HUNDRED
        return ZERO

    def evaluate(
        self,
        plan: BudgetPlan,
        records: Sequence[MonetaryRecord],
        plans: Optional[Sequence[BudgetPlan]] = None,
    ) -> BudgetAdherenceReport:
        """Evaluate a plan against the expenses of its month.

        Args:
            plan: Budget plan to evaluate
            records: Monetary records; only expenses in the plan's month count
            plans: Optional plans to search for the previous month's plan. When
                given and a plan for the previous month exists, the report
                carries a month-over-month comparison.

        Returns:
            BudgetAdherenceReport
        """
        spent_by_category = self.expenses_by_category(records, plan.month, plan.year)

        categories = tuple(
            self.category_adherence(
                entry.category_id,
                entry.planned_amount,
                spent_by_category.get(entry.category_id, ZERO),
            )
            for entry in plan.entries
        )
        total_planned = sum((item.planned for item in categories), ZERO)
        total_spent = sum((item.spent for item in categories), ZERO)
        overall = self.overall_adherence(total_planned, total_spent)

        comparison = None
        if plans is not None:
            comparison = self.compare_with_previous(plan, overall, records, plans)

        logger.debug(
            "Evaluated plan %s: %d categories, overall %s%%",
            plan.id,
            len(categories),
            overall,
        )
        return BudgetAdherenceReport(
            plan_id=plan.id,
            month=plan.month,
            year=plan.year,
            categories=categories,
            total_planned=total_planned,
            total_spent=total_spent,
            overall_adherence=overall,
            comparison=comparison,
        )

    def compare_with_previous(
        self,
        plan: BudgetPlan,
        overall: Decimal,
        records: Sequence[MonetaryRecord],
        plans: Sequence[BudgetPlan],
    ) -> Optional[MonthComparison]:
        """Signed percentage-point change from the previous month's plan."""
        prev_year, prev_month = add_months(plan.year, plan.month, -1)
        previous = self.select_plan(plans, prev_month, prev_year)
        if previous is None:
            return None

        spent = self.expenses_by_category(records, prev_month, prev_year)
        prev_spent = sum(
            (spent.get(entry.category_id, ZERO) for entry in previous.entries), ZERO
        )
        prev_overall = self.overall_adherence(previous.total_planned, prev_spent)
        return MonthComparison(previous_adherence=prev_overall, difference=overall - prev_overall)

    def adherence_history(
        self,
        plans: Sequence[BudgetPlan],
        records: Sequence[MonetaryRecord],
        month: int,
        year: int,
        months: Optional[int] = None,
    ) -> list[BudgetHistoryPoint]:
        """Overall budgeted versus spent for a window of months ending at (month, year).

        Spent covers every expense of the month, not only planned categories.
        Months without a plan report a budget of zero; adherence is capped at
        100 for display.
        """
        validate_month(month, year)
        months = self.settings.budget_history_months if months is None else months
        points = []
        for offset in range(months - 1, -1, -1):
            point_year, point_month = add_months(year, month, -offset)
            plan = self.select_plan(plans, point_month, point_year)
            budgeted = plan.total_planned if plan else ZERO
            spent = sum(
                self.expenses_by_category(records, point_month, point_year).values(), ZERO
            )
            adherence = min(self.overall_adherence(budgeted, spent), HUNDRED)
            points.append(
                BudgetHistoryPoint(
                    year=point_year,
                    month=point_month,
                    budgeted=budgeted,
                    spent=spent,
                    adherence=adherence,
                )
            )
        return points


def _creation_rank(plan: BudgetPlan) -> tuple[int, datetime]:
    if plan.created_at is None:
        return (0, datetime.min)
    return (1, plan.created_at.replace(tzinfo=None))
