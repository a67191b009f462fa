"""Next-month projection domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from duofin.config import DEFAULT_SETTINGS, EngineSettings
from duofin.domain.bucketing import MonthlySummaryService
from duofin.domain.entities import Bill, BillStatus, MonetaryRecord, MonthBucket, Projection
from duofin.utils.date_parser import add_months, coerce_date, month_key

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class ProjectionService:
    """Service for forecasting next month's income and expenses."""

    def __init__(self, settings: EngineSettings = DEFAULT_SETTINGS):
        """Initialize projection service.

        Args:
            settings: Engine settings (uses ``trailing_months``)
        """
        self.settings = settings

    def trailing_buckets(
        self, buckets: Sequence[MonthBucket], reference_date: date
    ) -> list[MonthBucket]:
        """Most recent complete months strictly before the reference month."""
        current = month_key(reference_date)
        complete = sorted(
            (bucket for bucket in buckets if (bucket.year, bucket.month) < current),
            key=lambda bucket: (bucket.year, bucket.month),
        )
        if self.settings.trailing_months <= 0:
            return []
        return complete[-self.settings.trailing_months:]

    def upcoming_bills(self, bills: Iterable[Bill], reference_date: date) -> list[Bill]:
        """Pending bills due in the calendar month after the reference date."""
        next_key = add_months(reference_date.year, reference_date.month, 1)
        return [
            bill
            for bill in bills
            if bill.status == BillStatus.PENDING
            and month_key(coerce_date(bill.due_on)) == next_key
        ]

    def project(
        self,
        buckets: Sequence[MonthBucket],
        bills: Sequence[Bill] = (),
        reference_date=None,
    ) -> Projection:
        """Project next month from trailing averages plus known bills.

        Income and expenses are the plain mean of up to
        ``settings.trailing_months`` complete months before the reference
        month. Every pending bill due next month is then added to expenses.
        That addition can count a bill twice when a similar payment is already
        part of the history; it is kept because history holds what was paid
        while the addition holds what is already known to be owed.

        Args:
            buckets: Monthly buckets, in any order
            bills: Known bills
            reference_date: Date whose month is "current" (defaults to today)

        Returns:
            Projection for the month after ``reference_date``
        """
        reference = coerce_date(reference_date) if reference_date is not None else date.today()
        trailing = self.trailing_buckets(buckets, reference)
        divisor = max(len(trailing), 1)

        average_income = sum((b.total_income for b in trailing), ZERO) / divisor
        average_expense = sum((b.total_expense for b in trailing), ZERO) / divisor

        upcoming = self.upcoming_bills(bills, reference)
        upcoming_amount = sum((bill.amount for bill in upcoming), ZERO)

        recurring = [
            bill for bill in bills if bill.recurring and bill.status == BillStatus.PENDING
        ]

        logger.debug(
            "Projecting from %d months of history and %d upcoming bills",
            len(trailing),
            len(upcoming),
        )
        return Projection(
            projected_income=average_income,
            projected_expenses=average_expense + upcoming_amount,
            upcoming_bills_count=len(upcoming),
            upcoming_bills_amount=upcoming_amount,
            recurring_bills_count=len(recurring),
            recurring_bills_amount=sum((bill.amount for bill in recurring), ZERO),
            months_of_history=len(trailing),
        )

    def project_from_records(
        self,
        records: Iterable[MonetaryRecord],
        bills: Sequence[Bill] = (),
        reference_date=None,
        owner_id: Optional[str] = None,
    ) -> Projection:
        """Bucket raw records by month, then project."""
        reference = coerce_date(reference_date) if reference_date is not None else date.today()
        buckets = MonthlySummaryService().bucket_by_month(records, owner_id=owner_id)
        return self.project(buckets, bills, reference)
