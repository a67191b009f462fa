"""Bills domain service."""

import dataclasses
import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from duofin.config import DEFAULT_SETTINGS, EngineSettings
from duofin.domain.entities import Bill, BillStatus, BillTotals
from duofin.domain.errors import ValidationError
from duofin.utils.date_parser import coerce_date

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class BillsService:
    """Service for classifying and totalling bills as of a reference date."""

    def __init__(self, settings: EngineSettings = DEFAULT_SETTINGS):
        """Initialize bills service.

        Args:
            settings: Engine settings (uses ``upcoming_days``)
        """
        self.settings = settings

    def _reference(self, reference_date) -> date:
        return coerce_date(reference_date) if reference_date is not None else date.today()

    def is_overdue(self, bill: Bill, reference_date=None) -> bool:
        """Whether a bill is effectively overdue.

        A stored OVERDUE status always counts, and so does a PENDING bill
        whose due date is before the reference date, whatever its stored
        status says.
        """
        if bill.status == BillStatus.OVERDUE:
            return True
        reference = self._reference(reference_date)
        return bill.status == BillStatus.PENDING and coerce_date(bill.due_on) < reference

    def totals(self, bills: Iterable[Bill], reference_date=None) -> BillTotals:
        """Count and sum bills by effective status.

        Pending counts include overdue bills, so ``pending_amount`` always
        covers ``overdue_amount``.
        """
        reference = self._reference(reference_date)
        total = pending = paid = overdue = 0
        total_amount = pending_amount = paid_amount = overdue_amount = ZERO

        for bill in bills:
            total += 1
            total_amount += bill.amount

            if bill.status in (BillStatus.PENDING, BillStatus.OVERDUE):
                pending += 1
                pending_amount += bill.amount

            if self.is_overdue(bill, reference):
                overdue += 1
                overdue_amount += bill.amount

            if bill.status == BillStatus.PAID:
                paid += 1
                paid_amount += bill.amount

        logger.debug("Bill totals as of %s: %d bills, %d overdue", reference, total, overdue)
        return BillTotals(
            total=total,
            total_amount=total_amount,
            pending=pending,
            pending_amount=pending_amount,
            paid=paid,
            paid_amount=paid_amount,
            overdue=overdue,
            overdue_amount=overdue_amount,
        )

    def upcoming(
        self,
        bills: Iterable[Bill],
        reference_date=None,
        days_ahead: Optional[int] = None,
    ) -> list[Bill]:
        """Pending bills due within [reference_date, reference_date + days_ahead].

        Returns:
            Bills ordered by due date, earliest first

        Raises:
            ValidationError: If days_ahead is negative
        """
        reference = self._reference(reference_date)
        days_ahead = self.settings.upcoming_days if days_ahead is None else days_ahead
        if days_ahead < 0:
            raise ValidationError(f"days_ahead must not be negative (got {days_ahead})")
        horizon = reference + timedelta(days=days_ahead)

        matching = [
            bill
            for bill in bills
            if bill.status == BillStatus.PENDING
            and reference <= coerce_date(bill.due_on) <= horizon
        ]
        return sorted(matching, key=lambda bill: coerce_date(bill.due_on))

    def overdue(self, bills: Iterable[Bill], reference_date=None) -> list[Bill]:
        """Effectively overdue bills ordered by due date, earliest first."""
        reference = self._reference(reference_date)
        return sorted(
            (bill for bill in bills if self.is_overdue(bill, reference)),
            key=lambda bill: coerce_date(bill.due_on),
        )

    def mark_paid(self, bill: Bill, paid_on=None) -> Bill:
        """Return a copy of the bill marked as paid on ``paid_on`` (default today)."""
        return dataclasses.replace(bill, status=BillStatus.PAID, paid_on=self._reference(paid_on))

    def mark_pending(self, bill: Bill) -> Bill:
        """Return a copy of the bill marked as pending with no payment date."""
        return dataclasses.replace(bill, status=BillStatus.PENDING, paid_on=None)

    def duplicate(self, bill: Bill, new_id: str, due_on) -> Bill:
        """Return a pending copy of a bill under a new ID and due date."""
        return dataclasses.replace(
            bill,
            id=new_id,
            due_on=coerce_date(due_on),
            status=BillStatus.PENDING,
            paid_on=None,
        )
