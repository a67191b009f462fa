"""Monthly summary domain service."""

import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from duofin.domain.entities import (
    Category,
    CategoryTotal,
    Kind,
    MonetaryRecord,
    MonthBucket,
    OwnerTotals,
    TrendDirection,
    TrendPoint,
)
from duofin.domain.errors import InvalidDateError, inverted_range
from duofin.utils.date_parser import coerce_date, month_key

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
UNCATEGORIZED_NAME = "Uncategorized"
UNCATEGORIZED_COLOR = "#6B7280"


class MonthlySummaryService:
    """Service for grouping monetary records into calendar months."""

    def filter_records(
        self,
        records: Iterable[MonetaryRecord],
        start_date=None,
        end_date=None,
        owner_id: Optional[str] = None,
        category_ids: Optional[Iterable[str]] = None,
    ) -> list[tuple[date, MonetaryRecord]]:
        """Get records matching report criteria, paired with their parsed date.

        Args:
            records: Records to filter
            start_date: Optional inclusive start date (date or string)
            end_date: Optional inclusive end date (date or string)
            owner_id: Optional owner to restrict to
            category_ids: Optional category IDs to restrict to

        Returns:
            List of (occurred_on, record) pairs in input order

        Raises:
            InvalidDateError: If a bound or a record date is malformed, or
                start_date is after end_date
        """
        start = coerce_date(start_date) if start_date is not None else None
        end = coerce_date(end_date) if end_date is not None else None
        if start is not None and end is not None and start > end:
            raise InvalidDateError(inverted_range(start, end))

        wanted_categories = set(category_ids) if category_ids is not None else None

        matched = []
        for record in records:
            occurred = coerce_date(record.occurred_on)
            if start is not None and occurred < start:
                continue
            if end is not None and occurred > end:
                continue
            if owner_id is not None and record.owner_id != owner_id:
                continue
            if wanted_categories is not None and record.category_id not in wanted_categories:
                continue
            matched.append((occurred, record))
        return matched

    def group_records_by_month(
        self, dated_records: Iterable[tuple[date, MonetaryRecord]]
    ) -> dict[tuple[int, int], list[MonetaryRecord]]:
        """Group dated records by (year, month)."""
        grouped: dict[tuple[int, int], list[MonetaryRecord]] = defaultdict(list)
        for occurred, record in dated_records:
            grouped[month_key(occurred)].append(record)
        return dict(grouped)

    def build_bucket(
        self, year: int, month: int, records: Iterable[MonetaryRecord]
    ) -> MonthBucket:
        """Sum income and expense amounts of records into one bucket."""
        income = ZERO
        expense = ZERO
        for record in records:
            if record.kind == Kind.INCOME:
                income += record.amount
            else:
                expense += record.amount
        return MonthBucket(year=year, month=month, total_income=income, total_expense=expense)

    def bucket_by_month(
        self,
        records: Iterable[MonetaryRecord],
        start_date=None,
        end_date=None,
        owner_id: Optional[str] = None,
        category_ids: Optional[Iterable[str]] = None,
    ) -> list[MonthBucket]:
        """Build one bucket per month that has records, oldest first.

        Months without records are omitted rather than zero-filled; callers
        that need a contiguous series must fill the gaps themselves. The owner
        and category filters are applied before grouping and never move bucket
        boundaries.

        Returns:
            List of MonthBucket ordered by (year, month); empty for no records
        """
        dated = self.filter_records(
            records,
            start_date=start_date,
            end_date=end_date,
            owner_id=owner_id,
            category_ids=category_ids,
        )
        grouped = self.group_records_by_month(dated)
        buckets = [
            self.build_bucket(year, month, grouped[(year, month)])
            for year, month in sorted(grouped)
        ]
        logger.debug("Bucketed %d records into %d months", len(dated), len(buckets))
        return buckets

    def current_month_summary(
        self, records: Iterable[MonetaryRecord], reference_date=None
    ) -> MonthBucket:
        """Totals for the month containing ``reference_date`` (zero if empty)."""
        reference = coerce_date(reference_date) if reference_date is not None else date.today()
        key = month_key(reference)
        month_records = [
            record
            for occurred, record in self.filter_records(records)
            if month_key(occurred) == key
        ]
        return self.build_bucket(key[0], key[1], month_records)

    def category_breakdown(
        self,
        records: Iterable[MonetaryRecord],
        categories: Sequence[Category],
        start_date=None,
        end_date=None,
        owner_id: Optional[str] = None,
    ) -> list[CategoryTotal]:
        """Expense totals per category with their share of all expenses.

        Records whose category is unknown are grouped as "Uncategorized".
        Results are sorted by amount, highest first.
        """
        category_index = {category.id: category for category in categories}
        totals: dict[Optional[str], Decimal] = defaultdict(lambda: ZERO)
        total_expense = ZERO

        for _, record in self.filter_records(
            records, start_date=start_date, end_date=end_date, owner_id=owner_id
        ):
            if record.kind != Kind.EXPENSE:
                continue
            key = record.category_id if record.category_id in category_index else None
            totals[key] += record.amount
            total_expense += record.amount

        results = []
        for category_id, amount in totals.items():
            category = category_index.get(category_id)
            percentage = amount / total_expense * 100 if total_expense > 0 else ZERO
            results.append(
                CategoryTotal(
                    category_id=category_id,
                    name=category.name if category else UNCATEGORIZED_NAME,
                    color=category.color if category else UNCATEGORIZED_COLOR,
                    amount=amount,
                    percentage=percentage,
                )
            )
        return sorted(results, key=lambda item: item.amount, reverse=True)

    def owner_comparison(
        self,
        records: Iterable[MonetaryRecord],
        start_date=None,
        end_date=None,
    ) -> list[OwnerTotals]:
        """Income and expense per owner, in order of first appearance."""
        sums: dict[Optional[str], list[Decimal]] = {}
        for _, record in self.filter_records(records, start_date=start_date, end_date=end_date):
            income_expense = sums.setdefault(record.owner_id, [ZERO, ZERO])
            if record.kind == Kind.INCOME:
                income_expense[0] += record.amount
            else:
                income_expense[1] += record.amount

        return [
            OwnerTotals(owner_id=owner_id, total_income=income, total_expense=expense)
            for owner_id, (income, expense) in sums.items()
        ]

    def balance_trend(self, buckets: Sequence[MonthBucket]) -> list[TrendPoint]:
        """Compare each bucket's balance with the bucket before it.

        The first bucket is compared with itself, so its change is zero.
        """
        points = []
        previous_balance: Optional[Decimal] = None
        for bucket in buckets:
            balance = bucket.balance
            prev = balance if previous_balance is None else previous_balance
            change = balance - prev
            change_percent = change / abs(prev) * 100 if prev != 0 else ZERO
            if change > 0:
                direction = TrendDirection.UP
            elif change < 0:
                direction = TrendDirection.DOWN
            else:
                direction = TrendDirection.STABLE
            points.append(
                TrendPoint(
                    period_key=bucket.period_key,
                    period_label=bucket.period_label,
                    balance=balance,
                    change=change,
                    change_percent=change_percent,
                    direction=direction,
                )
            )
            previous_balance = balance
        return points
