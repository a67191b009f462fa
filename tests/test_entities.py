"""Tests for domain entities."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from duofin.domain.entities import (
    Bill,
    BillStatus,
    BudgetEntry,
    BudgetPlan,
    Category,
    Kind,
    MonetaryRecord,
    MonthBucket,
    Projection,
)
from duofin.domain.errors import InvalidDateError, ValidationError


class TestMonetaryRecord:
    """Tests for MonetaryRecord entity."""

    def test_create_record(self):
        """Test creating a MonetaryRecord entity."""
        record = MonetaryRecord(
            id="t1",
            amount=Decimal("42.50"),
            kind=Kind.EXPENSE,
            occurred_on=date(2024, 1, 15),
            category_id="cat-food",
        )
        assert record.amount == Decimal("42.50")
        assert record.kind == Kind.EXPENSE
        assert record.owner_id is None

    def test_record_immutability(self):
        """Test that MonetaryRecord entities are immutable."""
        record = MonetaryRecord(
            id="t1", amount=Decimal("1"), kind=Kind.INCOME, occurred_on=date(2024, 1, 1)
        )
        with pytest.raises(Exception):  # dataclass frozen raises FrozenInstanceError
            record.amount = Decimal("2")

    def test_negative_amount_rejected(self):
        """Direction is carried by kind, never by sign."""
        with pytest.raises(ValidationError):
            MonetaryRecord(
                id="t1", amount=Decimal("-1"), kind=Kind.EXPENSE, occurred_on=date(2024, 1, 1)
            )


class TestBill:
    """Tests for Bill entity."""

    def test_paid_requires_paid_on(self):
        with pytest.raises(ValidationError):
            Bill(id="b1", amount=Decimal("10"), due_on=date(2024, 1, 1), status=BillStatus.PAID)

    def test_unpaid_rejects_paid_on(self):
        with pytest.raises(ValidationError):
            Bill(
                id="b1",
                amount=Decimal("10"),
                due_on=date(2024, 1, 1),
                status=BillStatus.PENDING,
                paid_on=date(2024, 1, 1),
            )

    def test_defaults_to_pending(self):
        bill = Bill(id="b1", amount=Decimal("10"), due_on=date(2024, 1, 1))
        assert bill.status == BillStatus.PENDING
        assert bill.paid_on is None
        assert bill.recurring is False


class TestBudgetPlan:
    """Tests for BudgetPlan entity."""

    def test_total_planned(self):
        plan = BudgetPlan(
            id="p1",
            month=3,
            year=2024,
            entries=(BudgetEntry("a", Decimal("100")), BudgetEntry("b", Decimal("250.50"))),
        )
        assert plan.total_planned == Decimal("350.50")

    def test_invalid_month_rejected(self):
        with pytest.raises(InvalidDateError):
            BudgetPlan(id="p1", month=13, year=2024)

    def test_negative_planned_amount_rejected(self):
        with pytest.raises(ValidationError):
            BudgetEntry("a", Decimal("-5"))

    def test_created_at_optional(self):
        plan = BudgetPlan(id="p1", month=1, year=2024, created_at=datetime(2024, 1, 1))
        assert plan.entries == ()
        assert plan.total_planned == Decimal("0")


class TestMonthBucket:
    """Tests for MonthBucket entity."""

    def test_balance_is_income_minus_expense(self):
        bucket = MonthBucket(
            year=2024, month=1, total_income=Decimal("100.10"), total_expense=Decimal("200.20")
        )
        assert bucket.balance == Decimal("-100.10")

    def test_period_key_and_label(self):
        bucket = MonthBucket(year=2024, month=2)
        assert bucket.period_key == "2024-02"
        assert bucket.period_label == "Feb 2024"


def test_projection_balance():
    projection = Projection(
        projected_income=Decimal("0"),
        projected_expenses=Decimal("350"),
        upcoming_bills_count=1,
        upcoming_bills_amount=Decimal("350"),
    )
    assert projection.projected_balance == Decimal("-350")


def test_category_defaults():
    category = Category(id="c1", name="Lazer")
    assert category.color == "#6B7280"
    assert category.applies_to.value == "BOTH"
