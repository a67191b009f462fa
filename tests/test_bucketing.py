"""Tests for monthly summary service."""

from datetime import date
from decimal import Decimal

import pytest

from duofin.domain.bucketing import MonthlySummaryService
from duofin.domain.entities import Kind, TrendDirection
from duofin.domain.errors import InvalidDateError


@pytest.fixture
def service():
    return MonthlySummaryService()


def test_bucket_by_month_two_months(service, sample_records):
    buckets = service.bucket_by_month(sample_records)

    assert [b.period_key for b in buckets] == ["2024-01", "2024-02"]
    assert buckets[0].total_income == Decimal("5000")
    assert buckets[0].total_expense == Decimal("800")
    assert buckets[0].balance == Decimal("4200")
    assert buckets[1].total_income == Decimal("5200")
    assert buckets[1].total_expense == Decimal("900")
    assert buckets[1].balance == Decimal("4300")


def test_bucket_by_month_empty_input(service):
    assert service.bucket_by_month([]) == []


def test_bucket_by_month_omits_empty_months(service, record):
    records = [
        record("a", Kind.EXPENSE, "10", date(2024, 1, 5)),
        record("b", Kind.EXPENSE, "20", date(2024, 4, 5)),
    ]

    buckets = service.bucket_by_month(records)

    assert [b.period_key for b in buckets] == ["2024-01", "2024-04"]


def test_bucket_totals_cover_every_record(service, sample_records):
    """Every record lands in exactly one bucket."""
    buckets = service.bucket_by_month(sample_records)

    income = sum(r.amount for r in sample_records if r.kind == Kind.INCOME)
    expense = sum(r.amount for r in sample_records if r.kind == Kind.EXPENSE)
    assert sum(b.total_income for b in buckets) == income
    assert sum(b.total_expense for b in buckets) == expense


def test_bucket_by_month_sorted_across_years(service, record):
    records = [
        record("a", Kind.INCOME, "1", date(2024, 1, 1)),
        record("b", Kind.INCOME, "1", date(2023, 12, 31)),
    ]

    buckets = service.bucket_by_month(records)

    assert [b.period_key for b in buckets] == ["2023-12", "2024-01"]


def test_bucket_by_month_owner_filter(service, sample_records):
    buckets = service.bucket_by_month(sample_records, owner_id="bruno")

    assert len(buckets) == 1
    assert buckets[0].period_key == "2024-01"
    assert buckets[0].total_income == Decimal("0")
    assert buckets[0].total_expense == Decimal("800")


def test_bucket_by_month_category_filter(service, sample_records):
    buckets = service.bucket_by_month(sample_records, category_ids=["cat-transport"])

    assert [(b.period_key, b.total_expense) for b in buckets] == [("2024-02", Decimal("900"))]


def test_bucket_by_month_date_bounds_inclusive(service, sample_records):
    buckets = service.bucket_by_month(
        sample_records, start_date="2024-01-20", end_date=date(2024, 2, 15)
    )

    assert [(b.period_key, b.total_income, b.total_expense) for b in buckets] == [
        ("2024-01", Decimal("0"), Decimal("800")),
        ("2024-02", Decimal("5200"), Decimal("0")),
    ]


def test_bucket_by_month_inverted_range(service, sample_records):
    with pytest.raises(InvalidDateError):
        service.bucket_by_month(
            sample_records, start_date=date(2024, 3, 1), end_date=date(2024, 1, 1)
        )


@pytest.mark.parametrize("raw", ["not-a-date", "2024-02", "March", "15", "yesterday"])
def test_bucket_by_month_malformed_record_date(service, record, raw):
    records = [record("a", Kind.INCOME, "1", raw)]

    with pytest.raises(InvalidDateError):
        service.bucket_by_month(records)


def test_string_record_dates_are_parsed(service, record):
    records = [record("a", Kind.INCOME, "10.50", "2024-05-02")]

    buckets = service.bucket_by_month(records)

    assert buckets[0].period_key == "2024-05"
    assert buckets[0].total_income == Decimal("10.50")


def test_current_month_summary(service, sample_records):
    bucket = service.current_month_summary(sample_records, reference_date=date(2024, 2, 28))

    assert bucket.period_key == "2024-02"
    assert bucket.balance == Decimal("4300")


def test_current_month_summary_empty_month(service, sample_records):
    bucket = service.current_month_summary(sample_records, reference_date=date(2024, 6, 1))

    assert bucket.total_income == Decimal("0")
    assert bucket.total_expense == Decimal("0")


def test_category_breakdown(service, sample_records, categories, record):
    records = sample_records + [record("x", Kind.EXPENSE, "300", date(2024, 2, 1), "missing")]

    totals = service.category_breakdown(records, categories)

    assert [t.name for t in totals] == ["Transporte", "Alimentação", "Uncategorized"]
    assert totals[0].amount == Decimal("900")
    assert totals[0].percentage == Decimal("45")
    assert totals[2].category_id is None
    assert sum(t.percentage for t in totals) == Decimal("100")


def test_category_breakdown_no_expenses(service, categories, record):
    records = [record("a", Kind.INCOME, "100", date(2024, 1, 1), "cat-salary")]

    assert service.category_breakdown(records, categories) == []


def test_owner_comparison(service, sample_records):
    owners = service.owner_comparison(sample_records)

    assert [o.owner_id for o in owners] == ["ana", "bruno"]
    assert owners[0].total_income == Decimal("10200")
    assert owners[0].total_expense == Decimal("900")
    assert owners[1].balance == Decimal("-800")


def test_balance_trend(service, sample_records):
    buckets = service.bucket_by_month(sample_records)

    trend = service.balance_trend(buckets)

    assert trend[0].change == Decimal("0")
    assert trend[0].direction == TrendDirection.STABLE
    assert trend[1].change == Decimal("100")
    assert trend[1].direction == TrendDirection.UP
    assert trend[1].period_label == "Feb 2024"


def test_balance_trend_from_zero_balance(service, record):
    records = [
        record("a", Kind.INCOME, "100", date(2024, 1, 1)),
        record("b", Kind.EXPENSE, "100", date(2024, 1, 2)),
        record("c", Kind.EXPENSE, "50", date(2024, 2, 1)),
    ]

    trend = service.balance_trend(service.bucket_by_month(records))

    assert trend[1].direction == TrendDirection.DOWN
    assert trend[1].change_percent == Decimal("0")
