"""Shared pytest fixtures for duofin tests."""

import json
from datetime import date, datetime
from decimal import Decimal

import pytest

from duofin.domain.entities import (
    Bill,
    BillStatus,
    BudgetEntry,
    BudgetPlan,
    Category,
    CreditCard,
    Kind,
    MonetaryRecord,
)


def make_record(
    record_id,
    kind,
    amount,
    occurred_on,
    category_id=None,
    owner_id=None,
    description=None,
):
    """Build a MonetaryRecord from short arguments."""
    return MonetaryRecord(
        id=record_id,
        amount=Decimal(str(amount)),
        kind=kind,
        occurred_on=occurred_on,
        category_id=category_id,
        owner_id=owner_id,
        description=description,
    )


@pytest.fixture
def categories():
    """Household categories."""
    return [
        Category(id="cat-food", name="Alimentação", color="#F59E0B"),
        Category(id="cat-transport", name="Transporte", color="#3B82F6"),
        Category(id="cat-home", name="Moradia", color="#10B981"),
        Category(id="cat-salary", name="Salário", color="#22C55E"),
    ]


@pytest.fixture
def sample_records():
    """Two months of income and expenses for two owners."""
    return [
        make_record("t1", Kind.INCOME, "5000", date(2024, 1, 15), "cat-salary", "ana"),
        make_record("t2", Kind.EXPENSE, "800", date(2024, 1, 20), "cat-food", "bruno", "Supermercado Extra"),
        make_record("t3", Kind.INCOME, "5200", date(2024, 2, 15), "cat-salary", "ana"),
        make_record("t4", Kind.EXPENSE, "900", date(2024, 2, 18), "cat-transport", "ana", "Posto Shell"),
    ]


@pytest.fixture
def sample_bills():
    """Bills in every status around 2024-03-10."""
    return [
        Bill(id="b1", title="Internet", amount=Decimal("120"), due_on=date(2024, 3, 5)),
        Bill(
            id="b2",
            title="Aluguel",
            amount=Decimal("2000"),
            due_on=date(2024, 3, 1),
            status=BillStatus.PAID,
            paid_on=date(2024, 3, 1),
        ),
        Bill(id="b3", title="Luz", amount=Decimal("180"), due_on=date(2024, 2, 25), status=BillStatus.OVERDUE),
        Bill(id="b4", title="Condomínio", amount=Decimal("450"), due_on=date(2024, 3, 15), recurring=True),
        Bill(id="b5", title="IPTU", amount=Decimal("350"), due_on=date(2024, 4, 10)),
    ]


@pytest.fixture
def sample_plans():
    """Budget plans for January and February 2024."""
    return [
        BudgetPlan(
            id="p-jan",
            month=1,
            year=2024,
            entries=(
                BudgetEntry("cat-food", Decimal("1000")),
                BudgetEntry("cat-transport", Decimal("500")),
            ),
            created_at=datetime(2023, 12, 28),
        ),
        BudgetPlan(
            id="p-feb",
            month=2,
            year=2024,
            entries=(
                BudgetEntry("cat-food", Decimal("1000")),
                BudgetEntry("cat-transport", Decimal("1000")),
            ),
            created_at=datetime(2024, 1, 30),
        ),
    ]


@pytest.fixture
def sample_cards():
    """Credit cards, one near its limit and one inactive."""
    return [
        CreditCard(id="c1", name="Nubank", credit_limit=Decimal("5000"), current_balance=Decimal("4500")),
        CreditCard(id="c2", name="Itaú", credit_limit=Decimal("3000"), current_balance=Decimal("600")),
        CreditCard(
            id="c3",
            name="Old card",
            credit_limit=Decimal("1000"),
            current_balance=Decimal("900"),
            is_active=False,
        ),
    ]


@pytest.fixture
def snapshot_data():
    """Snapshot rows laid out like the database tables."""
    return {
        "categories": [
            {"id": "cat-food", "name": "Alimentação", "color": "#F59E0B", "type": "EXPENSE"},
            {"id": "cat-transport", "name": "Transporte", "color": "#3B82F6", "type": "EXPENSE"},
            {"id": "cat-salary", "name": "Salário", "color": "#22C55E", "type": "INCOME"},
        ],
        "transactions": [
            {"id": "t1", "amount": 5000, "type": "INCOME", "transaction_date": "2024-01-15",
             "category_id": "cat-salary", "user_id": "ana", "description": "Salário"},
            {"id": "t2", "amount": "800.00", "type": "EXPENSE", "transaction_date": "2024-01-20",
             "category_id": "cat-food", "user_id": "bruno", "description": "Supermercado Extra"},
            {"id": "t3", "amount": 5200, "type": "INCOME", "transaction_date": "2024-02-15",
             "category_id": "cat-salary", "user_id": "ana", "description": "Salário"},
            {"id": "t4", "amount": "900", "type": "EXPENSE", "transaction_date": "2024-02-18",
             "category_id": "cat-transport", "user_id": "ana", "description": "Posto Shell"},
        ],
        "bills": [
            {"id": "b1", "title": "Internet", "amount": 120, "due_date": "2024-03-05", "status": "PENDING"},
            {"id": "b2", "title": "Aluguel", "amount": 2000, "due_date": "2024-03-01",
             "status": "PAID", "paid_at": "2024-03-01"},
            {"id": "b5", "title": "IPTU", "amount": 350, "due_date": "2024-04-10", "status": "PENDING",
             "is_recurring": False},
        ],
        "budgets": [
            {"id": "p-feb", "month": 2, "year": 2024, "created_at": "2024-01-30T10:00:00",
             "items": [{"category_id": "cat-food", "amount": 1000},
                       {"category_id": "cat-transport", "amount": 800}]},
        ],
        "credit_cards": [
            {"id": "c1", "name": "Nubank", "credit_limit": 5000, "current_balance": 4500, "is_active": True},
        ],
    }


@pytest.fixture
def snapshot_path(tmp_path, snapshot_data):
    """Write the sample snapshot to a temporary JSON file."""
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot_data), encoding="utf-8")
    return str(path)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def record():
    """Factory for MonetaryRecord values."""
    return make_record
