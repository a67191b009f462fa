"""Load a household data snapshot exported from the hosted database.

The snapshot is a JSON document whose row layout follows the database tables
(``transactions``, ``bills``, ``budgets``, ``categories``, ``credit_cards``).
Mapper functions convert each row into a domain entity, so the domain
services never see storage field names.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

from duofin.domain import entities as domain
from duofin.domain.errors import ValidationError
from duofin.utils.amount_parser import parse_amount
from duofin.utils.date_parser import coerce_date, parse_timestamp

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Snapshot:
    """Already-fetched records of one household."""

    categories: tuple[domain.Category, ...] = ()
    records: tuple[domain.MonetaryRecord, ...] = ()
    bills: tuple[domain.Bill, ...] = ()
    budgets: tuple[domain.BudgetPlan, ...] = ()
    credit_cards: tuple[domain.CreditCard, ...] = ()

    @property
    def category_names(self) -> dict[str, str]:
        return {category.id: category.name for category in self.categories}


def _required(row: dict, key: str, table: str) -> Any:
    if row.get(key) is None:
        raise ValidationError(f"{table} row {row.get('id', '?')} is missing '{key}'")
    return row[key]


def _enum(enum_type, value, table: str):
    try:
        return enum_type(str(value).upper())
    except ValueError as e:
        raise ValidationError(f"{table}: invalid {enum_type.__name__} '{value}'") from e


def _integer(row: dict, key: str, table: str) -> int:
    value = _required(row, key, table)
    if isinstance(value, bool) or not (
        isinstance(value, int) or (isinstance(value, str) and value.strip().isdigit())
    ):
        raise ValidationError(f"{table} row {row.get('id', '?')}: invalid {key} '{value}'")
    return int(value)


def category_to_domain(row: dict) -> domain.Category:
    """Convert a categories row to a domain Category entity."""
    return domain.Category(
        id=str(_required(row, "id", "categories")),
        name=_required(row, "name", "categories"),
        color=row.get("color") or "#6B7280",
        applies_to=_enum(domain.AppliesTo, row.get("type") or "BOTH", "categories"),
    )


def transaction_to_domain(row: dict) -> domain.MonetaryRecord:
    """Convert a transactions row to a domain MonetaryRecord entity."""
    return domain.MonetaryRecord(
        id=str(_required(row, "id", "transactions")),
        amount=parse_amount(_required(row, "amount", "transactions")),
        kind=_enum(domain.Kind, _required(row, "type", "transactions"), "transactions"),
        occurred_on=coerce_date(_required(row, "transaction_date", "transactions")),
        category_id=row.get("category_id"),
        owner_id=row.get("user_id"),
        description=row.get("description"),
    )


def bill_to_domain(row: dict) -> domain.Bill:
    """Convert a bills row to a domain Bill entity."""
    paid_at = row.get("paid_at")
    return domain.Bill(
        id=str(_required(row, "id", "bills")),
        title=row.get("title") or "",
        amount=parse_amount(_required(row, "amount", "bills")),
        due_on=coerce_date(_required(row, "due_date", "bills")),
        status=_enum(domain.BillStatus, row.get("status") or "PENDING", "bills"),
        paid_on=coerce_date(paid_at) if paid_at else None,
        category_id=row.get("category_id"),
        recurring=bool(row.get("is_recurring", False)),
        owner_id=row.get("user_id"),
    )


def budget_to_domain(row: dict) -> domain.BudgetPlan:
    """Convert a budgets row with nested items to a domain BudgetPlan entity."""
    created_at = row.get("created_at")
    return domain.BudgetPlan(
        id=str(_required(row, "id", "budgets")),
        month=_integer(row, "month", "budgets"),
        year=_integer(row, "year", "budgets"),
        entries=tuple(
            domain.BudgetEntry(
                category_id=str(_required(item, "category_id", "budget_items")),
                planned_amount=parse_amount(_required(item, "amount", "budget_items")),
            )
            for item in row.get("items", [])
        ),
        created_at=parse_timestamp(created_at) if created_at else None,
    )


def credit_card_to_domain(row: dict) -> domain.CreditCard:
    """Convert a credit_cards row to a domain CreditCard entity."""
    return domain.CreditCard(
        id=str(_required(row, "id", "credit_cards")),
        name=row.get("name") or "",
        credit_limit=parse_amount(_required(row, "credit_limit", "credit_cards")),
        current_balance=parse_amount(row.get("current_balance") or 0),
        is_active=bool(row.get("is_active", True)),
    )


def _map_rows(data: dict, key: str, mapper: Callable[[dict], T]) -> tuple[T, ...]:
    rows = data.get(key) or []
    if not isinstance(rows, list):
        raise ValidationError(f"Snapshot key '{key}' must be a list")
    return tuple(mapper(row) for row in rows)


def snapshot_from_dict(data: dict) -> Snapshot:
    """Build a Snapshot from decoded JSON data.

    Raises:
        ValidationError: If a row is incomplete or holds invalid values
        InvalidDateError: If a row holds a malformed date
    """
    if not isinstance(data, dict):
        raise ValidationError("Snapshot must be a JSON object")
    return Snapshot(
        categories=_map_rows(data, "categories", category_to_domain),
        records=_map_rows(data, "transactions", transaction_to_domain),
        bills=_map_rows(data, "bills", bill_to_domain),
        budgets=_map_rows(data, "budgets", budget_to_domain),
        credit_cards=_map_rows(data, "credit_cards", credit_card_to_domain),
    )


def load_snapshot(path: Optional[str]) -> Snapshot:
    """Read a snapshot file.

    Args:
        path: Path to the JSON snapshot

    Returns:
        Snapshot

    Raises:
        ValidationError: If the file is missing, unreadable or malformed
    """
    if not path:
        raise ValidationError("No data snapshot given (use --data or DUOFIN_DATA_PATH)")
    try:
        with Path(path).open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ValidationError(f"Could not read snapshot '{path}': {e}") from e

    snapshot = snapshot_from_dict(data)
    logger.info(
        "Loaded snapshot %s: %d transactions, %d bills, %d budgets",
        path,
        len(snapshot.records),
        len(snapshot.bills),
        len(snapshot.budgets),
    )
    return snapshot
