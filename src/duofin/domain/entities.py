"""Domain model entities for duofin.

These are pure data classes representing the records a household shares
(transactions, bills, budget plans, credit cards) and the summaries derived
from them. They are independent of any storage schema: the collaborator that
fetches rows maps them into these types before calling the domain services.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from duofin.domain.errors import (
    ValidationError,
    invalid_month,
    negative_amount,
    paid_status_mismatch,
    InvalidDateError,
)


class Kind(str, Enum):
    """Direction of a monetary record."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class AppliesTo(str, Enum):
    """Which record kinds a category may be used for."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"
    BOTH = "BOTH"


class BillStatus(str, Enum):
    """Stored status of a bill."""

    PENDING = "PENDING"
    PAID = "PAID"
    OVERDUE = "OVERDUE"


class AdherenceStatus(str, Enum):
    """Budget adherence classification for a category."""

    OVER = "Over"
    NEAR = "Near"
    UNDER = "Under"


class TrendDirection(str, Enum):
    """Direction of a balance change between consecutive months."""

    UP = "up"
    DOWN = "down"
    STABLE = "stable"


MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def validate_month(month: int, year: int) -> None:
    """Raise InvalidDateError unless month is a calendar month."""
    if not isinstance(month, int) or not isinstance(year, int) or not 1 <= month <= 12:
        raise InvalidDateError(invalid_month(month, year))


@dataclass(frozen=True)
class Category:
    """Category domain entity."""

    id: str
    name: str
    color: str = "#6B7280"
    applies_to: AppliesTo = AppliesTo.BOTH


@dataclass(frozen=True)
class MonetaryRecord:
    """A dated income or expense.

    ``amount`` is always non-negative; direction is carried by ``kind``.
    """

    id: str
    amount: Decimal
    kind: Kind
    occurred_on: date
    category_id: Optional[str] = None
    owner_id: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self):
        if self.amount < 0:
            raise ValidationError(negative_amount("amount", self.amount))


@dataclass(frozen=True)
class Bill:
    """Bill domain entity.

    ``status`` is stored state; whether a bill is overdue is decided at read
    time against a reference date (see ``BillsService.is_overdue``).
    """

    id: str
    amount: Decimal
    due_on: date
    status: BillStatus = BillStatus.PENDING
    paid_on: Optional[date] = None
    category_id: Optional[str] = None
    recurring: bool = False
    title: str = ""
    owner_id: Optional[str] = None

    def __post_init__(self):
        if self.amount < 0:
            raise ValidationError(negative_amount("amount", self.amount))
        if (self.status == BillStatus.PAID) != (self.paid_on is not None):
            raise ValidationError(paid_status_mismatch(self.id))


@dataclass(frozen=True)
class BudgetEntry:
    """Planned spend for one category within a budget plan."""

    category_id: str
    planned_amount: Decimal

    def __post_init__(self):
        if self.planned_amount < 0:
            raise ValidationError(negative_amount("planned_amount", self.planned_amount))


@dataclass(frozen=True)
class BudgetPlan:
    """Monthly budget plan."""

    id: str
    month: int
    year: int
    entries: tuple[BudgetEntry, ...] = ()
    created_at: Optional[datetime] = None

    def __post_init__(self):
        validate_month(self.month, self.year)

    @property
    def total_planned(self) -> Decimal:
        return sum((entry.planned_amount for entry in self.entries), Decimal("0"))


@dataclass(frozen=True)
class CreditCard:
    """Credit card balance snapshot."""

    id: str
    name: str
    credit_limit: Decimal
    current_balance: Decimal = Decimal("0")
    is_active: bool = True

    def __post_init__(self):
        if self.credit_limit < 0:
            raise ValidationError(negative_amount("credit_limit", self.credit_limit))


@dataclass(frozen=True)
class MonthBucket:
    """Income and expense totals for one calendar month."""

    year: int
    month: int
    total_income: Decimal = Decimal("0")
    total_expense: Decimal = Decimal("0")

    @property
    def balance(self) -> Decimal:
        return self.total_income - self.total_expense

    @property
    def period_key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def period_label(self) -> str:
        return f"{MONTH_ABBREVIATIONS[self.month - 1]} {self.year}"


@dataclass(frozen=True)
class CategoryTotal:
    """Expense total for a category with its share of all expenses."""

    category_id: Optional[str]
    name: str
    color: str
    amount: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class OwnerTotals:
    """Income and expense totals attributed to one household member."""

    owner_id: Optional[str]
    total_income: Decimal
    total_expense: Decimal

    @property
    def balance(self) -> Decimal:
        return self.total_income - self.total_expense


@dataclass(frozen=True)
class TrendPoint:
    """Balance of a month compared to the month before it."""

    period_key: str
    period_label: str
    balance: Decimal
    change: Decimal
    change_percent: Decimal
    direction: TrendDirection


@dataclass(frozen=True)
class Projection:
    """Next-month forecast.

    ``projected_expenses`` is the trailing expense mean *plus* every pending
    bill due next month. Historical totals reflect amounts already paid, so a
    bill that also shows up in history is counted twice on purpose: the
    addition represents a known upcoming obligation.
    """

    projected_income: Decimal
    projected_expenses: Decimal
    upcoming_bills_count: int
    upcoming_bills_amount: Decimal
    recurring_bills_count: int = 0
    recurring_bills_amount: Decimal = Decimal("0")
    months_of_history: int = 0

    @property
    def projected_balance(self) -> Decimal:
        return self.projected_income - self.projected_expenses


@dataclass(frozen=True)
class CategoryAdherence:
    """Planned versus actual spend for one budget category."""

    category_id: str
    planned: Decimal
    spent: Decimal
    adherence_percent: Decimal
    variance_percentage: Decimal
    status: AdherenceStatus

    @property
    def is_over(self) -> bool:
        return self.spent > self.planned

    @property
    def variance(self) -> Decimal:
        return self.spent - self.planned


@dataclass(frozen=True)
class MonthComparison:
    """Overall adherence of the previous month's plan against the current one."""

    previous_adherence: Decimal
    difference: Decimal

    @property
    def is_improvement(self) -> bool:
        return self.difference < 0


@dataclass(frozen=True)
class BudgetAdherenceReport:
    """Per-category and overall adherence for one budget plan."""

    plan_id: str
    month: int
    year: int
    categories: tuple[CategoryAdherence, ...]
    total_planned: Decimal
    total_spent: Decimal
    overall_adherence: Decimal
    comparison: Optional[MonthComparison] = None

    @property
    def overall_adherence_display(self) -> Decimal:
        return min(self.overall_adherence, Decimal("100"))

    @property
    def is_over(self) -> bool:
        return self.total_spent > self.total_planned

    def _count(self, status: AdherenceStatus) -> int:
        return sum(1 for item in self.categories if item.status == status)

    @property
    def over_count(self) -> int:
        return self._count(AdherenceStatus.OVER)

    @property
    def on_track_count(self) -> int:
        return self._count(AdherenceStatus.UNDER)

    @property
    def at_risk_count(self) -> int:
        return self._count(AdherenceStatus.NEAR)


@dataclass(frozen=True)
class BudgetHistoryPoint:
    """Overall budget result for one month of a comparison window."""

    year: int
    month: int
    budgeted: Decimal
    spent: Decimal
    adherence: Decimal


@dataclass(frozen=True)
class BillTotals:
    """Bill counts and amounts by effective status.

    ``pending`` includes effectively overdue bills, so overdue is a subset of
    pending for both counts and amounts.
    """

    total: int = 0
    total_amount: Decimal = Decimal("0")
    pending: int = 0
    pending_amount: Decimal = Decimal("0")
    paid: int = 0
    paid_amount: Decimal = Decimal("0")
    overdue: int = 0
    overdue_amount: Decimal = Decimal("0")


@dataclass(frozen=True)
class CreditCardSummary:
    """Utilisation across active credit cards."""

    total_cards: int = 0
    total_limit: Decimal = Decimal("0")
    total_used: Decimal = Decimal("0")
    total_available: Decimal = Decimal("0")
    cards_near_limit: int = 0
    average_usage: Decimal = Decimal("0")


@dataclass(frozen=True)
class CategorySuggestion:
    """A ranked guess at the category of a description."""

    category: Category
    confidence: float
    reason: str

    @property
    def category_id(self) -> str:
        return self.category.id


@dataclass(frozen=True)
class FinancialReport:
    """Aggregates gathered for export."""

    start_date: Optional[date]
    end_date: Optional[date]
    buckets: tuple[MonthBucket, ...] = ()
    category_totals: tuple[CategoryTotal, ...] = ()
    owner_totals: tuple[OwnerTotals, ...] = ()
    trend: tuple[TrendPoint, ...] = ()
    adherence: Optional[BudgetAdherenceReport] = None
    bills: Optional[BillTotals] = None
    projection: Optional[Projection] = None
    credit_cards: Optional[CreditCardSummary] = None
    category_names: dict[str, str] = field(default_factory=dict)
