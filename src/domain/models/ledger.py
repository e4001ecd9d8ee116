"""Domain models for ledger transactions and monthly closures."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from src.domain.models.period import Period


class TransactionKind(str, Enum):
    """Direction of a transaction relative to the fund's capital."""

    INCOME = "income"
    EXPENSE = "expense"


class ClosureStatus(str, Enum):
    """Lifecycle state of a monthly closure record."""

    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class TransactionDraft:
    """Validated transaction fields, before an id is assigned."""

    kind: TransactionKind
    amount: Decimal
    category: str
    description: str
    date: date

    @property
    def period(self) -> Period:
        return Period.from_date(self.date)


@dataclass(frozen=True)
class Transaction:
    """A single income or expense movement.

    Attributes:
        id: Opaque identifier assigned by the store.
        kind: Income adds to capital, expense subtracts from it.
        amount: Non-negative exact amount.
        category: Business category label.
        description: Free text, 2 to 100 characters.
        date: Calendar date of the movement.
    """

    id: str
    kind: TransactionKind
    amount: Decimal
    category: str
    description: str
    date: date

    @property
    def period(self) -> Period:
        return Period.from_date(self.date)

    @property
    def signed_amount(self) -> Decimal:
        """Return the amount with the sign of its effect on capital."""
        if self.kind is TransactionKind.INCOME:
            return self.amount
        return -self.amount

    def to_draft(self) -> TransactionDraft:
        return TransactionDraft(
            kind=self.kind,
            amount=self.amount,
            category=self.category,
            description=self.description,
            date=self.date,
        )


@dataclass(frozen=True)
class CategoryTotals:
    """Income and expense accumulated for one category."""

    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")

    @property
    def net(self) -> Decimal:
        return self.income - self.expense


@dataclass(frozen=True)
class MonthSummary:
    """Full financial picture of one month.

    ``final_balance`` is derived, never stored, so it always agrees with
    the opening balance and the month's totals.
    """

    period: Period
    initial_balance: Decimal
    total_income: Decimal
    total_expenses: Decimal
    category_totals: dict[str, CategoryTotals] = field(default_factory=dict)
    is_closed: bool = False

    @property
    def net_change(self) -> Decimal:
        return self.total_income - self.total_expenses

    @property
    def final_balance(self) -> Decimal:
        return self.initial_balance + self.net_change


@dataclass(frozen=True)
class MonthlyClosure:
    """Frozen snapshot of a month's figures.

    Attributes:
        period: Month the closure covers.
        status: Closed records are authoritative for their month.
        initial_balance: Balance carried into the month.
        total_income: Sum of income in the month.
        total_expenses: Sum of expenses in the month.
        category_totals: Per-category income and expense.
        closed_at: When the month was last closed.
        reopened_at: When the month was last reopened, if ever.
    """

    period: Period
    status: ClosureStatus
    initial_balance: Decimal
    total_income: Decimal
    total_expenses: Decimal
    category_totals: dict[str, CategoryTotals]
    closed_at: datetime
    reopened_at: datetime | None = None

    @property
    def id(self) -> str:
        return self.period.key

    @property
    def year(self) -> int:
        return self.period.year

    @property
    def month(self) -> int:
        return self.period.month

    @property
    def is_closed(self) -> bool:
        return self.status is ClosureStatus.CLOSED

    @property
    def final_balance(self) -> Decimal:
        return self.initial_balance + self.total_income - self.total_expenses

    def to_summary(self) -> MonthSummary:
        """Return the stored figures as a month summary."""
        return MonthSummary(
            period=self.period,
            initial_balance=self.initial_balance,
            total_income=self.total_income,
            total_expenses=self.total_expenses,
            category_totals=dict(self.category_totals),
            is_closed=self.is_closed,
        )

    @classmethod
    def from_summary(
        cls,
        summary: MonthSummary,
        closed_at: datetime,
    ) -> "MonthlyClosure":
        """Freeze a month summary into a Closed record."""
        return cls(
            period=summary.period,
            status=ClosureStatus.CLOSED,
            initial_balance=summary.initial_balance,
            total_income=summary.total_income,
            total_expenses=summary.total_expenses,
            category_totals=dict(summary.category_totals),
            closed_at=closed_at,
        )


__all__ = [
    "TransactionKind",
    "ClosureStatus",
    "TransactionDraft",
    "Transaction",
    "CategoryTotals",
    "MonthSummary",
    "MonthlyClosure",
]
