"""Domain models for month, annual and overview reports."""

from dataclasses import dataclass, field
from decimal import Decimal

from src.domain.models.company import CompanyProfile
from src.domain.models.ledger import MonthSummary, Transaction
from src.domain.models.period import Period


@dataclass(frozen=True)
class MonthReport:
    """Month summary plus the detail rows shown beneath it."""

    summary: MonthSummary
    transactions: list[Transaction]
    currency_code: str
    company: CompanyProfile | None = None


@dataclass(frozen=True)
class AnnualMonthColumn:
    """One month column of the consolidated annual matrix."""

    period: Period
    initial_balance: Decimal
    final_balance: Decimal
    category_nets: dict[str, Decimal] = field(default_factory=dict)
    net_total: Decimal = Decimal("0")
    is_closed: bool = False


@dataclass(frozen=True)
class AnnualReport:
    """Category-by-month net balances for a calendar year.

    Attributes:
        year: Reported year.
        categories: Row labels in display order.
        months: Twelve columns in calendar order.
        category_year_totals: Row sums across the year.
        grand_total: Sum of every cell.
    """

    year: int
    categories: list[str]
    months: list[AnnualMonthColumn]
    category_year_totals: dict[str, Decimal]
    grand_total: Decimal

    def cell(self, category: str, month: int) -> Decimal:
        """Return the net balance of ``category`` in ``month`` (1-based)."""
        column = self.months[month - 1]
        return column.category_nets.get(category, Decimal("0"))

    @property
    def opening_balance(self) -> Decimal:
        return self.months[0].initial_balance

    @property
    def closing_balance(self) -> Decimal:
        return self.months[-1].final_balance


@dataclass(frozen=True)
class CapitalOverview:
    """Headline figures for the dashboard."""

    total_income: Decimal
    total_expenses: Decimal
    capital: Decimal
    as_of: Period
    transaction_count: int


__all__ = [
    "MonthReport",
    "AnnualMonthColumn",
    "AnnualReport",
    "CapitalOverview",
]
