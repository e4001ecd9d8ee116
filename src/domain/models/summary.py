"""Models exchanged with the monthly text-summary service."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from src.domain.models.period import Period


@dataclass(frozen=True)
class SummaryEntry:
    """A single income or expense line sent to the summary service."""

    date: date
    amount: Decimal
    description: str


@dataclass(frozen=True)
class SummaryRequest:
    """Structured input for a monthly summary.

    The totals come from the month aggregate. For a Closed month they are
    the frozen closure figures, which may differ from the listed entries
    when rows were added after closing.
    """

    period: Period
    income: list[SummaryEntry]
    expenses: list[SummaryEntry]
    capital: Decimal
    benchmarks: str | None = None
    initial_balance: Decimal = Decimal("0")
    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    is_closed: bool = False


@dataclass(frozen=True)
class SummaryResult:
    """Generated summary text and cash-flow suggestions."""

    summary: str
    suggestions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SummaryOutcome:
    """Either a summary result or a displayable error message."""

    result: SummaryResult | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None and self.error is None


__all__ = [
    "SummaryEntry",
    "SummaryRequest",
    "SummaryResult",
    "SummaryOutcome",
]
