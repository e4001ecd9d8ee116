"""Domain models package."""

from .company import CompanyProfile
from .ledger import (
    CategoryTotals,
    ClosureStatus,
    MonthlyClosure,
    MonthSummary,
    Transaction,
    TransactionDraft,
    TransactionKind,
)
from .period import Period, months_of_year
from .reports import (
    AnnualMonthColumn,
    AnnualReport,
    CapitalOverview,
    MonthReport,
)
from .summary import (
    SummaryEntry,
    SummaryOutcome,
    SummaryRequest,
    SummaryResult,
)

__all__ = [
    "AnnualMonthColumn",
    "AnnualReport",
    "CapitalOverview",
    "CategoryTotals",
    "ClosureStatus",
    "CompanyProfile",
    "MonthReport",
    "MonthSummary",
    "MonthlyClosure",
    "Period",
    "SummaryEntry",
    "SummaryOutcome",
    "SummaryRequest",
    "SummaryResult",
    "Transaction",
    "TransactionDraft",
    "TransactionKind",
    "months_of_year",
]
