"""Domain package for business rules and core models."""

from .constants import DEFAULT_CATEGORIES
from .errors import (
    AlreadyClosed,
    ConfigurationError,
    InvalidAmount,
    InvalidTransaction,
    LedgerError,
    MonthClosed,
    NotClosed,
    StoreUnavailable,
    SummaryServiceError,
    TransactionNotFound,
    UnboundedRecursion,
)
from .models import (
    AnnualMonthColumn,
    AnnualReport,
    CapitalOverview,
    CategoryTotals,
    ClosureStatus,
    CompanyProfile,
    MonthlyClosure,
    MonthReport,
    MonthSummary,
    Period,
    Transaction,
    TransactionDraft,
    TransactionKind,
)

__all__ = [
    "DEFAULT_CATEGORIES",
    "AlreadyClosed",
    "ConfigurationError",
    "InvalidAmount",
    "InvalidTransaction",
    "LedgerError",
    "MonthClosed",
    "NotClosed",
    "StoreUnavailable",
    "SummaryServiceError",
    "TransactionNotFound",
    "UnboundedRecursion",
    "AnnualMonthColumn",
    "AnnualReport",
    "CapitalOverview",
    "CategoryTotals",
    "ClosureStatus",
    "CompanyProfile",
    "MonthlyClosure",
    "MonthReport",
    "MonthSummary",
    "Period",
    "Transaction",
    "TransactionDraft",
    "TransactionKind",
]
