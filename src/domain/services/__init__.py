"""Domain services package."""

from .aggregation import aggregate_month, summarize_transactions
from .annual import build_annual_report
from .balance import BalanceResolver, resolve_epoch
from .snapshot import LedgerSnapshot, build_snapshot
from .validation import parse_date, parse_kind, validate_transaction

__all__ = [
    "BalanceResolver",
    "LedgerSnapshot",
    "aggregate_month",
    "build_annual_report",
    "build_snapshot",
    "parse_date",
    "parse_kind",
    "resolve_epoch",
    "summarize_transactions",
    "validate_transaction",
]
