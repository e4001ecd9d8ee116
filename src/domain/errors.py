"""Domain errors raised by the ledger."""


class LedgerError(Exception):
    """Base class for ledger failures."""


class InvalidAmount(LedgerError, ValueError):
    """Raised when a monetary value cannot enter the ledger."""


class InvalidTransaction(LedgerError, ValueError):
    """Raised when transaction fields fail validation."""


class PeriodError(LedgerError):
    """Base class for errors tied to a single month."""

    reason = "operation failed"

    def __init__(self, period, message: str | None = None) -> None:
        self.period = period
        super().__init__(message or f"{self._label(period)}: {self.reason}")

    @staticmethod
    def _label(period) -> str:
        key = getattr(period, "key", None)
        return f"Month {key}" if key else f"Month {period}"


class AlreadyClosed(PeriodError):
    """Raised when closing a month that already has a Closed record."""

    reason = "already closed"


class NotClosed(PeriodError):
    """Raised when reopening a month that has no Closed record."""

    reason = "is not closed"


class MonthClosed(PeriodError):
    """Raised when a transaction write targets a closed month."""

    reason = "is closed; reopen it before editing its transactions"


class TransactionNotFound(LedgerError, LookupError):
    """Raised when a transaction id does not exist in the store."""


class StoreUnavailable(LedgerError):
    """Raised when the underlying persistence layer fails."""


class UnboundedRecursion(LedgerError):
    """Raised when balance resolution walks past the configured limit."""


class SummaryServiceError(LedgerError):
    """Raised when the text-generation service fails."""


class ConfigurationError(LedgerError, RuntimeError):
    """Raised when settings are missing or invalid."""


__all__ = [
    "LedgerError",
    "InvalidAmount",
    "InvalidTransaction",
    "PeriodError",
    "AlreadyClosed",
    "NotClosed",
    "MonthClosed",
    "TransactionNotFound",
    "StoreUnavailable",
    "UnboundedRecursion",
    "SummaryServiceError",
    "ConfigurationError",
]
