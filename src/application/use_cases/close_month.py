"""Use case to close a month into an immutable snapshot."""

from collections.abc import Callable
from datetime import datetime, timezone

from src.application.ports.closure_store import ClosureStorePort
from src.application.ports.transaction_store import TransactionStorePort
from src.application.use_cases.ledger_snapshot import (
    build_resolver,
    load_snapshot,
)
from src.domain.constants import DEFAULT_MAX_LOOKBACK_MONTHS
from src.domain.errors import AlreadyClosed
from src.domain.models import MonthlyClosure, Period
from src.domain.services import aggregate_month
from src.infrastructure.logging.logger import get_app_logger


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CloseMonthUseCase:
    """Freeze a month's figures into a Closed closure record.

    The month is aggregated from live transactions on top of the resolved
    opening balance. The store writes the record only if no Closed record
    exists, so a concurrent second close fails with ``AlreadyClosed``.
    """

    def __init__(
        self,
        transaction_store: TransactionStorePort,
        closure_store: ClosureStorePort,
        logger=None,
        epoch: Period | None = None,
        max_lookback_months: int = DEFAULT_MAX_LOOKBACK_MONTHS,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the use case.

        Args:
            transaction_store: Port providing live transactions.
            closure_store: Port persisting closure records.
            logger: Optional logger compatible with logging.Logger-like API.
            epoch: Configured ledger epoch, if any.
            max_lookback_months: Resolver walk-back limit.
            clock: Source of the ``closed_at`` timestamp.
        """
        self._transaction_store = transaction_store
        self._closure_store = closure_store
        self._logger = logger or get_app_logger()
        self._epoch = epoch
        self._max_lookback_months = max_lookback_months
        self._clock = clock

    def execute(self, year: int, month: int) -> MonthlyClosure:
        """Close the month.

        Args:
            year: Calendar year.
            month: Month number, 1 to 12.

        Returns:
            MonthlyClosure: The Closed record that was written.

        Raises:
            AlreadyClosed: If the month already has a Closed record.
        """
        period = Period(year, month)
        snapshot = load_snapshot(self._transaction_store, self._closure_store)
        if snapshot.is_closed(period):
            self._logger.warning(f"Close rejected: {period.key} already closed")
            raise AlreadyClosed(period)

        resolver = build_resolver(
            snapshot,
            fallback_epoch=period,
            epoch=self._epoch,
            max_lookback_months=self._max_lookback_months,
            logger=self._logger,
        )
        summary = aggregate_month(
            period,
            resolver.resolve_initial_balance(period),
            snapshot.transactions_in(period),
        )
        closure = MonthlyClosure.from_summary(summary, closed_at=self._clock())
        if not self._closure_store.create_if_absent(closure):
            self._logger.warning(
                f"Close rejected: {period.key} was closed concurrently"
            )
            raise AlreadyClosed(period)

        self._logger.info(
            f"Closed {period.key}: initial={closure.initial_balance}, "
            f"income={closure.total_income}, "
            f"expenses={closure.total_expenses}, "
            f"final={closure.final_balance}"
        )
        return closure


__all__ = ["CloseMonthUseCase"]
