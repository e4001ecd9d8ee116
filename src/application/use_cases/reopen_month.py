"""Use case to reopen a closed month."""

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone

from src.application.ports.closure_store import ClosureStorePort
from src.domain.errors import NotClosed
from src.domain.models import ClosureStatus, MonthlyClosure, Period
from src.infrastructure.logging.logger import get_app_logger


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReopenMonthUseCase:
    """Retract a month's closure so it is derived from live data again."""

    def __init__(
        self,
        closure_store: ClosureStorePort,
        logger=None,
        delete_record: bool = False,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the use case.

        Args:
            closure_store: Port persisting closure records.
            logger: Optional logger compatible with logging.Logger-like API.
            delete_record: Delete the record instead of flagging it Open.
            clock: Source of the ``reopened_at`` timestamp.
        """
        self._closure_store = closure_store
        self._logger = logger or get_app_logger()
        self._delete_record = delete_record
        self._clock = clock

    def execute(self, year: int, month: int) -> MonthlyClosure | None:
        """Reopen the month.

        Args:
            year: Calendar year.
            month: Month number, 1 to 12.

        Returns:
            MonthlyClosure | None: The record now flagged Open, or None when
            the record was deleted.

        Raises:
            NotClosed: If the month has no Closed record.
        """
        period = Period(year, month)
        existing = self._closure_store.get_by_key(period)
        if existing is None or not existing.is_closed:
            self._logger.warning(f"Reopen rejected: {period.key} is not closed")
            raise NotClosed(period)

        if self._delete_record:
            if not self._closure_store.delete(period):
                raise NotClosed(period)
            self._logger.info(f"Reopened {period.key} by deleting its closure")
            return None

        reopened_at = self._clock()
        if not self._closure_store.set_status(
            period,
            ClosureStatus.OPEN,
            reopened_at,
        ):
            self._logger.warning(
                f"Reopen rejected: {period.key} was reopened concurrently"
            )
            raise NotClosed(period)
        self._logger.info(f"Reopened {period.key}")
        return replace(
            existing,
            status=ClosureStatus.OPEN,
            reopened_at=reopened_at,
        )


__all__ = ["ReopenMonthUseCase"]
