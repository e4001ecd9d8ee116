"""Use case to build the consolidated annual report."""

from collections.abc import Iterable

from src.application.ports.closure_store import ClosureStorePort
from src.application.ports.transaction_store import TransactionStorePort
from src.application.use_cases.ledger_snapshot import (
    build_resolver,
    load_snapshot,
)
from src.domain.constants import DEFAULT_CATEGORIES, DEFAULT_MAX_LOOKBACK_MONTHS
from src.domain.models import AnnualReport, Period
from src.domain.services import build_annual_report
from src.infrastructure.logging.logger import get_app_logger


class GetAnnualReportUseCase:
    """Return category net balances for each month of a year."""

    def __init__(
        self,
        transaction_store: TransactionStorePort,
        closure_store: ClosureStorePort,
        logger=None,
        categories: Iterable[str] | None = None,
        epoch: Period | None = None,
        max_lookback_months: int = DEFAULT_MAX_LOOKBACK_MONTHS,
    ) -> None:
        """Initialize the use case.

        Args:
            transaction_store: Port providing live transactions.
            closure_store: Port providing closure records.
            logger: Optional logger compatible with logging.Logger-like API.
            categories: Categories listed first in the report rows.
            epoch: Configured ledger epoch, if any.
            max_lookback_months: Resolver walk-back limit.
        """
        self._transaction_store = transaction_store
        self._closure_store = closure_store
        self._logger = logger or get_app_logger()
        self._categories = tuple(categories or DEFAULT_CATEGORIES)
        self._epoch = epoch
        self._max_lookback_months = max_lookback_months

    def execute(self, year: int) -> AnnualReport:
        """Build the annual report for ``year``."""
        snapshot = load_snapshot(self._transaction_store, self._closure_store)
        resolver = build_resolver(
            snapshot,
            fallback_epoch=Period(year, 1),
            epoch=self._epoch,
            max_lookback_months=self._max_lookback_months,
            logger=self._logger,
        )
        report = build_annual_report(year, snapshot, resolver, self._categories)
        self._logger.info(
            f"Annual report {year}: {len(report.categories)} categories, "
            f"grand_total={report.grand_total}"
        )
        return report


__all__ = ["GetAnnualReportUseCase"]
