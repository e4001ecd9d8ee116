"""Use case to build the report of a single month."""

from src.application.ports.closure_store import ClosureStorePort
from src.application.ports.company_profile_repository import (
    CompanyProfileRepositoryPort,
)
from src.application.ports.transaction_store import TransactionStorePort
from src.application.use_cases.ledger_snapshot import (
    build_resolver,
    load_snapshot,
)
from src.domain.constants import DEFAULT_MAX_LOOKBACK_MONTHS
from src.domain.models import MonthReport, Period
from src.domain.services import aggregate_month
from src.infrastructure.logging.logger import get_app_logger


class GetMonthReportUseCase:
    """Return a month's summary and its transaction detail."""

    def __init__(
        self,
        transaction_store: TransactionStorePort,
        closure_store: ClosureStorePort,
        company_repository: CompanyProfileRepositoryPort | None = None,
        logger=None,
        epoch: Period | None = None,
        max_lookback_months: int = DEFAULT_MAX_LOOKBACK_MONTHS,
        currency_code: str = "USD",
    ) -> None:
        """Initialize the use case.

        Args:
            transaction_store: Port providing live transactions.
            closure_store: Port providing closure records.
            company_repository: Optional source of the report header.
            logger: Optional logger compatible with logging.Logger-like API.
            epoch: Configured ledger epoch, if any.
            max_lookback_months: Resolver walk-back limit.
            currency_code: Currency shown on the report.
        """
        self._transaction_store = transaction_store
        self._closure_store = closure_store
        self._company_repository = company_repository
        self._logger = logger or get_app_logger()
        self._epoch = epoch
        self._max_lookback_months = max_lookback_months
        self._currency_code = currency_code

    def execute(self, year: int, month: int) -> MonthReport:
        """Build the month report.

        A Closed month reports its frozen figures even if live transactions
        changed afterwards; the detail rows always show the live data.

        Args:
            year: Calendar year.
            month: Month number, 1 to 12.

        Returns:
            MonthReport: Summary, newest-first detail rows and header data.
        """
        period = Period(year, month)
        snapshot = load_snapshot(self._transaction_store, self._closure_store)
        resolver = build_resolver(
            snapshot,
            fallback_epoch=period,
            epoch=self._epoch,
            max_lookback_months=self._max_lookback_months,
            logger=self._logger,
        )
        transactions = snapshot.transactions_in(period)
        summary = aggregate_month(
            period,
            resolver.resolve_initial_balance(period),
            transactions,
            snapshot.closed_closure(period),
        )
        company = (
            self._company_repository.get()
            if self._company_repository is not None
            else None
        )
        self._logger.debug(
            f"Month report {period.key}: closed={summary.is_closed}, "
            f"final={summary.final_balance}"
        )
        return MonthReport(
            summary=summary,
            transactions=list(reversed(transactions)),
            currency_code=self._currency_code,
            company=company,
        )


__all__ = ["GetMonthReportUseCase"]
