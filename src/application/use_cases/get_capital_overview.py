"""Use case to compute the dashboard's capital overview."""

from datetime import date

from src.application.ports.closure_store import ClosureStorePort
from src.application.ports.transaction_store import TransactionStorePort
from src.application.use_cases.ledger_snapshot import (
    build_resolver,
    load_snapshot,
)
from src.domain.constants import DEFAULT_MAX_LOOKBACK_MONTHS
from src.domain.models import CapitalOverview, Period
from src.domain.services import aggregate_month
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import ZERO, add


class GetCapitalOverviewUseCase:
    """Compute running totals and the capital carried to a month."""

    def __init__(
        self,
        transaction_store: TransactionStorePort,
        closure_store: ClosureStorePort,
        logger=None,
        epoch: Period | None = None,
        max_lookback_months: int = DEFAULT_MAX_LOOKBACK_MONTHS,
    ) -> None:
        """Initialize the use case.

        Args:
            transaction_store: Port providing live transactions.
            closure_store: Port providing closure records.
            logger: Optional logger compatible with logging.Logger-like API.
            epoch: Configured ledger epoch, if any.
            max_lookback_months: Resolver walk-back limit.
        """
        self._transaction_store = transaction_store
        self._closure_store = closure_store
        self._logger = logger or get_app_logger()
        self._epoch = epoch
        self._max_lookback_months = max_lookback_months

    def execute(
        self,
        as_of: Period | None = None,
        today: date | None = None,
    ) -> CapitalOverview:
        """Return the overview.

        Args:
            as_of: Month whose final balance is reported as capital.
                Defaults to the current month.
            today: Reference date used when ``as_of`` is omitted.

        Returns:
            CapitalOverview: Income and expense totals up to ``as_of`` plus
            capital. Closed months contribute their frozen figures, so
            ``total_income - total_expenses`` equals ``capital`` whenever
            the closures agree with the months before them.
        """
        as_of = as_of or Period.from_date(today or date.today())
        snapshot = load_snapshot(self._transaction_store, self._closure_store)
        resolver = build_resolver(
            snapshot,
            fallback_epoch=as_of,
            epoch=self._epoch,
            max_lookback_months=self._max_lookback_months,
            logger=self._logger,
        )
        total_income = ZERO
        total_expenses = ZERO
        transaction_count = 0
        period = min(resolver.epoch, as_of)
        while period <= as_of:
            summary = aggregate_month(
                period,
                resolver.resolve_initial_balance(period),
                snapshot.transactions_in(period),
                snapshot.closed_closure(period),
            )
            total_income = add(total_income, summary.total_income)
            total_expenses = add(total_expenses, summary.total_expenses)
            transaction_count += len(snapshot.transactions_in(period))
            period = period.next()
        return CapitalOverview(
            total_income=total_income,
            total_expenses=total_expenses,
            capital=resolver.resolve_final_balance(as_of),
            as_of=as_of,
            transaction_count=transaction_count,
        )


__all__ = ["GetCapitalOverviewUseCase"]
