"""Use case to request a narrative summary of a month."""

from src.application.ports.closure_store import ClosureStorePort
from src.application.ports.summary_service import SummaryServicePort
from src.application.ports.transaction_store import TransactionStorePort
from src.application.use_cases.ledger_snapshot import (
    build_resolver,
    load_snapshot,
)
from src.domain.constants import DEFAULT_MAX_LOOKBACK_MONTHS
from src.domain.errors import StoreUnavailable, SummaryServiceError
from src.domain.models import (
    Period,
    SummaryEntry,
    SummaryOutcome,
    SummaryRequest,
    TransactionKind,
)
from src.domain.services import aggregate_month
from src.infrastructure.logging.logger import get_app_logger


class GenerateMonthlySummaryUseCase:
    """Send a month's movements to the summary service.

    Failures never propagate: the caller always receives a
    ``SummaryOutcome`` carrying either the result or a message to show.
    """

    def __init__(
        self,
        transaction_store: TransactionStorePort,
        closure_store: ClosureStorePort,
        summary_service: SummaryServicePort,
        logger=None,
        epoch: Period | None = None,
        max_lookback_months: int = DEFAULT_MAX_LOOKBACK_MONTHS,
    ) -> None:
        self._transaction_store = transaction_store
        self._closure_store = closure_store
        self._summary_service = summary_service
        self._logger = logger or get_app_logger()
        self._epoch = epoch
        self._max_lookback_months = max_lookback_months

    def execute(
        self,
        year: int,
        month: int,
        benchmarks: str | None = None,
    ) -> SummaryOutcome:
        """Generate the summary.

        Args:
            year: Calendar year.
            month: Month number, 1 to 12.
            benchmarks: Optional free-text market context for suggestions.

        Returns:
            SummaryOutcome: Result on success, error message otherwise.
        """
        period = Period(year, month)
        try:
            request = self._build_request(period, benchmarks)
            result = self._summary_service.generate(request)
        except (StoreUnavailable, SummaryServiceError) as exc:
            self._logger.error(f"Summary for {period.key} failed: {exc}")
            return SummaryOutcome(
                error=f"Could not generate the summary for {period.key}: {exc}"
            )
        self._logger.info(
            f"Summary for {period.key} generated with "
            f"{len(result.suggestions)} suggestions"
        )
        return SummaryOutcome(result=result)

    def _build_request(
        self,
        period: Period,
        benchmarks: str | None,
    ) -> SummaryRequest:
        snapshot = load_snapshot(self._transaction_store, self._closure_store)
        resolver = build_resolver(
            snapshot,
            fallback_epoch=period,
            epoch=self._epoch,
            max_lookback_months=self._max_lookback_months,
            logger=self._logger,
        )
        income: list[SummaryEntry] = []
        expenses: list[SummaryEntry] = []
        for transaction in snapshot.transactions_in(period):
            entry = SummaryEntry(
                date=transaction.date,
                amount=transaction.amount,
                description=transaction.description,
            )
            if transaction.kind is TransactionKind.INCOME:
                income.append(entry)
            else:
                expenses.append(entry)
        summary = aggregate_month(
            period,
            resolver.resolve_initial_balance(period),
            snapshot.transactions_in(period),
            snapshot.closed_closure(period),
        )
        return SummaryRequest(
            period=period,
            income=income,
            expenses=expenses,
            capital=summary.final_balance,
            benchmarks=benchmarks,
            initial_balance=summary.initial_balance,
            total_income=summary.total_income,
            total_expenses=summary.total_expenses,
            is_closed=summary.is_closed,
        )


__all__ = ["GenerateMonthlySummaryUseCase"]
