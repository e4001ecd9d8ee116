"""Use case to create, edit and delete ledger transactions."""

from collections.abc import Iterable, Mapping
from concurrent.futures import Future
from typing import Any

from src.application.ports.closure_store import ClosureStorePort
from src.application.ports.error_reporting import WriteDispatcherPort
from src.application.ports.transaction_store import TransactionStorePort
from src.domain.constants import DEFAULT_CATEGORIES
from src.domain.errors import MonthClosed, TransactionNotFound
from src.domain.models import Period, Transaction
from src.domain.services import validate_transaction
from src.infrastructure.logging.logger import get_app_logger


class RecordTransactionUseCase:
    """Validate transaction input and dispatch the write.

    Validation and the closed-month check run synchronously and raise to the
    caller. The store write itself goes through the dispatcher, which
    returns a future and reports failures on the error channel.
    """

    def __init__(
        self,
        transaction_store: TransactionStorePort,
        closure_store: ClosureStorePort,
        writer: WriteDispatcherPort,
        categories: Iterable[str] | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            transaction_store: Port persisting transactions.
            closure_store: Port used to check whether a month is closed.
            writer: Dispatcher that runs store writes off the caller.
            categories: Allowed category labels.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._transaction_store = transaction_store
        self._closure_store = closure_store
        self._writer = writer
        self._categories = tuple(categories or DEFAULT_CATEGORIES)
        self._logger = logger or get_app_logger()

    def create(self, data: Mapping[str, Any]) -> Future:
        """Validate and dispatch a new transaction.

        Args:
            data: Mapping with kind, amount, category, description and date.

        Returns:
            Future: Resolves to the id assigned by the store.

        Raises:
            InvalidAmount: If the amount is invalid.
            InvalidTransaction: If another field is invalid.
            MonthClosed: If the date falls in a Closed month.
        """
        draft = validate_transaction(data, self._categories)
        self._ensure_open(draft.period)
        self._logger.debug(
            f"Dispatching create of {draft.kind.value} {draft.amount} "
            f"in {draft.period.key}"
        )
        return self._writer.submit(
            f"Create transaction dated {draft.date.isoformat()}",
            self._transaction_store.create,
            draft,
        )

    def update(self, transaction_id: str, changes: Mapping[str, Any]) -> Future:
        """Merge ``changes`` over the stored transaction and dispatch it.

        Raises:
            TransactionNotFound: If no transaction has this id.
            MonthClosed: If the old or the new date is in a Closed month.
        """
        existing = self._require(transaction_id)
        merged = {
            "kind": existing.kind,
            "amount": existing.amount,
            "category": existing.category,
            "description": existing.description,
            "date": existing.date,
            **changes,
        }
        draft = validate_transaction(merged, self._categories)
        self._ensure_open(existing.period)
        self._ensure_open(draft.period)
        return self._writer.submit(
            f"Update transaction {transaction_id}",
            self._transaction_store.update,
            transaction_id,
            draft,
        )

    def delete(self, transaction_id: str) -> Future:
        """Dispatch removal of a transaction.

        Raises:
            TransactionNotFound: If no transaction has this id.
            MonthClosed: If the transaction is in a Closed month.
        """
        existing = self._require(transaction_id)
        self._ensure_open(existing.period)
        return self._writer.submit(
            f"Delete transaction {transaction_id}",
            self._transaction_store.delete,
            transaction_id,
        )

    def _require(self, transaction_id: str) -> Transaction:
        existing = self._transaction_store.get(transaction_id)
        if existing is None:
            raise TransactionNotFound(f"Transaction {transaction_id} not found")
        return existing

    def _ensure_open(self, period: Period) -> None:
        closure = self._closure_store.get_by_key(period)
        if closure is not None and closure.is_closed:
            self._logger.warning(f"Write rejected: {period.key} is closed")
            raise MonthClosed(period)


__all__ = ["RecordTransactionUseCase"]
