"""Shared fixtures: domain builders and in-memory ports."""

from concurrent.futures import Future
from dataclasses import replace
from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.domain.models import (
    ClosureStatus,
    MonthlyClosure,
    Period,
    Transaction,
    TransactionDraft,
    TransactionKind,
)


def _make_tx(
    tx_id: str,
    kind: str,
    amount: str,
    category: str,
    when: date,
    description: str = "Movement",
) -> Transaction:
    return Transaction(
        id=tx_id,
        kind=TransactionKind(kind),
        amount=Decimal(amount),
        category=category,
        description=description,
        date=when,
    )


def _make_closure(
    period: Period,
    initial: str,
    income: str,
    expenses: str,
    status: ClosureStatus = ClosureStatus.CLOSED,
) -> MonthlyClosure:
    return MonthlyClosure(
        period=period,
        status=status,
        initial_balance=Decimal(initial),
        total_income=Decimal(income),
        total_expenses=Decimal(expenses),
        category_totals={},
        closed_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
    )


class InMemoryTransactionStore:
    """Transaction store keeping rows in a dict."""

    def __init__(self, transactions=()) -> None:
        self.items = {item.id: item for item in transactions}
        self._counter = 0

    def add(self, transaction: Transaction) -> None:
        self.items[transaction.id] = transaction

    def list_all(self) -> list[Transaction]:
        return list(self.items.values())

    def get(self, transaction_id: str) -> Transaction | None:
        return self.items.get(transaction_id)

    def create(self, draft: TransactionDraft) -> str:
        self._counter += 1
        transaction_id = f"tx-{self._counter}"
        self.items[transaction_id] = Transaction(
            id=transaction_id,
            kind=draft.kind,
            amount=draft.amount,
            category=draft.category,
            description=draft.description,
            date=draft.date,
        )
        return transaction_id

    def update(self, transaction_id: str, draft: TransactionDraft) -> None:
        self.items[transaction_id] = Transaction(
            id=transaction_id,
            kind=draft.kind,
            amount=draft.amount,
            category=draft.category,
            description=draft.description,
            date=draft.date,
        )

    def delete(self, transaction_id: str) -> None:
        del self.items[transaction_id]


class InMemoryClosureStore:
    """Closure store keeping records keyed by ``YYYY-MM``."""

    def __init__(self, closures=()) -> None:
        self.records = {closure.id: closure for closure in closures}

    def get_by_key(self, period: Period) -> MonthlyClosure | None:
        return self.records.get(period.key)

    def list_all(self) -> list[MonthlyClosure]:
        return list(self.records.values())

    def create_if_absent(self, closure: MonthlyClosure) -> bool:
        existing = self.records.get(closure.id)
        if existing is not None and existing.is_closed:
            return False
        self.records[closure.id] = closure
        return True

    def set_status(
        self,
        period: Period,
        status: ClosureStatus,
        changed_at: datetime,
    ) -> bool:
        existing = self.records.get(period.key)
        if existing is None or existing.status is status:
            return False
        if status is ClosureStatus.OPEN:
            self.records[period.key] = replace(
                existing, status=status, reopened_at=changed_at
            )
        else:
            self.records[period.key] = replace(
                existing, status=status, closed_at=changed_at
            )
        return True

    def delete(self, period: Period) -> bool:
        return self.records.pop(period.key, None) is not None


class ImmediateWriter:
    """Dispatcher running writes inline and returning settled futures."""

    def __init__(self, error_reporter=None) -> None:
        self.error_reporter = error_reporter or MagicMock()
        self.contexts: list[str] = []
        self.shut_down = False

    def shutdown(self, wait: bool = True) -> None:
        self.shut_down = True

    def submit(self, context, operation, *args) -> Future:
        self.contexts.append(context)
        future: Future = Future()
        try:
            future.set_result(operation(*args))
        except Exception as exc:  # noqa: BLE001
            self.error_reporter.report(exc, context)
            future.set_exception(exc)
        return future


@pytest.fixture
def make_tx():
    return _make_tx


@pytest.fixture
def make_closure():
    return _make_closure


@pytest.fixture
def transaction_store() -> InMemoryTransactionStore:
    return InMemoryTransactionStore()


@pytest.fixture
def closure_store() -> InMemoryClosureStore:
    return InMemoryClosureStore()


@pytest.fixture
def writer() -> ImmediateWriter:
    return ImmediateWriter()


@pytest.fixture
def quiet_logger() -> MagicMock:
    return MagicMock()
