"""Tests for the SQLAlchemy stores against a SQLite file."""

from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, text

from src.domain.errors import StoreUnavailable, TransactionNotFound
from src.domain.models import (
    CategoryTotals,
    ClosureStatus,
    CompanyProfile,
    MonthlyClosure,
    Period,
    TransactionDraft,
    TransactionKind,
)
from src.infrastructure.closure_repository import SqlAlchemyClosureStore
from src.infrastructure.company_profile_repository import (
    SqlAlchemyCompanyProfileRepository,
)
from src.infrastructure.container import ensure_schema
from src.infrastructure.transaction_repository import (
    SqlAlchemyTransactionStore,
)

CLOSED_AT = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


class _SqliteDb:
    def __init__(self, engine) -> None:
        self._engine = engine

    def get_ledger_engine(self):
        return self._engine


@pytest.fixture
def db(tmp_path, monkeypatch):
    monkeypatch.setattr(
        "src.infrastructure.container.get_app_logger",
        lambda: MagicMock(),
    )
    engine = create_engine(f"sqlite:///{tmp_path / 'ledger.db'}", future=True)
    port = _SqliteDb(engine)
    ensure_schema(port)
    yield port
    engine.dispose()


def _draft(amount="0.10", when=date(2024, 2, 3)) -> TransactionDraft:
    return TransactionDraft(
        kind=TransactionKind.INCOME,
        amount=Decimal(amount),
        category="Divisas",
        description="Exchange gain",
        date=when,
    )


def _closure(status=ClosureStatus.CLOSED, income="500") -> MonthlyClosure:
    return MonthlyClosure(
        period=Period(2024, 2),
        status=status,
        initial_balance=Decimal("1000"),
        total_income=Decimal(income),
        total_expenses=Decimal("200.05"),
        category_totals={
            "Fiscalía": CategoryTotals(expense=Decimal("200.05")),
            "Intereses Ganados": CategoryTotals(income=Decimal(income)),
        },
        closed_at=CLOSED_AT,
    )


def test_transactions_round_trip_exact_amounts(db):
    store = SqlAlchemyTransactionStore(db, logger=MagicMock())

    ids = [store.create(_draft()) for _ in range(3)]

    stored = store.list_all()
    assert sorted(tx.id for tx in stored) == sorted(ids)
    assert sum((tx.amount for tx in stored), Decimal("0")) == Decimal("0.30")
    assert store.get(ids[0]).date == date(2024, 2, 3)
    assert store.get("missing") is None


def test_amounts_are_stored_as_decimal_text(db):
    store = SqlAlchemyTransactionStore(db, logger=MagicMock())
    transaction_id = store.create(_draft(amount="1234.5678"))

    with db.get_ledger_engine().connect() as conn:
        raw = conn.execute(
            text("SELECT amount FROM ledger_transactions WHERE id = :id"),
            {"id": transaction_id},
        ).scalar_one()

    assert raw == "1234.5678"


def test_update_and_delete_transactions(db):
    store = SqlAlchemyTransactionStore(db, logger=MagicMock())
    transaction_id = store.create(_draft())

    store.update(transaction_id, _draft(amount="9.99", when=date(2024, 3, 1)))
    updated = store.get(transaction_id)
    store.delete(transaction_id)

    assert updated.amount == Decimal("9.99")
    assert updated.period == Period(2024, 3)
    assert store.get(transaction_id) is None
    with pytest.raises(TransactionNotFound):
        store.delete(transaction_id)
    with pytest.raises(TransactionNotFound):
        store.update(transaction_id, _draft())


def test_closure_is_written_once(db):
    store = SqlAlchemyClosureStore(db, logger=MagicMock())

    assert store.create_if_absent(_closure()) is True
    assert store.create_if_absent(_closure(income="999")) is False

    stored = store.get_by_key(Period(2024, 2))
    assert stored == _closure()
    assert stored.final_balance == Decimal("1299.95")
    assert stored.category_totals["Fiscalía"].expense == Decimal("200.05")


def test_reopen_then_reclose_overwrites_in_place(db):
    store = SqlAlchemyClosureStore(db, logger=MagicMock())
    store.create_if_absent(_closure())
    reopened_at = datetime(2024, 3, 5, tzinfo=timezone.utc)

    assert store.set_status(Period(2024, 2), ClosureStatus.OPEN, reopened_at)
    assert not store.set_status(
        Period(2024, 2),
        ClosureStatus.OPEN,
        reopened_at,
    )
    reopened = store.get_by_key(Period(2024, 2))
    assert reopened.status is ClosureStatus.OPEN
    assert reopened.reopened_at == reopened_at

    assert store.create_if_absent(_closure(income="600")) is True
    reclosed = store.get_by_key(Period(2024, 2))
    assert reclosed.is_closed
    assert reclosed.total_income == Decimal("600")
    assert len(store.list_all()) == 1


def test_delete_closure(db):
    store = SqlAlchemyClosureStore(db, logger=MagicMock())
    store.create_if_absent(_closure())

    assert store.delete(Period(2024, 2)) is True
    assert store.delete(Period(2024, 2)) is False
    assert store.list_all() == []


def test_tampered_final_balance_is_logged(db):
    logger = MagicMock()
    store = SqlAlchemyClosureStore(db, logger=logger)
    store.create_if_absent(_closure())
    with db.get_ledger_engine().begin() as conn:
        conn.execute(text("UPDATE monthly_closures SET final_balance = '1'"))

    closure = store.get_by_key(Period(2024, 2))

    assert closure.final_balance == Decimal("1299.95")
    logger.warning.assert_called_once()


def test_company_profile_upsert(db):
    repository = SqlAlchemyCompanyProfileRepository(db)

    assert repository.get() is None
    repository.save(CompanyProfile(name="Fondo", tax_id="900-1"))
    repository.save(CompanyProfile(name="Fondo Candelaria", tax_id="900-1"))

    assert repository.get() == CompanyProfile(
        name="Fondo Candelaria",
        tax_id="900-1",
    )


def test_missing_tables_raise_store_unavailable(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'empty.db'}", future=True)
    store = SqlAlchemyTransactionStore(_SqliteDb(engine), logger=MagicMock())

    with pytest.raises(StoreUnavailable):
        store.list_all()
    engine.dispose()
