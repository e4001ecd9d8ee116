"""SQLAlchemy-backed store for ledger transactions."""

from datetime import date, datetime, timezone
from uuid import uuid4

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.transaction_store import TransactionStorePort
from src.domain.errors import StoreUnavailable, TransactionNotFound
from src.domain.models import Transaction, TransactionDraft, TransactionKind
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal, to_storage_string


CREATE_TRANSACTIONS_SQL = """
CREATE TABLE IF NOT EXISTS ledger_transactions (
    id TEXT PRIMARY KEY,
    kind TEXT NOT NULL,
    amount TEXT NOT NULL,
    category TEXT NOT NULL,
    description TEXT NOT NULL,
    tx_date TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

SELECT_TRANSACTIONS_SQL = text(
    """
    SELECT id, kind, amount, category, description, tx_date
    FROM ledger_transactions
    """
)

SELECT_TRANSACTION_SQL = text(
    """
    SELECT id, kind, amount, category, description, tx_date
    FROM ledger_transactions
    WHERE id = :id
    """
)

INSERT_TRANSACTION_SQL = text(
    """
    INSERT INTO ledger_transactions (
        id,
        kind,
        amount,
        category,
        description,
        tx_date,
        created_at,
        updated_at
    )
    VALUES (
        :id,
        :kind,
        :amount,
        :category,
        :description,
        :tx_date,
        :changed_at,
        :changed_at
    )
    """
)

UPDATE_TRANSACTION_SQL = text(
    """
    UPDATE ledger_transactions
    SET kind = :kind,
        amount = :amount,
        category = :category,
        description = :description,
        tx_date = :tx_date,
        updated_at = :changed_at
    WHERE id = :id
    """
)

DELETE_TRANSACTION_SQL = text(
    """
    DELETE FROM ledger_transactions
    WHERE id = :id
    """
)


class SqlAlchemyTransactionStore(TransactionStorePort):
    """Transaction store backed by SQLAlchemy.

    Amounts are persisted as decimal strings so no backend rounds them
    through binary floating point.
    """

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def ensure_schema(self) -> None:
        """Create the transactions table if it does not exist."""
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                conn.exec_driver_sql(CREATE_TRANSACTIONS_SQL)
        except SQLAlchemyError as exc:
            raise StoreUnavailable(
                f"Could not prepare ledger_transactions: {exc}"
            ) from exc

    def list_all(self) -> list[Transaction]:
        """Return every stored transaction."""
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.connect() as conn:
                rows = conn.execute(SELECT_TRANSACTIONS_SQL).all()
        except SQLAlchemyError as exc:
            raise StoreUnavailable(f"Could not read transactions: {exc}") from exc
        return [self._to_transaction(row) for row in rows]

    def get(self, transaction_id: str) -> Transaction | None:
        """Return one transaction by id."""
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.connect() as conn:
                row = conn.execute(
                    SELECT_TRANSACTION_SQL,
                    {"id": transaction_id},
                ).first()
        except SQLAlchemyError as exc:
            raise StoreUnavailable(
                f"Could not read transaction {transaction_id}: {exc}"
            ) from exc
        return self._to_transaction(row) if row else None

    def create(self, draft: TransactionDraft) -> str:
        """Insert a transaction and return its generated id."""
        transaction_id = uuid4().hex
        params = self._to_params(draft)
        params["id"] = transaction_id
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                conn.execute(INSERT_TRANSACTION_SQL, params)
        except SQLAlchemyError as exc:
            raise StoreUnavailable(f"Could not create transaction: {exc}") from exc
        self._logger.info(
            f"Created {draft.kind.value} transaction {transaction_id} "
            f"dated {draft.date.isoformat()}"
        )
        return transaction_id

    def update(self, transaction_id: str, draft: TransactionDraft) -> None:
        """Replace the fields of an existing transaction.

        Raises:
            TransactionNotFound: If no transaction has this id.
        """
        params = self._to_params(draft)
        params["id"] = transaction_id
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                updated = conn.execute(UPDATE_TRANSACTION_SQL, params).rowcount
        except SQLAlchemyError as exc:
            raise StoreUnavailable(
                f"Could not update transaction {transaction_id}: {exc}"
            ) from exc
        if not updated:
            raise TransactionNotFound(f"Transaction {transaction_id} not found")
        self._logger.info(f"Updated transaction {transaction_id}")

    def delete(self, transaction_id: str) -> None:
        """Delete a transaction.

        Raises:
            TransactionNotFound: If no transaction has this id.
        """
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                deleted = conn.execute(
                    DELETE_TRANSACTION_SQL,
                    {"id": transaction_id},
                ).rowcount
        except SQLAlchemyError as exc:
            raise StoreUnavailable(
                f"Could not delete transaction {transaction_id}: {exc}"
            ) from exc
        if not deleted:
            raise TransactionNotFound(f"Transaction {transaction_id} not found")
        self._logger.info(f"Deleted transaction {transaction_id}")

    @staticmethod
    def _to_params(draft: TransactionDraft) -> dict[str, str]:
        return {
            "kind": draft.kind.value,
            "amount": to_storage_string(draft.amount),
            "category": draft.category,
            "description": draft.description,
            "tx_date": draft.date.isoformat(),
            "changed_at": datetime.now(timezone.utc).isoformat(),
        }

    @staticmethod
    def _to_transaction(row) -> Transaction:
        return Transaction(
            id=row.id,
            kind=TransactionKind(row.kind),
            amount=coerce_decimal(row.amount),
            category=row.category,
            description=row.description,
            date=date.fromisoformat(str(row.tx_date)[:10]),
        )


__all__ = [
    "SqlAlchemyTransactionStore",
    "CREATE_TRANSACTIONS_SQL",
    "SELECT_TRANSACTIONS_SQL",
    "INSERT_TRANSACTION_SQL",
    "UPDATE_TRANSACTION_SQL",
    "DELETE_TRANSACTION_SQL",
]
