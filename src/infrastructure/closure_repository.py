"""SQLAlchemy-backed store for monthly closure records."""

import json
from datetime import datetime

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.application.ports.closure_store import ClosureStorePort
from src.application.ports.database import DatabaseEnginePort
from src.domain.errors import StoreUnavailable
from src.domain.models import (
    CategoryTotals,
    ClosureStatus,
    MonthlyClosure,
    Period,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal, to_storage_string


CREATE_CLOSURES_SQL = """
CREATE TABLE IF NOT EXISTS monthly_closures (
    id TEXT PRIMARY KEY,
    year INTEGER NOT NULL,
    month INTEGER NOT NULL,
    status TEXT NOT NULL,
    initial_balance TEXT NOT NULL,
    total_income TEXT NOT NULL,
    total_expenses TEXT NOT NULL,
    final_balance TEXT NOT NULL,
    category_totals TEXT NOT NULL,
    closed_at TEXT NOT NULL,
    reopened_at TEXT
)
"""

_CLOSURE_COLUMNS = """
    id, year, month, status, initial_balance, total_income,
    total_expenses, final_balance, category_totals, closed_at, reopened_at
"""

SELECT_CLOSURES_SQL = text(
    f"""
    SELECT {_CLOSURE_COLUMNS}
    FROM monthly_closures
    ORDER BY id
    """
)

SELECT_CLOSURE_SQL = text(
    f"""
    SELECT {_CLOSURE_COLUMNS}
    FROM monthly_closures
    WHERE id = :id
    """
)

INSERT_CLOSURE_SQL = text(
    """
    INSERT INTO monthly_closures (
        id,
        year,
        month,
        status,
        initial_balance,
        total_income,
        total_expenses,
        final_balance,
        category_totals,
        closed_at,
        reopened_at
    )
    VALUES (
        :id,
        :year,
        :month,
        :status,
        :initial_balance,
        :total_income,
        :total_expenses,
        :final_balance,
        :category_totals,
        :closed_at,
        NULL
    )
    """
)

RECLOSE_OPEN_CLOSURE_SQL = text(
    """
    UPDATE monthly_closures
    SET status = :status,
        initial_balance = :initial_balance,
        total_income = :total_income,
        total_expenses = :total_expenses,
        final_balance = :final_balance,
        category_totals = :category_totals,
        closed_at = :closed_at
    WHERE id = :id AND status = 'open'
    """
)

REOPEN_CLOSURE_SQL = text(
    """
    UPDATE monthly_closures
    SET status = 'open', reopened_at = :changed_at
    WHERE id = :id AND status = 'closed'
    """
)

MARK_CLOSED_SQL = text(
    """
    UPDATE monthly_closures
    SET status = 'closed', closed_at = :changed_at
    WHERE id = :id AND status = 'open'
    """
)

DELETE_CLOSURE_SQL = text(
    """
    DELETE FROM monthly_closures
    WHERE id = :id
    """
)


class SqlAlchemyClosureStore(ClosureStorePort):
    """Closure store backed by SQLAlchemy.

    Every write runs in a single transaction and is conditional on the
    record's current status, so concurrent close or reopen requests for the
    same month serialize on the row.
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
        """Create the closures table if it does not exist."""
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                conn.exec_driver_sql(CREATE_CLOSURES_SQL)
        except SQLAlchemyError as exc:
            raise StoreUnavailable(
                f"Could not prepare monthly_closures: {exc}"
            ) from exc

    def get_by_key(self, period: Period) -> MonthlyClosure | None:
        """Return the record for ``period`` regardless of status."""
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.connect() as conn:
                row = conn.execute(SELECT_CLOSURE_SQL, {"id": period.key}).first()
        except SQLAlchemyError as exc:
            raise StoreUnavailable(
                f"Could not read closure {period.key}: {exc}"
            ) from exc
        return self._to_closure(row) if row else None

    def list_all(self) -> list[MonthlyClosure]:
        """Return every closure record ordered by month."""
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.connect() as conn:
                rows = conn.execute(SELECT_CLOSURES_SQL).all()
        except SQLAlchemyError as exc:
            raise StoreUnavailable(f"Could not read closures: {exc}") from exc
        return [self._to_closure(row) for row in rows]

    def create_if_absent(self, closure: MonthlyClosure) -> bool:
        """Write a Closed record unless the month is already Closed.

        A previously reopened record is overwritten in place; otherwise a new
        row is inserted and the primary key rejects a concurrent duplicate.

        Returns:
            bool: True when written, False when a Closed record exists.
        """
        params = self._to_params(closure)
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                updated = conn.execute(RECLOSE_OPEN_CLOSURE_SQL, params).rowcount
                if not updated:
                    conn.execute(INSERT_CLOSURE_SQL, params)
        except IntegrityError:
            self._logger.warning(
                f"Closure {closure.id} already exists; nothing written"
            )
            return False
        except SQLAlchemyError as exc:
            raise StoreUnavailable(
                f"Could not write closure {closure.id}: {exc}"
            ) from exc
        return True

    def set_status(
        self,
        period: Period,
        status: ClosureStatus,
        changed_at: datetime,
    ) -> bool:
        """Flip the status of an existing record.

        Returns:
            bool: True when the record held the opposite status.
        """
        statement = (
            REOPEN_CLOSURE_SQL
            if status is ClosureStatus.OPEN
            else MARK_CLOSED_SQL
        )
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                changed = conn.execute(
                    statement,
                    {"id": period.key, "changed_at": changed_at.isoformat()},
                ).rowcount
        except SQLAlchemyError as exc:
            raise StoreUnavailable(
                f"Could not set closure {period.key} to {status.value}: {exc}"
            ) from exc
        return bool(changed)

    def delete(self, period: Period) -> bool:
        """Delete the record for ``period``."""
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                deleted = conn.execute(
                    DELETE_CLOSURE_SQL,
                    {"id": period.key},
                ).rowcount
        except SQLAlchemyError as exc:
            raise StoreUnavailable(
                f"Could not delete closure {period.key}: {exc}"
            ) from exc
        return bool(deleted)

    @staticmethod
    def _to_params(closure: MonthlyClosure) -> dict[str, object]:
        category_totals = {
            category: {
                "income": to_storage_string(totals.income),
                "expense": to_storage_string(totals.expense),
            }
            for category, totals in closure.category_totals.items()
        }
        return {
            "id": closure.id,
            "year": closure.year,
            "month": closure.month,
            "status": closure.status.value,
            "initial_balance": to_storage_string(closure.initial_balance),
            "total_income": to_storage_string(closure.total_income),
            "total_expenses": to_storage_string(closure.total_expenses),
            "final_balance": to_storage_string(closure.final_balance),
            "category_totals": json.dumps(category_totals, ensure_ascii=False),
            "closed_at": closure.closed_at.isoformat(),
        }

    def _to_closure(self, row) -> MonthlyClosure:
        raw_totals = json.loads(row.category_totals or "{}")
        closure = MonthlyClosure(
            period=Period(int(row.year), int(row.month)),
            status=ClosureStatus(row.status),
            initial_balance=coerce_decimal(row.initial_balance),
            total_income=coerce_decimal(row.total_income),
            total_expenses=coerce_decimal(row.total_expenses),
            category_totals={
                category: CategoryTotals(
                    income=coerce_decimal(values.get("income")),
                    expense=coerce_decimal(values.get("expense")),
                )
                for category, values in raw_totals.items()
            },
            closed_at=datetime.fromisoformat(str(row.closed_at)),
            reopened_at=(
                datetime.fromisoformat(str(row.reopened_at))
                if row.reopened_at
                else None
            ),
        )
        stored_final = coerce_decimal(row.final_balance)
        if stored_final != closure.final_balance:
            self._logger.warning(
                f"Closure {closure.id} stores final_balance={stored_final} "
                f"but its totals give {closure.final_balance}; "
                "using the recomputed value"
            )
        return closure


__all__ = [
    "SqlAlchemyClosureStore",
    "CREATE_CLOSURES_SQL",
    "INSERT_CLOSURE_SQL",
    "RECLOSE_OPEN_CLOSURE_SQL",
    "REOPEN_CLOSURE_SQL",
    "MARK_CLOSED_SQL",
    "DELETE_CLOSURE_SQL",
]
