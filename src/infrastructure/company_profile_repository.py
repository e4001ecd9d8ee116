"""SQLAlchemy-backed repository for the company profile."""

from dataclasses import asdict

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.company_profile_repository import (
    CompanyProfileRepositoryPort,
)
from src.application.ports.database import DatabaseEnginePort
from src.domain.errors import StoreUnavailable
from src.domain.models import CompanyProfile

PROFILE_ID = "main"

CREATE_COMPANY_PROFILE_SQL = """
CREATE TABLE IF NOT EXISTS company_profile (
    id TEXT PRIMARY KEY,
    name TEXT,
    tax_id TEXT,
    address TEXT,
    phone TEXT,
    email TEXT,
    logo TEXT
)
"""

SELECT_PROFILE_SQL = text(
    """
    SELECT name, tax_id, address, phone, email, logo
    FROM company_profile
    WHERE id = :id
    """
)

UPDATE_PROFILE_SQL = text(
    """
    UPDATE company_profile
    SET name = :name,
        tax_id = :tax_id,
        address = :address,
        phone = :phone,
        email = :email,
        logo = :logo
    WHERE id = :id
    """
)

INSERT_PROFILE_SQL = text(
    """
    INSERT INTO company_profile (id, name, tax_id, address, phone, email, logo)
    VALUES (:id, :name, :tax_id, :address, :phone, :email, :logo)
    """
)


class SqlAlchemyCompanyProfileRepository(CompanyProfileRepositoryPort):
    """Repository backed by SQLAlchemy for the singleton profile row."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    def ensure_schema(self) -> None:
        """Create the profile table if it does not exist."""
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                conn.exec_driver_sql(CREATE_COMPANY_PROFILE_SQL)
        except SQLAlchemyError as exc:
            raise StoreUnavailable(
                f"Could not prepare company_profile: {exc}"
            ) from exc

    def get(self) -> CompanyProfile | None:
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.connect() as conn:
                row = conn.execute(SELECT_PROFILE_SQL, {"id": PROFILE_ID}).first()
        except SQLAlchemyError as exc:
            raise StoreUnavailable(
                f"Could not read company profile: {exc}"
            ) from exc
        if row is None:
            return None
        return CompanyProfile(
            name=row.name or "",
            tax_id=row.tax_id or "",
            address=row.address or "",
            phone=row.phone or "",
            email=row.email or "",
            logo=row.logo or "",
        )

    def save(self, profile: CompanyProfile) -> None:
        params = {"id": PROFILE_ID, **asdict(profile)}
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                updated = conn.execute(UPDATE_PROFILE_SQL, params).rowcount
                if not updated:
                    conn.execute(INSERT_PROFILE_SQL, params)
        except SQLAlchemyError as exc:
            raise StoreUnavailable(
                f"Could not save company profile: {exc}"
            ) from exc


__all__ = ["SqlAlchemyCompanyProfileRepository", "CREATE_COMPANY_PROFILE_SQL"]
