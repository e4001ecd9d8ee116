"""Composition root for wiring infrastructure adapters."""

from src.application.ports.closure_store import ClosureStorePort
from src.application.ports.company_profile_repository import (
    CompanyProfileRepositoryPort,
)
from src.application.ports.database import DatabaseEnginePort
from src.application.ports.error_reporting import (
    ErrorReporterPort,
    WriteDispatcherPort,
)
from src.application.ports.summary_service import SummaryServicePort
from src.application.ports.transaction_store import TransactionStorePort
from src.infrastructure.closure_repository import SqlAlchemyClosureStore
from src.infrastructure.company_profile_repository import (
    SqlAlchemyCompanyProfileRepository,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.error_channel import ErrorChannel
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.non_blocking_writer import NonBlockingWriter
from src.infrastructure.openai_summary_service import OpenAISummaryService
from src.infrastructure.settings import LedgerSettings
from src.infrastructure.transaction_repository import (
    SqlAlchemyTransactionStore,
)


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_settings() -> LedgerSettings:
    """Return settings read from the environment."""
    return LedgerSettings.from_env()


def build_transaction_store(
    db_port: DatabaseEnginePort | None = None,
) -> TransactionStorePort:
    """Return the SQL transaction store."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyTransactionStore(resolved_db, logger=get_app_logger())


def build_closure_store(
    db_port: DatabaseEnginePort | None = None,
) -> ClosureStorePort:
    """Return the SQL closure store."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyClosureStore(resolved_db, logger=get_app_logger())


def build_company_profile_repository(
    db_port: DatabaseEnginePort | None = None,
) -> CompanyProfileRepositoryPort:
    """Return the SQL company profile repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyCompanyProfileRepository(resolved_db)


def build_error_channel() -> ErrorChannel:
    """Return a fresh error channel."""
    return ErrorChannel(logger=get_app_logger())


def build_writer(
    error_reporter: ErrorReporterPort | None = None,
) -> WriteDispatcherPort:
    """Return the background writer for transaction writes."""
    return NonBlockingWriter(
        error_reporter or build_error_channel(),
        logger=get_app_logger(),
    )


def build_summary_service(
    settings: LedgerSettings | None = None,
) -> SummaryServicePort:
    """Return the summary service configured from settings."""
    resolved = settings or build_settings()
    return OpenAISummaryService(
        model=resolved.summary_model,
        language=resolved.summary_language,
        logger=get_app_logger(),
    )


def ensure_schema(db_port: DatabaseEnginePort | None = None) -> None:
    """Create every ledger table that does not exist yet."""
    resolved_db = db_port or build_database_adapter()
    SqlAlchemyTransactionStore(resolved_db).ensure_schema()
    SqlAlchemyClosureStore(resolved_db).ensure_schema()
    SqlAlchemyCompanyProfileRepository(resolved_db).ensure_schema()
    get_app_logger().info("Ledger schema is ready")


__all__ = [
    "build_database_adapter",
    "build_settings",
    "build_transaction_store",
    "build_closure_store",
    "build_company_profile_repository",
    "build_error_channel",
    "build_writer",
    "build_summary_service",
    "ensure_schema",
]
