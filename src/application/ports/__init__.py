"""Application ports package."""

from .closure_store import ClosureStorePort
from .company_profile_repository import CompanyProfileRepositoryPort
from .database import DatabaseEnginePort
from .error_reporting import ErrorReporterPort, WriteDispatcherPort
from .summary_service import SummaryServicePort
from .transaction_store import TransactionStorePort

__all__ = [
    "ClosureStorePort",
    "CompanyProfileRepositoryPort",
    "DatabaseEnginePort",
    "ErrorReporterPort",
    "SummaryServicePort",
    "TransactionStorePort",
    "WriteDispatcherPort",
]
