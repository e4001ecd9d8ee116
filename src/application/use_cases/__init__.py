"""Application use cases package."""

from .close_month import CloseMonthUseCase
from .company_profile import GetCompanyProfileUseCase, SaveCompanyProfileUseCase
from .generate_monthly_summary import GenerateMonthlySummaryUseCase
from .get_annual_report import GetAnnualReportUseCase
from .get_capital_overview import GetCapitalOverviewUseCase
from .get_month_report import GetMonthReportUseCase
from .list_transactions import ListMonthTransactionsUseCase
from .record_transaction import RecordTransactionUseCase
from .reopen_month import ReopenMonthUseCase

__all__ = [
    "CloseMonthUseCase",
    "GenerateMonthlySummaryUseCase",
    "GetAnnualReportUseCase",
    "GetCapitalOverviewUseCase",
    "GetCompanyProfileUseCase",
    "GetMonthReportUseCase",
    "ListMonthTransactionsUseCase",
    "RecordTransactionUseCase",
    "ReopenMonthUseCase",
    "SaveCompanyProfileUseCase",
]
