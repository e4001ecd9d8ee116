"""Use case to list the transactions of a month."""

from datetime import date

from src.application.ports.closure_store import ClosureStorePort
from src.application.ports.transaction_store import TransactionStorePort
from src.domain.models import Period, Transaction


class ListMonthTransactionsUseCase:
    """List live transactions for a month, newest first."""

    def __init__(
        self,
        transaction_store: TransactionStorePort,
        closure_store: ClosureStorePort | None = None,
    ) -> None:
        self._transaction_store = transaction_store
        self._closure_store = closure_store

    def execute(self, year: int, month: int) -> list[Transaction]:
        """Return the month's transactions ordered newest first.

        Args:
            year: Calendar year.
            month: Month number, 1 to 12.

        Returns:
            list[Transaction]: Transactions dated inside the month.
        """
        period = Period(year, month)
        items = [
            transaction
            for transaction in self._transaction_store.list_all()
            if period.contains(transaction.date)
        ]
        return sorted(
            items,
            key=lambda item: (item.date, item.id),
            reverse=True,
        )

    def available_years(self, today: date | None = None) -> list[int]:
        """Return years holding data plus the current year, newest first."""
        today = today or date.today()
        years = {
            transaction.date.year
            for transaction in self._transaction_store.list_all()
        }
        if self._closure_store is not None:
            years.update(
                closure.year for closure in self._closure_store.list_all()
            )
        years.add(today.year)
        return sorted(years, reverse=True)


__all__ = ["ListMonthTransactionsUseCase"]
