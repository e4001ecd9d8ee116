"""Port for reading and writing ledger transactions."""

from typing import Protocol

from src.domain.models import Transaction, TransactionDraft


class TransactionStorePort(Protocol):
    """Port exposing CRUD access to live transactions.

    Implementations raise ``StoreUnavailable`` when persistence fails.
    """

    def list_all(self) -> list[Transaction]:
        """Return every transaction, in no particular order."""

    def get(self, transaction_id: str) -> Transaction | None:
        """Return one transaction, or None when it does not exist."""

    def create(self, draft: TransactionDraft) -> str:
        """Store a new transaction and return its id."""

    def update(self, transaction_id: str, draft: TransactionDraft) -> None:
        """Replace every field of an existing transaction except its id."""

    def delete(self, transaction_id: str) -> None:
        """Remove a transaction."""


__all__ = ["TransactionStorePort"]
