"""Port for monthly closure records."""

from datetime import datetime
from typing import Protocol

from src.domain.models import ClosureStatus, MonthlyClosure, Period


class ClosureStorePort(Protocol):
    """Port exposing closure records keyed by ``YYYY-MM``.

    Writes must be atomic per key: two concurrent ``create_if_absent`` calls
    for the same month never both succeed.
    """

    def get_by_key(self, period: Period) -> MonthlyClosure | None:
        """Return the closure record for a month, of any status."""

    def list_all(self) -> list[MonthlyClosure]:
        """Return every closure record."""

    def create_if_absent(self, closure: MonthlyClosure) -> bool:
        """Store a Closed record unless a Closed one already exists.

        An existing Open record for the month is overwritten.

        Returns:
            bool: True when written, False when the month was already Closed.
        """

    def set_status(
        self,
        period: Period,
        status: ClosureStatus,
        changed_at: datetime,
    ) -> bool:
        """Flip a record's status if it currently differs.

        Returns:
            bool: True when the status changed.
        """

    def delete(self, period: Period) -> bool:
        """Remove a record.

        Returns:
            bool: True when a record was removed.
        """


__all__ = ["ClosureStorePort"]
