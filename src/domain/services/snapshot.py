"""Point-in-time view over the transaction and closure stores."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from src.domain.models import MonthlyClosure, Period, Transaction


@dataclass(frozen=True)
class LedgerSnapshot:
    """Transactions and closures read once for a single computation.

    Attributes:
        transactions_by_period: Live transactions grouped by month, each
            group sorted by ``(date, id)``.
        closures: Closure records of any status, keyed by month.
    """

    transactions_by_period: dict[Period, list[Transaction]] = field(
        default_factory=dict
    )
    closures: dict[Period, MonthlyClosure] = field(default_factory=dict)

    def transactions_in(self, period: Period) -> list[Transaction]:
        return self.transactions_by_period.get(period, [])

    def closed_closure(self, period: Period) -> MonthlyClosure | None:
        """Return the closure for ``period`` only when it is Closed."""
        closure = self.closures.get(period)
        if closure is not None and closure.is_closed:
            return closure
        return None

    def is_closed(self, period: Period) -> bool:
        return self.closed_closure(period) is not None

    def all_transactions(self) -> list[Transaction]:
        return [
            transaction
            for period in sorted(self.transactions_by_period)
            for transaction in self.transactions_by_period[period]
        ]

    def earliest_period(self) -> Period | None:
        """Return the first month holding a transaction or closure."""
        periods = [*self.transactions_by_period, *self.closures]
        return min(periods) if periods else None

    def years(self) -> set[int]:
        return {
            period.year
            for period in (*self.transactions_by_period, *self.closures)
        }


def build_snapshot(
    transactions: Iterable[Transaction],
    closures: Iterable[MonthlyClosure],
) -> LedgerSnapshot:
    """Group raw store reads into a snapshot.

    Args:
        transactions: Every live transaction, in any order.
        closures: Every closure record, in any order.

    Returns:
        LedgerSnapshot: Deterministically ordered view of the ledger.
    """
    grouped: dict[Period, list[Transaction]] = {}
    for transaction in transactions:
        grouped.setdefault(transaction.period, []).append(transaction)
    for items in grouped.values():
        items.sort(key=lambda item: (item.date, item.id))
    return LedgerSnapshot(
        transactions_by_period=grouped,
        closures={closure.period: closure for closure in closures},
    )


__all__ = ["LedgerSnapshot", "build_snapshot"]
