"""Carry-forward balance resolution across months."""

from decimal import Decimal

from src.domain.constants import DEFAULT_MAX_LOOKBACK_MONTHS
from src.domain.errors import UnboundedRecursion
from src.domain.models import Period
from src.domain.services.snapshot import LedgerSnapshot
from src.utils.decimal_utils import ZERO, add


class BalanceResolver:
    """Resolve the balance entering any month of a ledger snapshot.

    The opening balance of a month is the closing balance of the month
    before it: read from that month's Closed closure when there is one,
    otherwise derived from its own opening balance plus its live
    transactions, back to the epoch, where the balance is zero.

    Results are memoized per instance. Build a new resolver from a fresh
    snapshot for every report or closing run so closure changes are seen.
    """

    def __init__(
        self,
        snapshot: LedgerSnapshot,
        epoch: Period,
        max_months: int = DEFAULT_MAX_LOOKBACK_MONTHS,
        logger=None,
    ) -> None:
        """Initialize the resolver.

        Args:
            snapshot: Transactions and closures to resolve against.
            epoch: Earliest tracked month; its opening balance is zero.
            max_months: Longest walk back allowed before giving up.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._snapshot = snapshot
        self._epoch = epoch
        self._max_months = max_months
        self._logger = logger
        self._opening: dict[Period, Decimal] = {}

    @property
    def epoch(self) -> Period:
        return self._epoch

    def resolve_initial_balance(self, period: Period) -> Decimal:
        """Return the balance entering ``period``.

        Raises:
            UnboundedRecursion: If more than ``max_months`` months must be
                derived without reaching a closure or the epoch.
        """
        if period in self._opening:
            return self._opening[period]

        pending: list[Period] = []
        current = period
        while True:
            if current in self._opening:
                balance = self._opening[current]
                break
            previous = current.previous()
            closure = self._snapshot.closed_closure(previous)
            if closure is not None:
                balance = closure.final_balance
                self._opening[current] = balance
                break
            if current <= self._epoch:
                balance = ZERO
                self._opening[current] = balance
                break
            pending.append(current)
            if len(pending) > self._max_months:
                raise UnboundedRecursion(
                    f"Resolving {period.key} walked back more than "
                    f"{self._max_months} months without reaching the epoch "
                    f"{self._epoch.key}; check the ledger epoch setting"
                )
            current = previous

        for target in reversed(pending):
            balance = self._fold(target.previous(), balance)
            self._opening[target] = balance

        if self._logger is not None:
            self._logger.debug(
                f"Resolved opening balance for {period.key}: "
                f"{self._opening[period]} (derived {len(pending)} months)"
            )
        return self._opening[period]

    def resolve_final_balance(self, period: Period) -> Decimal:
        """Return the balance leaving ``period``."""
        closure = self._snapshot.closed_closure(period)
        if closure is not None:
            return closure.final_balance
        return self._fold(period, self.resolve_initial_balance(period))

    def _fold(self, period: Period, opening: Decimal) -> Decimal:
        balance = opening
        for transaction in self._snapshot.transactions_in(period):
            balance = add(balance, transaction.signed_amount)
        return balance


def resolve_epoch(
    snapshot: LedgerSnapshot,
    configured: Period | None,
    fallback: Period,
) -> Period:
    """Fix the epoch for one computation.

    Args:
        snapshot: Ledger snapshot the computation runs on.
        configured: Explicit epoch from settings, if any.
        fallback: Period used when the ledger holds no data at all.

    Returns:
        Period: The configured epoch, else the earliest month with data,
        else ``fallback``.
    """
    if configured is not None:
        return configured
    earliest = snapshot.earliest_period()
    return earliest if earliest is not None else fallback


__all__ = ["BalanceResolver", "resolve_epoch"]
