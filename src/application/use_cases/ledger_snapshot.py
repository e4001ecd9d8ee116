"""Shared loading of a ledger snapshot and its balance resolver."""

from src.application.ports.closure_store import ClosureStorePort
from src.application.ports.transaction_store import TransactionStorePort
from src.domain.constants import DEFAULT_MAX_LOOKBACK_MONTHS
from src.domain.models import Period
from src.domain.services import (
    BalanceResolver,
    LedgerSnapshot,
    build_snapshot,
    resolve_epoch,
)


def load_snapshot(
    transaction_store: TransactionStorePort,
    closure_store: ClosureStorePort,
) -> LedgerSnapshot:
    """Read both stores once and group the result.

    Args:
        transaction_store: Port providing live transactions.
        closure_store: Port providing closure records.

    Returns:
        LedgerSnapshot: Snapshot used for a single computation.
    """
    return build_snapshot(
        transaction_store.list_all(),
        closure_store.list_all(),
    )


def build_resolver(
    snapshot: LedgerSnapshot,
    fallback_epoch: Period,
    epoch: Period | None = None,
    max_lookback_months: int = DEFAULT_MAX_LOOKBACK_MONTHS,
    logger=None,
) -> BalanceResolver:
    """Build a resolver with the epoch fixed for this snapshot.

    Args:
        snapshot: Snapshot the resolver reads.
        fallback_epoch: Epoch used when the ledger is empty.
        epoch: Configured epoch, if any.
        max_lookback_months: Resolver walk-back limit.
        logger: Optional logger compatible with logging.Logger-like API.

    Returns:
        BalanceResolver: Fresh resolver with an empty memo.
    """
    return BalanceResolver(
        snapshot,
        epoch=resolve_epoch(snapshot, epoch, fallback_epoch),
        max_months=max_lookback_months,
        logger=logger,
    )


__all__ = ["load_snapshot", "build_resolver"]
