"""Tests for carry-forward balance resolution."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.domain.errors import UnboundedRecursion
from src.domain.models import ClosureStatus, Period
from src.domain.services import (
    BalanceResolver,
    aggregate_month,
    build_snapshot,
    resolve_epoch,
)

JANUARY = Period(2024, 1)
FEBRUARY = Period(2024, 2)
MARCH = Period(2024, 3)


@pytest.fixture
def scenario(make_tx):
    return [
        make_tx("a", "income", "1000", "Capital", date(2024, 1, 10)),
        make_tx("b", "income", "500", "Interest", date(2024, 2, 5)),
        make_tx("c", "expense", "200", "Fiscalía", date(2024, 2, 20)),
    ]


def test_scenario_balances_carry_forward(scenario):
    snapshot = build_snapshot(scenario, [])
    resolver = BalanceResolver(snapshot, epoch=JANUARY)

    assert resolver.resolve_initial_balance(JANUARY) == Decimal("0")
    assert resolver.resolve_initial_balance(FEBRUARY) == Decimal("1000")
    summary = aggregate_month(
        FEBRUARY,
        resolver.resolve_initial_balance(FEBRUARY),
        snapshot.transactions_in(FEBRUARY),
    )
    assert summary.final_balance == Decimal("1300")


def test_closed_previous_month_is_authoritative(scenario, make_tx, make_closure):
    closure = make_closure(FEBRUARY, "1000", "500", "200")
    late_expense = make_tx("d", "expense", "50", "Fiscalía", date(2024, 2, 28))
    snapshot = build_snapshot([*scenario, late_expense], [closure])
    resolver = BalanceResolver(snapshot, epoch=JANUARY)

    summary = aggregate_month(
        FEBRUARY,
        resolver.resolve_initial_balance(FEBRUARY),
        snapshot.transactions_in(FEBRUARY),
        snapshot.closed_closure(FEBRUARY),
    )

    assert summary.final_balance == Decimal("1300")
    assert summary.is_closed
    assert resolver.resolve_initial_balance(MARCH) == Decimal("1300")
    assert resolver.resolve_final_balance(FEBRUARY) == Decimal("1300")


def test_open_closure_record_is_ignored(scenario, make_closure):
    reopened = make_closure(
        JANUARY,
        "0",
        "9999",
        "0",
        status=ClosureStatus.OPEN,
    )
    snapshot = build_snapshot(scenario, [reopened])
    resolver = BalanceResolver(snapshot, epoch=JANUARY)

    assert resolver.resolve_initial_balance(FEBRUARY) == Decimal("1000")


def test_each_month_opens_with_previous_month_close(make_tx):
    transactions = [
        make_tx("1", "income", "100.10", "Capital", date(2023, 11, 3)),
        make_tx("2", "expense", "40.05", "Fiscalía", date(2023, 12, 9)),
        make_tx("3", "income", "12.00", "Interest", date(2024, 2, 1)),
        make_tx("4", "expense", "0.05", "Divisas", date(2024, 2, 2)),
    ]
    snapshot = build_snapshot(transactions, [])
    resolver = BalanceResolver(snapshot, epoch=Period(2023, 11))

    period = Period(2023, 12)
    while period <= Period(2024, 4):
        previous = period.previous()
        expected = resolver.resolve_initial_balance(previous) + sum(
            (tx.signed_amount for tx in snapshot.transactions_in(previous)),
            Decimal("0"),
        )
        assert resolver.resolve_initial_balance(period) == expected
        period = period.next()
    assert resolver.resolve_initial_balance(Period(2024, 4)) == Decimal("72.00")


def test_months_before_epoch_open_at_zero(make_tx):
    snapshot = build_snapshot(
        [make_tx("1", "income", "10", "Capital", date(2020, 1, 1))],
        [],
    )
    resolver = BalanceResolver(snapshot, epoch=Period(2024, 1))

    assert resolver.resolve_initial_balance(Period(2024, 1)) == Decimal("0")
    assert resolver.resolve_initial_balance(Period(2022, 5)) == Decimal("0")


def test_long_history_resolves_without_deep_recursion(make_tx):
    snapshot = build_snapshot(
        [make_tx("1", "income", "1", "Capital", date(1800, 1, 15))],
        [],
    )
    resolver = BalanceResolver(snapshot, epoch=Period(1800, 1), max_months=5000)

    assert resolver.resolve_initial_balance(Period(2100, 1)) == Decimal("1")


def test_walk_back_past_limit_raises():
    snapshot = build_snapshot([], [])
    resolver = BalanceResolver(snapshot, epoch=Period(2000, 1), max_months=12)

    with pytest.raises(UnboundedRecursion):
        resolver.resolve_initial_balance(Period(2024, 1))


def test_memoized_months_are_not_folded_again(scenario):
    snapshot = build_snapshot(scenario, [])
    spy = MagicMock(wraps=snapshot)
    resolver = BalanceResolver(spy, epoch=JANUARY)

    resolver.resolve_initial_balance(MARCH)
    calls_after_first = spy.transactions_in.call_count
    resolver.resolve_initial_balance(MARCH)
    resolver.resolve_initial_balance(FEBRUARY)

    assert spy.transactions_in.call_count == calls_after_first


def test_resolve_epoch_prefers_configured_then_earliest_data(scenario):
    snapshot = build_snapshot(scenario, [])
    empty = build_snapshot([], [])

    assert resolve_epoch(snapshot, Period(2023, 6), MARCH) == Period(2023, 6)
    assert resolve_epoch(snapshot, None, MARCH) == JANUARY
    assert resolve_epoch(empty, None, MARCH) == MARCH
