"""Tests for the consolidated annual report."""

from datetime import date
from decimal import Decimal

from src.domain.models import Period
from src.domain.services import (
    BalanceResolver,
    build_annual_report,
    build_snapshot,
)


def _report(transactions, closures=(), categories=("Fiscalía", "Divisas")):
    snapshot = build_snapshot(transactions, closures)
    resolver = BalanceResolver(snapshot, epoch=Period(2024, 1))
    return build_annual_report(2024, snapshot, resolver, categories)


def test_configured_rows_are_zero_filled_and_unknown_rows_kept(make_tx):
    report = _report(
        [
            make_tx("1", "income", "100", "Zeta", date(2024, 1, 2)),
            make_tx("2", "expense", "40", "Fiscalía", date(2024, 3, 2)),
            make_tx("3", "income", "5", "Alpha", date(2024, 3, 9)),
        ]
    )

    assert report.categories == ["Fiscalía", "Divisas", "Alpha", "Zeta"]
    assert report.cell("Divisas", 6) == Decimal("0")
    assert report.cell("Zeta", 1) == Decimal("100")
    assert report.cell("Fiscalía", 3) == Decimal("-40")
    assert report.category_year_totals["Alpha"] == Decimal("5")


def test_grand_total_equals_sum_of_monthly_nets(make_tx):
    report = _report(
        [
            make_tx("1", "income", "100.10", "Divisas", date(2024, 1, 2)),
            make_tx("2", "expense", "0.20", "Divisas", date(2024, 7, 2)),
            make_tx("3", "income", "3", "Fiscalía", date(2024, 12, 31)),
        ]
    )

    monthly = sum((column.net_total for column in report.months), Decimal("0"))
    assert report.grand_total == monthly == Decimal("102.90")
    assert len(report.months) == 12


def test_balances_chain_across_months(make_tx):
    report = _report(
        [
            make_tx("1", "income", "1000", "Divisas", date(2024, 1, 10)),
            make_tx("2", "expense", "200", "Fiscalía", date(2024, 2, 20)),
        ]
    )

    assert report.opening_balance == Decimal("0")
    assert report.months[1].initial_balance == Decimal("1000")
    assert report.months[1].final_balance == Decimal("800")
    assert report.closing_balance == Decimal("800")
    for previous, current in zip(report.months, report.months[1:]):
        assert current.initial_balance == previous.final_balance


def test_closed_month_contributes_frozen_figures(make_tx, make_closure):
    closure = make_closure(Period(2024, 2), "1000", "0", "200")
    report = _report(
        [
            make_tx("1", "income", "1000", "Divisas", date(2024, 1, 10)),
            make_tx("2", "expense", "999", "Fiscalía", date(2024, 2, 20)),
        ],
        closures=[closure],
    )

    assert report.months[1].is_closed
    assert report.months[1].final_balance == Decimal("800")
    assert report.months[2].initial_balance == Decimal("800")
