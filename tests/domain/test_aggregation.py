"""Tests for month aggregation."""

from datetime import date
from decimal import Decimal

from src.domain.models import CategoryTotals, Period
from src.domain.services import aggregate_month, summarize_transactions

MARCH = Period(2024, 3)


def test_category_totals_have_exactly_the_used_categories(make_tx):
    transactions = [
        make_tx("1", "income", "300", "A", date(2024, 3, 1)),
        make_tx("2", "expense", "120", "B", date(2024, 3, 2)),
        make_tx("3", "expense", "30", "A", date(2024, 3, 3)),
    ]

    summary = aggregate_month(MARCH, Decimal("50"), transactions)

    assert set(summary.category_totals) == {"A", "B"}
    assert summary.category_totals["A"] == CategoryTotals(
        income=Decimal("300"),
        expense=Decimal("30"),
    )
    assert summary.category_totals["B"].net == Decimal("-120")
    assert summary.total_income == Decimal("300")
    assert summary.total_expenses == Decimal("150")
    assert summary.final_balance == Decimal("200")
    assert not summary.is_closed


def test_transactions_outside_the_month_are_skipped(make_tx):
    transactions = [
        make_tx("1", "income", "10", "A", date(2024, 2, 29)),
        make_tx("2", "income", "5", "A", date(2024, 3, 31)),
        make_tx("3", "income", "7", "A", date(2024, 4, 1)),
    ]

    summary = aggregate_month(MARCH, Decimal("0"), transactions)

    assert summary.total_income == Decimal("5")


def test_empty_month_keeps_the_opening_balance():
    summary = aggregate_month(MARCH, Decimal("42.42"), [])

    assert summary.category_totals == {}
    assert summary.final_balance == Decimal("42.42")


def test_closed_closure_figures_are_returned_unchanged(make_tx, make_closure):
    closure = make_closure(MARCH, "100", "20", "5")
    live = [make_tx("1", "income", "999", "A", date(2024, 3, 4))]

    summary = aggregate_month(MARCH, Decimal("0"), live, closure)

    assert summary.is_closed
    assert summary.initial_balance == Decimal("100")
    assert summary.final_balance == Decimal("115")


def test_income_sums_are_exact(make_tx):
    transactions = [
        make_tx(str(index), "income", "0.10", "A", date(2024, 3, 1))
        for index in range(3)
    ]

    total_income, total_expenses, _ = summarize_transactions(transactions)

    assert total_income == Decimal("0.30")
    assert total_expenses == Decimal("0")
