"""Month aggregation of transactions into category totals."""

from collections.abc import Iterable
from decimal import Decimal

from src.domain.models import (
    CategoryTotals,
    MonthlyClosure,
    MonthSummary,
    Period,
    Transaction,
    TransactionKind,
)
from src.utils.decimal_utils import ZERO, add


def summarize_transactions(
    transactions: Iterable[Transaction],
) -> tuple[Decimal, Decimal, dict[str, CategoryTotals]]:
    """Accumulate income, expense and per-category totals.

    Args:
        transactions: Transactions to accumulate.

    Returns:
        tuple: Total income, total expenses and category totals. Only
        categories that appear in ``transactions`` are present.
    """
    total_income = ZERO
    total_expenses = ZERO
    income_by_category: dict[str, Decimal] = {}
    expense_by_category: dict[str, Decimal] = {}
    order: list[str] = []
    for transaction in transactions:
        category = transaction.category
        if category not in income_by_category:
            order.append(category)
            income_by_category[category] = ZERO
            expense_by_category[category] = ZERO
        if transaction.kind is TransactionKind.INCOME:
            income_by_category[category] = add(
                income_by_category[category], transaction.amount
            )
            total_income = add(total_income, transaction.amount)
        else:
            expense_by_category[category] = add(
                expense_by_category[category], transaction.amount
            )
            total_expenses = add(total_expenses, transaction.amount)

    category_totals = {
        category: CategoryTotals(
            income=income_by_category[category],
            expense=expense_by_category[category],
        )
        for category in order
    }
    return total_income, total_expenses, category_totals


def aggregate_month(
    period: Period,
    initial_balance: Decimal,
    transactions: Iterable[Transaction],
    closure: MonthlyClosure | None = None,
) -> MonthSummary:
    """Build the summary of one month.

    A Closed closure is authoritative: its stored figures are returned as
    they are and live transactions are ignored.

    Args:
        period: Month to summarize.
        initial_balance: Resolved balance entering the month.
        transactions: Candidate transactions; those outside ``period`` are
            skipped.
        closure: Closure record for ``period``, if any.

    Returns:
        MonthSummary: Totals, category breakdown and balances.
    """
    if closure is not None and closure.is_closed:
        return closure.to_summary()

    total_income, total_expenses, category_totals = summarize_transactions(
        transaction
        for transaction in transactions
        if period.contains(transaction.date)
    )
    return MonthSummary(
        period=period,
        initial_balance=initial_balance,
        total_income=total_income,
        total_expenses=total_expenses,
        category_totals=category_totals,
        is_closed=False,
    )


__all__ = ["summarize_transactions", "aggregate_month"]
