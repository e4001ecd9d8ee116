"""Consolidated category-by-month report for a calendar year."""

from collections.abc import Sequence
from decimal import Decimal

from src.domain.models import AnnualMonthColumn, AnnualReport, months_of_year
from src.domain.services.aggregation import aggregate_month
from src.domain.services.balance import BalanceResolver
from src.domain.services.snapshot import LedgerSnapshot
from src.utils.decimal_utils import ZERO, add, sum_amounts


def build_annual_report(
    year: int,
    snapshot: LedgerSnapshot,
    resolver: BalanceResolver,
    categories: Sequence[str],
) -> AnnualReport:
    """Build the annual matrix of category net balances.

    Every month goes through the resolver and the month aggregator, so
    closed months contribute their frozen figures. The resolver's memo is
    shared by all twelve months.

    Args:
        year: Calendar year to report.
        snapshot: Ledger snapshot for this report run.
        resolver: Resolver built on ``snapshot``.
        categories: Configured categories, used as the leading rows.

    Returns:
        AnnualReport: Twelve month columns plus row and grand totals.
    """
    summaries = []
    for period in months_of_year(year):
        initial_balance = resolver.resolve_initial_balance(period)
        summaries.append(
            aggregate_month(
                period,
                initial_balance,
                snapshot.transactions_in(period),
                snapshot.closed_closure(period),
            )
        )

    observed = {
        category
        for summary in summaries
        for category in summary.category_totals
    }
    rows = list(dict.fromkeys(categories))
    rows.extend(sorted(observed - set(rows)))

    columns: list[AnnualMonthColumn] = []
    for summary in summaries:
        category_nets: dict[str, Decimal] = {}
        for category in rows:
            totals = summary.category_totals.get(category)
            category_nets[category] = totals.net if totals else ZERO
        columns.append(
            AnnualMonthColumn(
                period=summary.period,
                initial_balance=summary.initial_balance,
                final_balance=summary.final_balance,
                category_nets=category_nets,
                net_total=sum_amounts(category_nets.values()),
                is_closed=summary.is_closed,
            )
        )

    category_year_totals = {
        category: sum_amounts(
            column.category_nets[category] for column in columns
        )
        for category in rows
    }
    grand_total = ZERO
    for column in columns:
        grand_total = add(grand_total, column.net_total)

    return AnnualReport(
        year=year,
        categories=rows,
        months=columns,
        category_year_totals=category_year_totals,
        grand_total=grand_total,
    )


__all__ = ["build_annual_report"]
