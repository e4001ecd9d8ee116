"""Command-line adapter for the ledger.

Usage:
    python -m src.adapters.ledger_cli init-db
    python -m src.adapters.ledger_cli add --kind income --amount 100.00 \
        --category "Intereses Ganados" --description "Loan interest" \
        --date 2024-01-15
    python -m src.adapters.ledger_cli report 2024 1
    python -m src.adapters.ledger_cli close 2024 1
"""

import argparse
import sys

from src.application.use_cases import (
    CloseMonthUseCase,
    GenerateMonthlySummaryUseCase,
    GetAnnualReportUseCase,
    GetMonthReportUseCase,
    ListMonthTransactionsUseCase,
    RecordTransactionUseCase,
    ReopenMonthUseCase,
)
from src.domain.errors import LedgerError
from src.infrastructure.container import (
    build_closure_store,
    build_company_profile_repository,
    build_database_adapter,
    build_error_channel,
    build_settings,
    build_summary_service,
    build_transaction_store,
    build_writer,
    ensure_schema,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import to_display_string


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ledger",
        description="Record transactions and close monthly ledgers.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("init-db", help="Create the ledger tables.")

    add = commands.add_parser("add", help="Record a transaction.")
    add.add_argument("--kind", required=True, choices=("income", "expense"))
    add.add_argument("--amount", required=True)
    add.add_argument("--category", required=True)
    add.add_argument("--description", required=True)
    add.add_argument("--date", required=True, help="YYYY-MM-DD")

    for name, help_text in (
        ("list", "List a month's transactions."),
        ("report", "Show a month's summary."),
        ("close", "Close a month."),
        ("reopen", "Reopen a closed month."),
        ("summary", "Generate a narrative summary of a month."),
    ):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("year", type=int)
        sub.add_argument("month", type=int)
        if name == "summary":
            sub.add_argument("--benchmarks", default=None)

    annual = commands.add_parser("annual", help="Show the annual report.")
    annual.add_argument("year", type=int)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run one ledger command.

    Args:
        argv: Command-line arguments, excluding the program name.

    Returns:
        int: Process exit code, 0 on success.
    """
    args = _build_parser().parse_args(argv)
    logger = get_app_logger()
    try:
        return _dispatch(args, logger)
    except (LedgerError, ValueError) as exc:
        logger.error(f"Command '{args.command}' failed: {exc}")
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def _dispatch(args: argparse.Namespace, logger) -> int:
    db_adapter = build_database_adapter()
    if args.command == "init-db":
        ensure_schema(db_adapter)
        print("Ledger tables are ready.")
        return 0

    settings = build_settings()
    transaction_store = build_transaction_store(db_adapter)
    closure_store = build_closure_store(db_adapter)
    resolver_options = {
        "epoch": settings.epoch,
        "max_lookback_months": settings.max_lookback_months,
    }

    def money(amount) -> str:
        return to_display_string(amount, settings.currency_code)

    if args.command == "add":
        writer = build_writer(build_error_channel())
        use_case = RecordTransactionUseCase(
            transaction_store,
            closure_store,
            writer,
            categories=settings.categories,
            logger=logger,
        )
        try:
            future = use_case.create(
                {
                    "kind": args.kind,
                    "amount": args.amount,
                    "category": args.category,
                    "description": args.description,
                    "date": args.date,
                }
            )
            transaction_id = future.result()
        finally:
            writer.shutdown()
        print(f"Recorded transaction {transaction_id}.")
        return 0

    if args.command == "list":
        items = ListMonthTransactionsUseCase(transaction_store).execute(
            args.year,
            args.month,
        )
        for item in items:
            print(
                f"{item.date.isoformat()}  {item.kind.value:<7}  "
                f"{money(item.amount):>16}  {item.category}  "
                f"{item.description}  [{item.id}]"
            )
        print(f"{len(items)} transactions.")
        return 0

    if args.command == "report":
        report = GetMonthReportUseCase(
            transaction_store,
            closure_store,
            company_repository=build_company_profile_repository(db_adapter),
            logger=logger,
            currency_code=settings.currency_code,
            **resolver_options,
        ).execute(args.year, args.month)
        summary = report.summary
        status = "closed" if summary.is_closed else "open"
        print(f"Month {summary.period.key} ({status})")
        print(f"  Initial balance: {money(summary.initial_balance)}")
        print(f"  Income:          {money(summary.total_income)}")
        print(f"  Expenses:        {money(summary.total_expenses)}")
        print(f"  Final balance:   {money(summary.final_balance)}")
        for category, totals in summary.category_totals.items():
            print(f"    {category}: {money(totals.net)}")
        return 0

    if args.command == "annual":
        report = GetAnnualReportUseCase(
            transaction_store,
            closure_store,
            logger=logger,
            categories=settings.categories,
            **resolver_options,
        ).execute(args.year)
        for category in report.categories:
            print(
                f"{category}: {money(report.category_year_totals[category])}"
            )
        print(f"Total {report.year}: {money(report.grand_total)}")
        print(f"Closing balance: {money(report.closing_balance)}")
        return 0

    if args.command == "close":
        closure = CloseMonthUseCase(
            transaction_store,
            closure_store,
            logger=logger,
            **resolver_options,
        ).execute(args.year, args.month)
        print(
            f"Closed {closure.id} with final balance "
            f"{money(closure.final_balance)}."
        )
        return 0

    if args.command == "reopen":
        ReopenMonthUseCase(
            closure_store,
            logger=logger,
            delete_record=settings.reopen_mode == "delete",
        ).execute(args.year, args.month)
        print(f"Reopened {args.year:04d}-{args.month:02d}.")
        return 0

    outcome = GenerateMonthlySummaryUseCase(
        transaction_store,
        closure_store,
        build_summary_service(settings),
        logger=logger,
        **resolver_options,
    ).execute(args.year, args.month, benchmarks=args.benchmarks)
    if not outcome.ok:
        print(f"Error: {outcome.error}", file=sys.stderr)
        return 1
    print(outcome.result.summary)
    for suggestion in outcome.result.suggestions:
        print(f"- {suggestion}")
    return 0


__all__ = ["main"]


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
