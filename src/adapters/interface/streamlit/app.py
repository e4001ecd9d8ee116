"""Streamlit ledger entry point."""

from collections.abc import Sequence
from concurrent.futures import Future, wait
from dataclasses import dataclass, field
from datetime import date
import hmac

import streamlit as st
import altair as alt

from src.application.ports.error_reporting import WriteDispatcherPort
from src.application.use_cases import (
    CloseMonthUseCase,
    GenerateMonthlySummaryUseCase,
    GetAnnualReportUseCase,
    GetCapitalOverviewUseCase,
    GetCompanyProfileUseCase,
    GetMonthReportUseCase,
    ListMonthTransactionsUseCase,
    RecordTransactionUseCase,
    ReopenMonthUseCase,
    SaveCompanyProfileUseCase,
)
from src.domain.errors import LedgerError
from src.domain.models import (
    AnnualReport,
    CapitalOverview,
    CompanyProfile,
    MonthReport,
    Period,
    Transaction,
    TransactionKind,
)
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
from src.infrastructure.error_channel import ErrorEvent
from src.infrastructure.logging.logger import get_usage_logger
from src.infrastructure.settings import LedgerSettings
from src.utils.decimal_utils import to_display_string

PAGES = [
    "Dashboard",
    "Transactions",
    "Monthly Report",
    "Annual Report",
    "Configuration",
]
MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]
WRITE_TIMEOUT_SECONDS = 10


@dataclass
class _WriteServices:
    """Long-lived writer plus the failures it has reported."""

    writer: WriteDispatcherPort
    errors: list[ErrorEvent] = field(default_factory=list)


def _fetch_settings() -> LedgerSettings:
    return build_settings()


@st.cache_resource(show_spinner=False)
def _prepare_schema() -> bool:
    """Create the ledger tables once per server process."""
    ensure_schema(build_database_adapter())
    return True


@st.cache_resource(show_spinner=False)
def _get_write_services() -> _WriteServices:
    """Build the background writer and collect its failures."""
    channel = build_error_channel()
    services = _WriteServices(writer=build_writer(channel))
    channel.subscribe(services.errors.append)
    return services


def _fetch_capital_overview(today: date) -> CapitalOverview:
    """Fetch the dashboard overview."""
    settings = _fetch_settings()
    adapter = build_database_adapter()
    use_case = GetCapitalOverviewUseCase(
        build_transaction_store(adapter),
        build_closure_store(adapter),
        epoch=settings.epoch,
        max_lookback_months=settings.max_lookback_months,
    )
    return use_case.execute(today=today)


@st.cache_data(show_spinner=False)
def _load_capital_overview(today: date) -> CapitalOverview:
    """Cached wrapper around _fetch_capital_overview."""
    return _fetch_capital_overview(today)


def _fetch_month_report(year: int, month: int) -> MonthReport:
    """Fetch one month's report."""
    settings = _fetch_settings()
    adapter = build_database_adapter()
    use_case = GetMonthReportUseCase(
        build_transaction_store(adapter),
        build_closure_store(adapter),
        company_repository=build_company_profile_repository(adapter),
        epoch=settings.epoch,
        max_lookback_months=settings.max_lookback_months,
        currency_code=settings.currency_code,
    )
    return use_case.execute(year, month)


@st.cache_data(show_spinner=False)
def _load_month_report(year: int, month: int) -> MonthReport:
    """Cached wrapper around _fetch_month_report."""
    return _fetch_month_report(year, month)


def _fetch_annual_report(year: int) -> AnnualReport:
    """Fetch the consolidated report for a year."""
    settings = _fetch_settings()
    adapter = build_database_adapter()
    use_case = GetAnnualReportUseCase(
        build_transaction_store(adapter),
        build_closure_store(adapter),
        categories=settings.categories,
        epoch=settings.epoch,
        max_lookback_months=settings.max_lookback_months,
    )
    return use_case.execute(year)


@st.cache_data(show_spinner=False)
def _load_annual_report(year: int) -> AnnualReport:
    """Cached wrapper around _fetch_annual_report."""
    return _fetch_annual_report(year)


def _fetch_available_years(today: date) -> list[int]:
    adapter = build_database_adapter()
    use_case = ListMonthTransactionsUseCase(
        build_transaction_store(adapter),
        build_closure_store(adapter),
    )
    return use_case.available_years(today=today)


@st.cache_data(show_spinner=False)
def _load_available_years(today: date) -> list[int]:
    """Cached wrapper around _fetch_available_years."""
    return _fetch_available_years(today)


def _invalidate_reads() -> None:
    """Drop cached reads after any write."""
    st.cache_data.clear()


def _is_admin(entered: str | None, configured: str | None) -> bool:
    """Return True when the entered password matches the configured one.

    Writes stay locked when no admin password is configured.
    """
    if not configured or not entered:
        return False
    return hmac.compare_digest(entered.encode(), configured.encode())


def _month_label(month: int) -> str:
    return MONTH_NAMES[month - 1]


def _transaction_rows(
    transactions: Sequence[Transaction],
    currency_code: str,
) -> list[dict[str, str]]:
    """Build table rows for transaction detail."""
    return [
        {
            "Date": item.date.isoformat(),
            "Type": "Income" if item.kind is TransactionKind.INCOME else "Expense",
            "Category": item.category,
            "Description": item.description,
            "Amount": to_display_string(item.amount, currency_code),
        }
        for item in transactions
    ]


def _annual_table_rows(
    report: AnnualReport,
    currency_code: str,
) -> list[dict[str, str]]:
    """Build the category-by-month matrix plus a totals row."""
    rows: list[dict[str, str]] = []
    for category in report.categories:
        row = {"Category": category}
        for column in report.months:
            row[_month_label(column.period.month)[:3]] = to_display_string(
                column.category_nets[category],
                currency_code,
            )
        row["Total"] = to_display_string(
            report.category_year_totals[category],
            currency_code,
        )
        rows.append(row)
    totals = {"Category": "Total"}
    for column in report.months:
        totals[_month_label(column.period.month)[:3]] = to_display_string(
            column.net_total,
            currency_code,
        )
    totals["Total"] = to_display_string(report.grand_total, currency_code)
    rows.append(totals)
    return rows


def _annual_chart_data(report: AnnualReport) -> list[dict[str, str | float]]:
    """Prepare Altair data with one point per month."""
    return [
        {
            "month": _month_label(column.period.month)[:3],
            "order": column.period.month,
            "net": float(column.net_total),
            "balance": float(column.final_balance),
            "status": "Closed" if column.is_closed else "Open",
        }
        for column in report.months
    ]


def _render_annual_chart(report: AnnualReport) -> None:
    """Render monthly net bars with the running balance as a line."""
    data = _annual_chart_data(report)
    base = alt.Chart(alt.Data(values=data)).encode(
        x=alt.X(
            "month:N",
            sort=alt.SortField("order"),
            title=None,
        ),
    )
    bars = base.mark_bar(cornerRadius=4).encode(
        y=alt.Y("net:Q", title="Net"),
        color=alt.condition(
            "datum.net >= 0",
            alt.value("#2e7d32"),
            alt.value("#e76f51"),
        ),
        tooltip=[
            alt.Tooltip("month:N"),
            alt.Tooltip("net:Q", format=",.2f"),
            alt.Tooltip("status:N"),
        ],
    )
    line = base.mark_line(point=True, color="#1b9aaa").encode(
        y=alt.Y("balance:Q", title="Balance"),
        tooltip=[
            alt.Tooltip("month:N"),
            alt.Tooltip("balance:Q", format=",.2f"),
        ],
    )
    chart = alt.layer(bars, line).resolve_scale(y="independent").properties(
        height=360,
    ).configure_view(
        stroke=None
    )
    st.altair_chart(chart, width="stretch")


def _await_write(future: Future) -> bool:
    """Wait briefly for a write so the next read sees it."""
    done, _ = wait([future], timeout=WRITE_TIMEOUT_SECONDS)
    if not done:
        st.info("The change is still being saved.")
        return False
    return future.exception() is None


def _render_write_errors(services: _WriteServices) -> None:
    """Show and clear failures reported by background writes."""
    while services.errors:
        event = services.errors.pop(0)
        st.error(f"Could not save: {event.message}")


def _select_period(key: str, years: Sequence[int], today: date) -> Period:
    year_col, month_col = st.columns(2)
    year = year_col.selectbox("Year", options=list(years), key=f"{key}_year")
    month = month_col.selectbox(
        "Month",
        options=list(range(1, 13)),
        index=today.month - 1,
        format_func=_month_label,
        key=f"{key}_month",
    )
    return Period(year, month)


def _render_dashboard(settings: LedgerSettings, today: date) -> None:
    overview = _load_capital_overview(today)
    currency = settings.currency_code
    income_col, expense_col, capital_col = st.columns(3)
    income_col.metric(
        "Total income",
        to_display_string(overview.total_income, currency),
    )
    expense_col.metric(
        "Total expenses",
        to_display_string(overview.total_expenses, currency),
    )
    capital_col.metric(
        f"Capital ({overview.as_of.key})",
        to_display_string(overview.capital, currency),
    )
    st.caption(f"{overview.transaction_count} transactions recorded")

    report = _load_month_report(today.year, today.month)
    st.subheader(f"Latest movements, {_month_label(today.month)}")
    rows = _transaction_rows(report.transactions[:10], currency)
    if rows:
        st.dataframe(rows, width="stretch", hide_index=True)
    else:
        st.info("No transactions this month yet.")


def _transaction_form(
    settings: LedgerSettings,
    key: str,
    existing: Transaction | None = None,
) -> dict[str, object] | None:
    """Render a transaction form and return the submitted fields."""
    categories = list(settings.categories)
    kinds = [kind.value for kind in TransactionKind]
    with st.form(key, clear_on_submit=existing is None):
        kind = st.selectbox(
            "Type",
            options=kinds,
            index=kinds.index(existing.kind.value) if existing else 0,
            format_func=str.capitalize,
        )
        amount = st.text_input(
            "Amount",
            value=str(existing.amount) if existing else "",
            placeholder="0.00",
        )
        category = st.selectbox(
            "Category",
            options=categories,
            index=(
                categories.index(existing.category)
                if existing and existing.category in categories
                else 0
            ),
        )
        description = st.text_input(
            "Description",
            value=existing.description if existing else "",
            max_chars=100,
        )
        tx_date = st.date_input(
            "Date",
            value=existing.date if existing else date.today(),
        )
        submitted = st.form_submit_button("Save")
    if not submitted:
        return None
    return {
        "kind": kind,
        "amount": amount,
        "category": category,
        "description": description,
        "date": tx_date,
    }


def _render_transactions(
    settings: LedgerSettings,
    today: date,
    is_admin: bool,
) -> None:
    years = _load_available_years(today)
    period = _select_period("transactions", years, today)
    report = _load_month_report(period.year, period.month)
    if report.summary.is_closed:
        st.warning(
            f"{period.key} is closed. Reopen it to edit its transactions."
        )

    rows = _transaction_rows(report.transactions, settings.currency_code)
    st.caption(f"{len(rows)} transactions in {period.key}")
    st.dataframe(rows, width="stretch", hide_index=True, height=420)

    if not is_admin:
        st.info("Enter the admin password in the sidebar to edit.")
        return

    services = _get_write_services()
    adapter = build_database_adapter()
    use_case = RecordTransactionUseCase(
        build_transaction_store(adapter),
        build_closure_store(adapter),
        services.writer,
        categories=settings.categories,
    )
    usage = get_usage_logger()

    st.subheader("New transaction")
    data = _transaction_form(settings, "new_transaction")
    if data is not None:
        try:
            future = use_case.create(data)
        except LedgerError as exc:
            st.error(str(exc))
        else:
            usage.info(f"action=create_transaction period={period.key}")
            if _await_write(future):
                st.success("Transaction saved.")
            _invalidate_reads()

    if not report.transactions:
        return
    st.subheader("Edit transaction")
    by_id = {item.id: item for item in report.transactions}
    selected_id = st.selectbox(
        "Transaction",
        options=list(by_id),
        format_func=lambda tx_id: (
            f"{by_id[tx_id].date.isoformat()} {by_id[tx_id].description}"
        ),
    )
    selected = by_id[selected_id]
    changes = _transaction_form(settings, "edit_transaction", selected)
    if changes is not None:
        try:
            future = use_case.update(selected.id, changes)
        except LedgerError as exc:
            st.error(str(exc))
        else:
            usage.info(f"action=update_transaction id={selected.id}")
            if _await_write(future):
                st.success("Transaction updated.")
            _invalidate_reads()
    if st.button("Delete transaction", type="secondary"):
        try:
            future = use_case.delete(selected.id)
        except LedgerError as exc:
            st.error(str(exc))
        else:
            usage.info(f"action=delete_transaction id={selected.id}")
            if _await_write(future):
                st.success("Transaction deleted.")
            _invalidate_reads()
    _render_write_errors(services)


def _render_month_report(
    settings: LedgerSettings,
    today: date,
    is_admin: bool,
) -> None:
    years = _load_available_years(today)
    period = _select_period("report", years, today)
    report = _load_month_report(period.year, period.month)
    summary = report.summary
    currency = settings.currency_code

    if report.company and not report.company.is_empty:
        st.markdown(f"**{report.company.name}**  \n{report.company.tax_id}")
    status = "Closed" if summary.is_closed else "Open"
    st.subheader(f"{_month_label(period.month)} {period.year} ({status})")

    initial_col, income_col, expense_col, final_col = st.columns(4)
    initial_col.metric(
        "Initial balance",
        to_display_string(summary.initial_balance, currency),
    )
    income_col.metric(
        "Income",
        to_display_string(summary.total_income, currency),
    )
    expense_col.metric(
        "Expenses",
        to_display_string(summary.total_expenses, currency),
    )
    final_col.metric(
        "Final balance",
        to_display_string(summary.final_balance, currency),
    )

    category_rows = [
        {
            "Category": category,
            "Income": to_display_string(totals.income, currency),
            "Expenses": to_display_string(totals.expense, currency),
            "Net": to_display_string(totals.net, currency),
        }
        for category, totals in summary.category_totals.items()
    ]
    if category_rows:
        st.dataframe(category_rows, width="stretch", hide_index=True)
    st.subheader("Detail")
    st.dataframe(
        _transaction_rows(report.transactions, currency),
        width="stretch",
        hide_index=True,
    )

    if is_admin:
        _render_closure_controls(settings, period, summary.is_closed)
    _render_summary_section(settings, period)


def _render_closure_controls(
    settings: LedgerSettings,
    period: Period,
    is_closed: bool,
) -> None:
    adapter = build_database_adapter()
    closure_store = build_closure_store(adapter)
    usage = get_usage_logger()
    try:
        if is_closed and st.button(f"Reopen {period.key}"):
            ReopenMonthUseCase(
                closure_store,
                delete_record=settings.reopen_mode == "delete",
            ).execute(period.year, period.month)
            usage.info(f"action=reopen period={period.key}")
            _invalidate_reads()
            st.rerun()
        if not is_closed and st.button(f"Close {period.key}"):
            CloseMonthUseCase(
                build_transaction_store(adapter),
                closure_store,
                epoch=settings.epoch,
                max_lookback_months=settings.max_lookback_months,
            ).execute(period.year, period.month)
            usage.info(f"action=close period={period.key}")
            _invalidate_reads()
            st.rerun()
    except LedgerError as exc:
        st.error(str(exc))


def _render_summary_section(settings: LedgerSettings, period: Period) -> None:
    st.subheader("AI summary")
    benchmarks = st.text_area(
        "Benchmarks (optional)",
        placeholder="Market rates or targets to compare against",
    )
    state_key = f"summary_{period.key}"
    if st.button("Generate summary"):
        adapter = build_database_adapter()
        with st.spinner("Generating summary..."):
            outcome = GenerateMonthlySummaryUseCase(
                build_transaction_store(adapter),
                build_closure_store(adapter),
                build_summary_service(settings),
                epoch=settings.epoch,
                max_lookback_months=settings.max_lookback_months,
            ).execute(period.year, period.month, benchmarks=benchmarks or None)
        get_usage_logger().info(f"action=summary period={period.key}")
        st.session_state[state_key] = outcome
    outcome = st.session_state.get(state_key)
    if outcome is None:
        return
    if not outcome.ok:
        st.error(outcome.error)
        return
    st.write(outcome.result.summary)
    for suggestion in outcome.result.suggestions:
        st.markdown(f"- {suggestion}")


def _render_annual_report(settings: LedgerSettings, today: date) -> None:
    years = _load_available_years(today)
    year = st.selectbox("Year", options=years, key="annual_year")
    report = _load_annual_report(year)
    currency = settings.currency_code
    opening_col, total_col, closing_col = st.columns(3)
    opening_col.metric(
        "Opening balance",
        to_display_string(report.opening_balance, currency),
    )
    total_col.metric(
        "Net for the year",
        to_display_string(report.grand_total, currency),
    )
    closing_col.metric(
        "Closing balance",
        to_display_string(report.closing_balance, currency),
    )
    st.dataframe(
        _annual_table_rows(report, currency),
        width="stretch",
        hide_index=True,
    )
    _render_annual_chart(report)


def _render_configuration(settings: LedgerSettings, is_admin: bool) -> None:
    st.subheader("Settings")
    st.json(
        {
            "currency": settings.currency_code,
            "epoch": settings.epoch.key if settings.epoch else None,
            "max_lookback_months": settings.max_lookback_months,
            "reopen_mode": settings.reopen_mode,
            "categories": list(settings.categories),
            "summary_model": settings.summary_model,
        }
    )

    st.subheader("Company profile")
    repository = build_company_profile_repository(build_database_adapter())
    profile = GetCompanyProfileUseCase(repository).execute()
    if not is_admin:
        st.write(profile.name or "No company profile yet.")
        return
    with st.form("company_profile"):
        name = st.text_input("Name", value=profile.name)
        tax_id = st.text_input("Tax id", value=profile.tax_id)
        address = st.text_input("Address", value=profile.address)
        phone = st.text_input("Phone", value=profile.phone)
        email = st.text_input("Email", value=profile.email)
        logo = st.text_input("Logo URL", value=profile.logo)
        submitted = st.form_submit_button("Save profile")
    if not submitted:
        return
    try:
        SaveCompanyProfileUseCase(repository).execute(
            CompanyProfile(
                name=name,
                tax_id=tax_id,
                address=address,
                phone=phone,
                email=email,
                logo=logo,
            )
        )
    except ValueError as exc:
        st.error(str(exc))
        return
    get_usage_logger().info("action=save_company_profile")
    _invalidate_reads()
    st.success("Company profile saved.")


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Fund Ledger", layout="wide")
    st.title("Fund Ledger")

    settings = _fetch_settings()
    _prepare_schema()
    page = st.sidebar.selectbox("Page", PAGES)
    password = st.sidebar.text_input("Admin password", type="password")
    is_admin = _is_admin(password, settings.admin_password)
    get_usage_logger().info(f"page={page} admin={is_admin}")

    today = date.today()
    try:
        if page == "Dashboard":
            _render_dashboard(settings, today)
        elif page == "Transactions":
            _render_transactions(settings, today, is_admin)
        elif page == "Monthly Report":
            _render_month_report(settings, today, is_admin)
        elif page == "Annual Report":
            _render_annual_report(settings, today)
        else:
            _render_configuration(settings, is_admin)
    except LedgerError as exc:
        st.error(str(exc))


if __name__ == "__main__":  # pragma: no cover
    main()
