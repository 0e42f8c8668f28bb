"""Streamlit ledger entry point."""

from collections.abc import Sequence
from datetime import date
import json

import altair as alt
import streamlit as st

from src.adapters.interface.streamlit.ledger_presenter import (
    PERIOD_LABELS,
    accounts_for_currency,
    balance_chart_data,
    build_selection,
    entries_table,
    entry_option_label,
    estimated_usd_label,
    format_currency,
)
from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.application.use_cases.clear_ledger import ClearLedgerUseCase
from src.application.use_cases.exchange_rate import SetExchangeRateUseCase
from src.application.use_cases.get_ledger_view import (
    GetLedgerViewUseCase,
    LedgerView,
    LedgerViewSelection,
)
from src.application.use_cases.record_entry import (
    DeleteEntryUseCase,
    RecordAdjustmentUseCase,
    RecordEntryUseCase,
)
from src.application.use_cases.transfer_ledger import (
    ExportLedgerUseCase,
    ImportLedgerUseCase,
)
from src.domain.constants import (
    ACCOUNT_LABELS,
    ADJUSTMENT_DESCRIPTION_PREFIX,
    KIND_LABELS,
)
from src.domain.errors import LedgerError
from src.domain.models import Account, Currency, EntryKind, LedgerEntry
from src.domain.services.date_window import WindowMode, today_utc
from src.infrastructure.container import build_ledger_repository, build_settings
from src.infrastructure.logging.logger import get_usage_logger


@st.cache_resource(show_spinner=False)
def _get_repository() -> LedgerRepositoryPort:
    """Cached ledger repository shared by Streamlit sessions."""
    return build_ledger_repository()


def _fetch_ledger_view(selection: LedgerViewSelection) -> LedgerView:
    """Recompute the ledger view from the current snapshot."""
    use_case = GetLedgerViewUseCase(ledger_repository=_get_repository())
    return use_case.execute(selection, today=today_utc())


def _render_period_picker() -> LedgerViewSelection:
    """Render the sidebar period filter and return the selection."""
    mode = st.sidebar.selectbox(
        "Period",
        options=list(PERIOD_LABELS),
        format_func=lambda item: PERIOD_LABELS[item],
    )
    start = end = None
    if mode is WindowMode.CUSTOM:
        today = today_utc()
        start = st.sidebar.date_input("From", value=today)
        end = st.sidebar.date_input("To", value=today)
    return build_selection(mode, start, end)


def _render_summary(view: LedgerView, local_label: str) -> None:
    """Render per-account balances and currency totals."""
    st.subheader("Balances")
    local_col, usd_col = st.columns(2)
    for column, currency in (
        (local_col, Currency.LOCAL),
        (usd_col, Currency.USD),
    ):
        for account in accounts_for_currency(currency):
            column.metric(
                ACCOUNT_LABELS[account],
                format_currency(
                    view.summary.balance_for(account),
                    currency,
                    local_label,
                ),
            )
        column.metric(
            f"Total {local_label if currency is Currency.LOCAL else 'USD'}",
            format_currency(
                view.summary.total_for(currency),
                currency,
                local_label,
            ),
        )


def _render_balance_chart(view: LedgerView) -> None:
    """Render a bar chart of account balances."""
    data = balance_chart_data(view.summary)
    chart = alt.Chart(alt.Data(values=data)).mark_bar(
        cornerRadiusEnd=4,
    ).encode(
        x=alt.X("balance:Q", title="Balance"),
        y=alt.Y("account:N", title=None, sort=None),
        color=alt.Color(
            "currency:N",
            scale=alt.Scale(range=["#1b9aaa", "#2e7d32"]),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[
            alt.Tooltip("account:N"),
            alt.Tooltip("balance:Q", format=",.2f"),
        ],
    )
    st.altair_chart(chart, width="stretch")


def _render_converter(view: LedgerView, local_label: str) -> None:
    """Render the local-to-USD estimate and the rate form."""
    st.subheader(f"{local_label} to USD (reference)")
    st.metric(
        f"Estimated USD for {format_currency(view.summary.local_total, Currency.LOCAL, local_label)}",
        estimated_usd_label(view),
    )
    with st.form("exchange-rate"):
        rate = st.number_input(
            f"Rate ({local_label} per 1 USD)",
            min_value=0.0,
            value=float(view.exchange_rate.rate),
            step=0.01,
            format="%.2f",
        )
        if st.form_submit_button("Update rate"):
            try:
                setting = SetExchangeRateUseCase(_get_repository()).execute(
                    str(rate)
                )
            except LedgerError as exc:
                st.error(str(exc))
            else:
                get_usage_logger().info(f"Exchange rate set to {setting.rate}")
                st.success("Exchange rate updated.")
                st.rerun()


def _entry_form_values(
    key: str,
    purpose: EntryKind | None,
    editing: LedgerEntry | None,
) -> dict | None:
    """Render the entry form; return the raw values when submitted."""
    is_adjustment = purpose is EntryKind.ADJUSTMENT
    with st.form(key, clear_on_submit=editing is None):
        description = st.text_input(
            "Description",
            value=editing.description if editing else (
                ADJUSTMENT_DESCRIPTION_PREFIX if is_adjustment else ""
            ),
        )
        amount = st.text_input(
            "Amount (positive)" if is_adjustment else "Total amount",
            value=str(editing.amount) if editing else "",
        )
        values = {"description": description, "amount": amount}
        if not is_adjustment:
            kinds = [EntryKind.INCOME, EntryKind.EXPENSE]
            values["kind"] = st.selectbox(
                "Kind",
                options=kinds,
                index=kinds.index(editing.kind) if editing else 0,
                format_func=lambda item: KIND_LABELS[item],
            )
            values["quantity"] = st.text_input(
                "Quantity",
                value=str(editing.quantity) if editing else "1",
            )
        accounts = list(Account)
        values["account"] = st.selectbox(
            "Account to adjust" if is_adjustment else "Payment method",
            options=accounts,
            index=accounts.index(editing.account) if editing else 0,
            format_func=lambda item: ACCOUNT_LABELS[item],
        )
        values["date"] = st.date_input(
            "Date",
            value=editing.date if editing else today_utc(),
        )
        label = "Save" if editing else (
            "Add adjustment" if is_adjustment else "Add entry"
        )
        if st.form_submit_button(label):
            return values
    return None


def _submit_entry(
    values: dict,
    adjustment: bool,
    entry_id: str | None = None,
) -> None:
    use_case_cls = RecordAdjustmentUseCase if adjustment else RecordEntryUseCase
    try:
        entry = use_case_cls(_get_repository()).execute(values, entry_id=entry_id)
    except LedgerError as exc:
        st.error(str(exc))
        return
    get_usage_logger().info(
        f"{'Updated' if entry_id else 'Recorded'} entry {entry.id}"
    )
    st.success("Entry saved.")
    st.rerun()


def _render_entry_list(
    title: str,
    entries: Sequence[LedgerEntry],
    local_label: str,
    empty_message: str,
) -> None:
    st.subheader(title)
    if not entries:
        st.info(empty_message)
        return
    st.dataframe(
        entries_table(entries, local_label),
        width="stretch",
        hide_index=True,
    )


def _render_entry_actions(entries: Sequence[LedgerEntry], local_label: str) -> None:
    """Render edit and delete controls for the filtered entries."""
    if not entries:
        return
    st.subheader("Edit or delete")
    by_id = {entry.id: entry for entry in entries}
    selected_id = st.selectbox(
        "Entry",
        options=list(by_id),
        format_func=lambda entry_id: entry_option_label(
            by_id[entry_id],
            local_label,
        ),
    )
    selected = by_id[selected_id]
    adjustment = selected.kind is EntryKind.ADJUSTMENT
    values = _entry_form_values(
        f"edit-{selected.id}",
        EntryKind.ADJUSTMENT if adjustment else None,
        selected,
    )
    if values is not None:
        _submit_entry(values, adjustment, entry_id=selected.id)
    confirm = st.checkbox("Confirm deletion", key=f"confirm-{selected.id}")
    if st.button("Delete entry", disabled=not confirm):
        try:
            deleted = DeleteEntryUseCase(_get_repository()).execute(selected.id)
        except LedgerError as exc:
            st.error(str(exc))
            return
        if deleted:
            get_usage_logger().info(f"Deleted entry {selected.id}")
            st.success("Entry deleted.")
        else:
            st.warning("The entry no longer exists.")
        st.rerun()


def _render_data_tools() -> None:
    """Render export, import and clear controls."""
    st.subheader("Data")
    repository = _get_repository()
    document = ExportLedgerUseCase(repository).execute()
    st.download_button(
        "Download JSON backup",
        data=json.dumps(document, indent=2, ensure_ascii=False),
        file_name=f"ledger_{date.today():%Y%m%d}.json",
        mime="application/json",
    )
    uploaded = st.file_uploader("Restore from JSON", type=["json"])
    if uploaded is not None and st.button("Replace ledger with file"):
        try:
            result = ImportLedgerUseCase(repository).execute(
                json.loads(uploaded.getvalue().decode("utf-8"))
            )
        except (LedgerError, ValueError) as exc:
            st.error(f"Import rejected: {exc}")
        else:
            get_usage_logger().info(
                f"Imported {result.imported_count} entries from upload"
            )
            st.success(f"Imported {result.imported_count} entries.")
            st.rerun()
    confirm = st.checkbox("I understand this deletes every entry")
    if st.button("Clear all data", disabled=not confirm):
        try:
            removed = ClearLedgerUseCase(repository).execute()
        except LedgerError as exc:
            st.error(str(exc))
        else:
            get_usage_logger().warning(f"Cleared {removed} entries")
            st.success("All data deleted.")
            st.rerun()


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Cash Ledger", layout="wide")
    st.title("Cash Ledger")
    local_label = build_settings().local_currency_label

    selection = _render_period_picker()
    try:
        view = _fetch_ledger_view(selection)
    except LedgerError as exc:
        st.error(f"Could not load the ledger: {exc}")
        return

    _render_summary(view, local_label)
    _render_balance_chart(view)
    _render_converter(view, local_label)

    add_col, adjust_col = st.columns(2)
    with add_col:
        st.subheader("New entry")
        values = _entry_form_values("add-entry", None, None)
        if values is not None:
            _submit_entry(values, adjustment=False)
    with adjust_col:
        st.subheader("Balance adjustment")
        values = _entry_form_values("add-adjustment", EntryKind.ADJUSTMENT, None)
        if values is not None:
            _submit_entry(values, adjustment=True)

    _render_entry_list(
        "Income and adjustments",
        view.partition.credits,
        local_label,
        "No income in this period.",
    )
    _render_entry_list(
        "Expenses",
        view.partition.debits,
        local_label,
        "No expenses in this period.",
    )
    _render_entry_actions(view.entries, local_label)
    _render_data_tools()


if __name__ == "__main__":  # pragma: no cover
    main()
