"""Ledger presentation logic for the Streamlit UI.

Pure transformations from a ``LedgerView`` produced by
``GetLedgerViewUseCase`` to table rows, chart data and display strings.
The UI module is responsible for loading the view and rendering.
"""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from src.application.use_cases.get_ledger_view import (
    LedgerView,
    LedgerViewSelection,
)
from src.domain.constants import ACCOUNT_CURRENCIES, ACCOUNT_LABELS, KIND_LABELS
from src.domain.models import (
    Account,
    BalanceSummary,
    Currency,
    EntryKind,
    LedgerEntry,
)
from src.domain.services.date_window import WindowMode

PERIOD_LABELS: dict[WindowMode, str] = {
    WindowMode.ALL: "All dates",
    WindowMode.TODAY: "Today",
    WindowMode.THIS_WEEK: "This week",
    WindowMode.THIS_MONTH: "This month",
    WindowMode.CUSTOM: "Custom range",
}


def format_currency(
    value: Decimal,
    currency: Currency,
    local_label: str = "Bs.",
) -> str:
    """Format an amount with its currency symbol."""
    symbol = local_label if currency is Currency.LOCAL else "$"
    return f"{symbol} {value:,.2f}"


def format_signed_amount(entry: LedgerEntry, local_label: str = "Bs.") -> str:
    """Format an entry amount with the sign implied by its kind."""
    sign = "-" if entry.kind is EntryKind.EXPENSE else "+"
    currency = ACCOUNT_CURRENCIES[entry.account]
    return f"{sign}{format_currency(entry.amount, currency, local_label)}"


def build_selection(
    mode: WindowMode,
    start: date | None = None,
    end: date | None = None,
) -> LedgerViewSelection:
    """Build the selection from sidebar inputs.

    Custom bounds are only kept for the custom mode.
    """
    if mode is not WindowMode.CUSTOM:
        return LedgerViewSelection(mode=mode)
    return LedgerViewSelection(mode=mode, start=start, end=end)


def entries_table(
    entries: Sequence[LedgerEntry],
    local_label: str = "Bs.",
) -> list[dict[str, str | int]]:
    """Return table rows for a list of entries, in the given order."""
    return [
        {
            "Date": entry.date.isoformat(),
            "Kind": KIND_LABELS[entry.kind],
            "Description": entry.description,
            "Quantity": entry.quantity,
            "Account": ACCOUNT_LABELS[entry.account],
            "Amount": format_signed_amount(entry, local_label),
            "ID": entry.id,
        }
        for entry in entries
    ]


def balance_chart_data(summary: BalanceSummary) -> list[dict[str, str | float]]:
    """Return Altair-ready rows with one bar per account."""
    return [
        {
            "account": ACCOUNT_LABELS[account],
            "currency": balance.currency.value,
            "balance": float(balance.balance),
        }
        for account, balance in summary.accounts.items()
    ]


def estimated_usd_label(view: LedgerView) -> str:
    """Return the USD estimate, or a hint when the rate is unset."""
    if view.estimated_usd is None:
        return "Unavailable: set the exchange rate"
    return format_currency(view.estimated_usd, Currency.USD)


def entry_option_label(entry: LedgerEntry, local_label: str = "Bs.") -> str:
    """Return the label of an entry in edit/delete pickers."""
    day = entry.date.isoformat()
    return (
        f"{day} | {entry.description} | "
        f"{format_signed_amount(entry, local_label)}"
    )


def accounts_for_currency(currency: Currency) -> list[Account]:
    return [
        account
        for account, bound in ACCOUNT_CURRENCIES.items()
        if bound is currency
    ]


__all__ = [
    "PERIOD_LABELS",
    "accounts_for_currency",
    "balance_chart_data",
    "build_selection",
    "entries_table",
    "entry_option_label",
    "estimated_usd_label",
    "format_currency",
    "format_signed_amount",
]
