"""Domain package for ledger rules and core models."""

from .constants import ACCOUNT_CURRENCIES, ACCOUNT_LABELS, KIND_LABELS
from .models import (
    Account,
    AccountBalance,
    BalanceSummary,
    Currency,
    EntryKind,
    EntryPartition,
    ExchangeRateSetting,
    LedgerEntry,
    LedgerSnapshot,
)
from .services import (
    DateWindow,
    WindowMode,
    compute_balance_summary,
    estimate_usd,
    filter_entries,
    partition_entries,
    resolve_window,
    sort_entries,
    validate_entry,
)

__all__ = [
    "ACCOUNT_CURRENCIES",
    "ACCOUNT_LABELS",
    "KIND_LABELS",
    "Account",
    "AccountBalance",
    "BalanceSummary",
    "Currency",
    "DateWindow",
    "EntryKind",
    "EntryPartition",
    "ExchangeRateSetting",
    "LedgerEntry",
    "LedgerSnapshot",
    "WindowMode",
    "compute_balance_summary",
    "estimate_usd",
    "filter_entries",
    "partition_entries",
    "resolve_window",
    "sort_entries",
    "validate_entry",
]
