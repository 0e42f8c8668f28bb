"""Domain models package."""

from .balances import AccountBalance, BalanceSummary, EntryPartition
from .ledger import (
    Account,
    Currency,
    EntryKind,
    ExchangeRateSetting,
    LedgerEntry,
    LedgerSnapshot,
)

__all__ = [
    "Account",
    "AccountBalance",
    "BalanceSummary",
    "Currency",
    "EntryKind",
    "EntryPartition",
    "ExchangeRateSetting",
    "LedgerEntry",
    "LedgerSnapshot",
]
