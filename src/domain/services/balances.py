"""Domain services folding ledger entries into balances."""

from collections.abc import Iterable, Mapping
from decimal import Decimal

from src.domain.constants import ACCOUNT_CURRENCIES
from src.domain.models import (
    Account,
    AccountBalance,
    BalanceSummary,
    Currency,
    EntryKind,
    EntryPartition,
    LedgerEntry,
)


def compute_balance_summary(
    entries: Iterable[LedgerEntry],
    account_currencies: Mapping[Account, Currency] = ACCOUNT_CURRENCIES,
) -> BalanceSummary:
    """Compute per-account balances and per-currency totals.

    Args:
        entries: Entries already narrowed to the reporting window.
        account_currencies: Account to currency lookup table.

    Returns:
        BalanceSummary: Every account of the table, with zero totals for
        unused accounts, and the total of every bound currency.
    """
    credits: dict[Account, Decimal] = {
        account: Decimal("0") for account in account_currencies
    }
    debits: dict[Account, Decimal] = dict(credits)
    for entry in entries:
        if entry.account not in credits:
            continue
        if entry.kind is EntryKind.EXPENSE:
            debits[entry.account] += entry.amount
        else:
            credits[entry.account] += entry.amount

    accounts = {
        account: AccountBalance(
            account=account,
            currency=currency,
            credit_total=credits[account],
            debit_total=debits[account],
        )
        for account, currency in account_currencies.items()
    }
    currency_totals: dict[Currency, Decimal] = {}
    for account_balance in accounts.values():
        currency = account_balance.currency
        currency_totals[currency] = (
            currency_totals.get(currency, Decimal("0"))
            + account_balance.balance
        )
    return BalanceSummary(accounts=accounts, currency_totals=currency_totals)


def partition_entries(entries: Iterable[LedgerEntry]) -> EntryPartition:
    """Split entries into income+adjustment and expense views."""
    credits: list[LedgerEntry] = []
    debits: list[LedgerEntry] = []
    for entry in entries:
        if entry.kind.is_credit:
            credits.append(entry)
        else:
            debits.append(entry)
    return EntryPartition(credits=credits, debits=debits)


__all__ = ["compute_balance_summary", "partition_entries"]
