"""Domain models for aggregated balances."""

from dataclasses import dataclass, field
from decimal import Decimal

from .ledger import Account, Currency, LedgerEntry


@dataclass(frozen=True)
class AccountBalance:
    """Credit and debit totals for a single account.

    Attributes:
        account: Account the totals belong to.
        currency: Currency the account is bound to.
        credit_total: Sum of income and adjustment amounts.
        debit_total: Sum of expense amounts.
    """

    account: Account
    currency: Currency
    credit_total: Decimal = Decimal("0")
    debit_total: Decimal = Decimal("0")

    @property
    def balance(self) -> Decimal:
        """Return credit_total minus debit_total."""
        return self.credit_total - self.debit_total


@dataclass(frozen=True)
class BalanceSummary:
    """Per-account balances and per-currency totals."""

    accounts: dict[Account, AccountBalance] = field(default_factory=dict)
    currency_totals: dict[Currency, Decimal] = field(default_factory=dict)

    def balance_for(self, account: Account) -> Decimal:
        """Return the balance of one account, zero when absent."""
        account_balance = self.accounts.get(account)
        if account_balance is None:
            return Decimal("0")
        return account_balance.balance

    def total_for(self, currency: Currency) -> Decimal:
        """Return the total of one currency, zero when absent."""
        return self.currency_totals.get(currency, Decimal("0"))

    @property
    def local_total(self) -> Decimal:
        return self.total_for(Currency.LOCAL)

    @property
    def usd_total(self) -> Decimal:
        return self.total_for(Currency.USD)


@dataclass(frozen=True)
class EntryPartition:
    """Filtered entries split for display."""

    credits: list[LedgerEntry]
    debits: list[LedgerEntry]


__all__ = ["AccountBalance", "BalanceSummary", "EntryPartition"]
