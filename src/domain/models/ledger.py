"""Domain models for ledger entries and settings."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


class EntryKind(str, Enum):
    """Kind of ledger movement."""

    INCOME = "income"
    EXPENSE = "expense"
    ADJUSTMENT = "adjustment"

    @property
    def is_credit(self) -> bool:
        """Return True when the entry adds to the account balance."""
        return self is not EntryKind.EXPENSE


class Account(str, Enum):
    """Payment instruments tracked by the ledger."""

    MOBILE_PAYMENT_LOCAL = "mobile_payment_local"
    CASH_LOCAL = "cash_local"
    CASH_USD = "cash_usd"
    DIGITAL_USD = "digital_usd"


class Currency(str, Enum):
    """Currencies the accounts are denominated in."""

    LOCAL = "LOCAL"
    USD = "USD"


@dataclass(frozen=True)
class LedgerEntry:
    """Validated ledger movement.

    Attributes:
        id: Opaque identifier, stable across updates.
        kind: Income, expense or adjustment.
        description: Trimmed, non-empty description.
        amount: Strictly positive magnitude; the sign comes from kind.
        quantity: Units sold or purchased, always 1 for adjustments.
        account: Payment instrument the movement belongs to.
        date: Calendar day of the movement.
        created_at: Creation instant in UTC, preserved across updates.
    """

    id: str
    kind: EntryKind
    description: str
    amount: Decimal
    quantity: int
    account: Account
    date: date
    created_at: datetime


@dataclass(frozen=True)
class ExchangeRateSetting:
    """Single exchange-rate setting, local units per 1 USD."""

    rate: Decimal = Decimal("0")
    updated_at: datetime | None = None

    @property
    def is_set(self) -> bool:
        """Return True when the rate can be used for conversions."""
        return self.rate > 0


@dataclass(frozen=True)
class LedgerSnapshot:
    """Point-in-time copy of the ledger, as exported or imported."""

    entries: tuple[LedgerEntry, ...]
    rate: Decimal = Decimal("0")


__all__ = [
    "Account",
    "Currency",
    "EntryKind",
    "ExchangeRateSetting",
    "LedgerEntry",
    "LedgerSnapshot",
]
