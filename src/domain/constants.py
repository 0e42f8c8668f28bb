"""Domain constants for the ledger."""

from src.domain.models.ledger import Account, Currency, EntryKind

ACCOUNT_CURRENCIES: dict[Account, Currency] = {
    Account.MOBILE_PAYMENT_LOCAL: Currency.LOCAL,
    Account.CASH_LOCAL: Currency.LOCAL,
    Account.CASH_USD: Currency.USD,
    Account.DIGITAL_USD: Currency.USD,
}

ACCOUNT_LABELS: dict[Account, str] = {
    Account.MOBILE_PAYMENT_LOCAL: "Mobile payment (local)",
    Account.CASH_LOCAL: "Cash (local)",
    Account.CASH_USD: "Cash (USD)",
    Account.DIGITAL_USD: "USDT (digital)",
}

# Payment method codes used by the first version of the app.
LEGACY_ACCOUNT_ALIASES: dict[str, Account] = {
    "PAGO_MOVIL_BS": Account.MOBILE_PAYMENT_LOCAL,
    "EFECTIVO_BS": Account.CASH_LOCAL,
    "EFECTIVO_USD": Account.CASH_USD,
    "USDT": Account.DIGITAL_USD,
}

KIND_LABELS: dict[EntryKind, str] = {
    EntryKind.INCOME: "Income",
    EntryKind.EXPENSE: "Expense",
    EntryKind.ADJUSTMENT: "Adjustment",
}

ADJUSTMENT_DESCRIPTION_PREFIX = "Balance adjustment: "


__all__ = [
    "ACCOUNT_CURRENCIES",
    "ACCOUNT_LABELS",
    "ADJUSTMENT_DESCRIPTION_PREFIX",
    "KIND_LABELS",
    "LEGACY_ACCOUNT_ALIASES",
]
