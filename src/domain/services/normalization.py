"""Domain normalization helpers for raw ledger values."""

import re
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation

from src.domain.constants import LEGACY_ACCOUNT_ALIASES
from src.domain.errors import (
    InvalidAccount,
    InvalidAmount,
    InvalidDate,
    InvalidKind,
    InvalidQuantity,
)
from src.domain.models.ledger import Account, EntryKind

_LOOSE_DATE = re.compile(r"^(\d{4})[-/](\d{1,2})[-/](\d{1,2})$")


def normalize_kind(value) -> EntryKind:
    """Normalize a raw kind value.

    Args:
        value: EntryKind, or its value or name in any case.

    Returns:
        EntryKind: Matching kind.

    Raises:
        InvalidKind: If the value names no kind.
    """
    if isinstance(value, EntryKind):
        return value
    if isinstance(value, str):
        cleaned = value.strip().lower()
        for kind in EntryKind:
            if cleaned in (kind.value, kind.name.lower()):
                return kind
    raise InvalidKind(f"Unknown entry kind: {value!r}")


def normalize_account(value) -> Account:
    """Normalize a raw account value.

    Accepts the enum, its wire value, its name or a legacy payment method
    code such as PAGO_MOVIL_BS.

    Raises:
        InvalidAccount: If the value names no account.
    """
    if isinstance(value, Account):
        return value
    if isinstance(value, str):
        cleaned = value.strip()
        legacy = LEGACY_ACCOUNT_ALIASES.get(cleaned.upper())
        if legacy is not None:
            return legacy
        lowered = cleaned.lower()
        for account in Account:
            if lowered in (account.value, account.name.lower()):
                return account
    raise InvalidAccount(f"Unknown account: {value!r}")


def parse_amount(value) -> Decimal:
    """Parse a strictly positive, finite amount.

    Args:
        value: Decimal, int, float or numeric string.

    Returns:
        Decimal: Parsed amount.

    Raises:
        InvalidAmount: If the value is not a finite number above zero.
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmount(f"Amount must be a number, got {value!r}")
    if isinstance(value, str):
        value = value.strip()
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidAmount(f"Amount must be a number, got {value!r}") from None
    if not amount.is_finite():
        raise InvalidAmount(f"Amount must be finite, got {value!r}")
    if amount <= 0:
        raise InvalidAmount(f"Amount must be greater than zero, got {amount}")
    return amount


def parse_quantity(value) -> int:
    """Parse a positive integer quantity.

    An absent value (None or an empty string) defaults to 1. Any explicit
    value must be a positive integer.

    Raises:
        InvalidQuantity: If the value is explicit and not a positive integer.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return 1
    if isinstance(value, bool):
        raise InvalidQuantity(f"Quantity must be an integer, got {value!r}")
    if isinstance(value, int):
        quantity = value
    else:
        try:
            number = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise InvalidQuantity(
                f"Quantity must be an integer, got {value!r}"
            ) from None
        if not number.is_finite() or number != number.to_integral_value():
            raise InvalidQuantity(f"Quantity must be an integer, got {value!r}")
        quantity = int(number)
    if quantity <= 0:
        raise InvalidQuantity(f"Quantity must be positive, got {quantity}")
    return quantity


def parse_entry_date(value) -> date:
    """Parse a calendar day at UTC granularity.

    Args:
        value: date, datetime or text such as 2024-01-05, 2024-1-5,
            2024/01/05 or an ISO-8601 timestamp.

    Returns:
        date: Normalized calendar day.

    Raises:
        InvalidDate: If no calendar day can be read from the value.
    """
    if isinstance(value, datetime):
        return _utc_day(value)
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidDate(f"Invalid date: {value!r}")
    cleaned = value.strip()
    match = _LOOSE_DATE.match(cleaned)
    if match:
        year, month, day = (int(part) for part in match.groups())
        try:
            return date(year, month, day)
        except ValueError:
            raise InvalidDate(f"Invalid date: {value!r}") from None
    try:
        return _utc_day(datetime.fromisoformat(_iso_text(cleaned)))
    except ValueError:
        raise InvalidDate(f"Invalid date: {value!r}") from None


def parse_timestamp(value) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Returns:
        datetime | None: Parsed instant, or None when unreadable.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(_iso_text(value.strip()))
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _utc_day(value: datetime) -> date:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date()


def _iso_text(value: str) -> str:
    if value.endswith(("Z", "z")):
        return value[:-1] + "+00:00"
    return value


__all__ = [
    "normalize_account",
    "normalize_kind",
    "parse_amount",
    "parse_entry_date",
    "parse_quantity",
    "parse_timestamp",
]
