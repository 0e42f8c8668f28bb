"""Domain validation for ledger entries."""

from collections.abc import Callable, Iterable, Mapping
from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from src.domain.errors import InvalidDescription, InvalidExchangeRate
from src.domain.models.ledger import EntryKind, LedgerEntry
from src.domain.services.normalization import (
    normalize_account,
    normalize_kind,
    parse_amount,
    parse_entry_date,
    parse_quantity,
    parse_timestamp,
)


def _first_present(raw: Mapping, *keys: str):
    for key in keys:
        if key in raw:
            return raw[key]
    return None


def validate_entry(
    raw: Mapping,
    *,
    existing_entries: Iterable[LedgerEntry] = (),
    now: datetime | None = None,
    id_factory: Callable[[], str] | None = None,
    keep_created_at: bool = False,
) -> LedgerEntry:
    """Validate raw field values and build a ledger entry.

    Args:
        raw: Raw values keyed by kind, description, amount, quantity,
            account, date and optionally id and createdAt. The keys used by
            the first version of the app (type, paymentMethod) are accepted.
        existing_entries: Current snapshot, used to carry over created_at
            when updating an existing id.
        now: Creation instant for new entries. Defaults to the current time.
        id_factory: Generator for new ids. Defaults to uuid4 text.
        keep_created_at: Prefer a readable createdAt from raw over the
            snapshot value. Used when importing snapshots.

    Returns:
        LedgerEntry: Validated, normalized entry.

    Raises:
        LedgerValidationError: The first failing field's error.
    """
    kind = normalize_kind(_first_present(raw, "kind", "type"))

    description = raw.get("description")
    if not isinstance(description, str) or not description.strip():
        raise InvalidDescription("Description must not be empty")

    amount = parse_amount(raw.get("amount"))
    if kind is EntryKind.ADJUSTMENT:
        quantity = 1
    else:
        quantity = parse_quantity(raw.get("quantity"))

    account = normalize_account(_first_present(raw, "account", "paymentMethod"))
    entry_date = parse_entry_date(raw.get("date"))

    current = now or datetime.now(timezone.utc)
    raw_id = raw.get("id")
    entry_id = str(raw_id).strip() if raw_id is not None else ""
    if entry_id:
        created_at = _lookup_created_at(entry_id, existing_entries) or current
    else:
        entry_id = (id_factory or _new_id)()
        created_at = current
    if keep_created_at:
        created_at = (
            parse_timestamp(_first_present(raw, "createdAt", "created_at"))
            or created_at
        )

    return LedgerEntry(
        id=entry_id,
        kind=kind,
        description=description.strip(),
        amount=amount,
        quantity=quantity,
        account=account,
        date=entry_date,
        created_at=created_at,
    )


def validate_exchange_rate(value) -> Decimal:
    """Validate a user-supplied exchange rate.

    Raises:
        InvalidExchangeRate: If the rate is not a finite number above zero.
    """
    try:
        return parse_amount(value)
    except ValueError as exc:
        raise InvalidExchangeRate(
            f"Exchange rate must be a positive number, got {value!r}"
        ) from exc


def _lookup_created_at(
    entry_id: str,
    existing_entries: Iterable[LedgerEntry],
) -> datetime | None:
    for entry in existing_entries:
        if entry.id == entry_id:
            return entry.created_at
    return None


def _new_id() -> str:
    return str(uuid4())


__all__ = ["validate_entry", "validate_exchange_rate"]
