"""Mapping between ledger entries and plain records.

Records are the dictionaries stored by the persistence adapters and
exchanged in bulk export/import documents::

    {"entries": [{"id", "kind", "description", "amount", "quantity",
                  "account", "date", "createdAt"}, ...],
     "rate": "36.50"}

Amounts and rates are written as decimal strings so round-trips are exact.
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from logging import Logger

from src.domain.errors import (
    ImportBatchInvalid,
    LedgerValidationError,
)
from src.domain.models.ledger import LedgerEntry, LedgerSnapshot
from src.domain.services.validation import validate_entry
from src.utils.decimal_utils import coerce_decimal

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def entry_to_record(entry: LedgerEntry) -> dict:
    """Serialize an entry into a plain record."""
    return {
        "id": entry.id,
        "kind": entry.kind.value,
        "description": entry.description,
        "amount": str(entry.amount),
        "quantity": entry.quantity,
        "account": entry.account.value,
        "date": entry.date.isoformat(),
        "createdAt": entry.created_at.isoformat(),
    }


def entry_from_record(record: Mapping, logger: Logger) -> LedgerEntry | None:
    """Load a stored record without rejecting the whole snapshot.

    Stored records go through the same rules as submitted entries, so
    anything loaded here can be exported and imported back. Records that
    fail them are skipped with a warning. A missing or unreadable createdAt
    falls back to the epoch.

    Args:
        record: Stored record.
        logger: Logger used for warnings.

    Returns:
        LedgerEntry | None: Loaded entry, or None when skipped.
    """
    entry_id = str(record.get("id") or "").strip()
    if not entry_id:
        logger.warning("Skipping stored entry without id")
        return None
    try:
        return validate_entry(
            {**record, "id": entry_id},
            now=_EPOCH,
            keep_created_at=True,
        )
    except LedgerValidationError as exc:
        logger.warning(f"Skipping stored entry {entry_id!r}: {exc}")
        return None


def stored_rate(value, logger: Logger) -> Decimal:
    """Read a stored exchange rate, treating unusable values as unset.

    Returns:
        Decimal: Finite rate >= 0, or 0 when the stored value is unusable.
    """
    try:
        return _parse_document_rate(value)
    except ImportBatchInvalid:
        logger.warning(f"Ignoring unreadable exchange rate: {value!r}")
        return Decimal("0")


def snapshot_to_document(snapshot: LedgerSnapshot) -> dict:
    """Serialize a snapshot into the bulk export document."""
    return {
        "entries": [entry_to_record(entry) for entry in snapshot.entries],
        "rate": str(snapshot.rate),
    }


def snapshot_from_document(
    document,
    now: datetime | None = None,
) -> LedgerSnapshot:
    """Validate a bulk import document, all or nothing.

    Also accepts the export keys of the first version of the app,
    ``transactions`` and ``exchangeRateBSFtoUSD``.

    Args:
        document: Parsed JSON document.
        now: Creation instant for records without a readable createdAt.

    Returns:
        LedgerSnapshot: Validated entries and rate.

    Raises:
        ImportBatchInvalid: If the document or any of its entries is invalid.
    """
    if not isinstance(document, Mapping):
        raise ImportBatchInvalid("Import document must be a JSON object")
    records = document.get("entries", document.get("transactions"))
    if not isinstance(records, list):
        raise ImportBatchInvalid("Import document must contain an entries list")
    rate = _parse_document_rate(
        document.get("rate", document.get("exchangeRateBSFtoUSD"))
    )

    entries: list[LedgerEntry] = []
    seen_ids: set[str] = set()
    for index, record in enumerate(records):
        record_id = record.get("id") if isinstance(record, Mapping) else None
        if not isinstance(record, Mapping):
            raise ImportBatchInvalid(
                f"Entry #{index} is not an object",
                index=index,
            )
        try:
            entry = validate_entry(record, now=now, keep_created_at=True)
        except LedgerValidationError as exc:
            raise ImportBatchInvalid(
                f"Entry #{index} ({record_id!r}) is invalid: {exc}",
                cause=exc,
                index=index,
                entry_id=record_id,
            ) from exc
        if entry.id in seen_ids:
            raise ImportBatchInvalid(
                f"Entry #{index} repeats id {entry.id!r}",
                index=index,
                entry_id=entry.id,
            )
        seen_ids.add(entry.id)
        entries.append(entry)
    return LedgerSnapshot(entries=tuple(entries), rate=rate)


def _parse_document_rate(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, bool):
        raise ImportBatchInvalid(f"Invalid exchange rate: {value!r}")
    try:
        rate = coerce_decimal(value)
    except (InvalidOperation, ValueError):
        raise ImportBatchInvalid(f"Invalid exchange rate: {value!r}") from None
    if not rate.is_finite() or rate < 0:
        raise ImportBatchInvalid(f"Invalid exchange rate: {value!r}")
    return rate


__all__ = [
    "entry_from_record",
    "entry_to_record",
    "snapshot_from_document",
    "snapshot_to_document",
    "stored_rate",
]
