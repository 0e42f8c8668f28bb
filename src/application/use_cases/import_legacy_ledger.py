"""Use case to import the flat export of the earlier bookkeeping tool.

Legacy records look like::

    {"id": "...", "date": "2024-01-10", "type": "venta",
     "description": "...", "quantity": 2, "unitPrice": 5,
     "income": 10, "expense": 0,
     "payment": {"banco": 0, "efectivo": 10, "usd": 0, "usdt": 0}}

Each payment bucket maps to one account. Types are Spanish labels; unknown
types are classified from the income and expense columns.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.errors import ImportBatchInvalid, LedgerValidationError
from src.domain.models import Account, EntryKind, LedgerEntry
from src.domain.services.validation import validate_entry
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal

LEGACY_TYPE_KINDS: dict[str, EntryKind] = {
    "venta": EntryKind.INCOME,
    "ingreso": EntryKind.INCOME,
    "gasto": EntryKind.EXPENSE,
    "pago": EntryKind.EXPENSE,
    "retiro": EntryKind.EXPENSE,
    "ajuste": EntryKind.ADJUSTMENT,
}

# Priority order used to pick the account of a movement.
PAYMENT_BUCKETS: tuple[tuple[str, Account], ...] = (
    ("banco", Account.MOBILE_PAYMENT_LOCAL),
    ("efectivo", Account.CASH_LOCAL),
    ("usd", Account.CASH_USD),
    ("usdt", Account.DIGITAL_USD),
)


@dataclass(frozen=True)
class LegacyImportResult:
    """Result of a legacy import run.

    Attributes:
        imported_count: Entries produced from the legacy records.
        skipped_count: Records without any amount, ignored.
        stored_count: Entries stored after the import.
    """

    imported_count: int
    skipped_count: int
    stored_count: int


def _amount(value) -> Decimal:
    if isinstance(value, bool):
        return Decimal("0")
    try:
        amount = coerce_decimal(value)
    except (InvalidOperation, ValueError):
        return Decimal("0")
    return amount if amount.is_finite() else Decimal("0")


def _classify(record: Mapping) -> EntryKind:
    raw_type = str(record.get("type") or "").strip().lower()
    kind = LEGACY_TYPE_KINDS.get(raw_type)
    if kind is not None:
        return kind
    if _amount(record.get("income")) > 0:
        return EntryKind.INCOME
    if _amount(record.get("expense")) > 0:
        return EntryKind.EXPENSE
    return EntryKind.ADJUSTMENT


def map_legacy_record(record: Mapping) -> list[dict]:
    """Map one legacy record to raw entry values.

    Adjustments spread over several payment buckets become one entry per
    bucket, with the bucket name appended to the id, so that no entry spans
    two currencies.

    Returns:
        list[dict]: Raw values ready for validation, empty when the record
        carries no amount.
    """
    payment = record.get("payment") or {}
    buckets = [
        (key, account, _amount(payment.get(key)))
        for key, account in PAYMENT_BUCKETS
    ]
    funded = [bucket for bucket in buckets if bucket[2] > 0]
    kind = _classify(record)
    base = {
        "kind": kind,
        "description": record.get("description"),
        "quantity": record.get("quantity") or 1,
        "date": record.get("date"),
    }
    record_id = str(record.get("id") or "").strip()

    if kind is EntryKind.ADJUSTMENT:
        return [
            {
                **base,
                "id": _bucket_id(record_id, key, len(funded)),
                "account": account,
                "amount": amount,
            }
            for key, account, amount in funded
        ]

    account = funded[0][1] if funded else Account.CASH_LOCAL
    amount = funded[0][2] if funded else Decimal("0")
    column = "income" if kind is EntryKind.INCOME else "expense"
    if _amount(record.get(column)) > 0:
        amount = _amount(record.get(column))
    if amount <= 0:
        return []
    return [{**base, "id": record_id or None, "account": account, "amount": amount}]


def _bucket_id(record_id: str, key: str, funded_count: int) -> str | None:
    if not record_id:
        return None
    if funded_count > 1:
        return f"{record_id}-{key}"
    return record_id


class ImportLegacyLedgerUseCase:
    """Validate and store every entry mapped from a legacy export."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        records,
        replace: bool = False,
        now: datetime | None = None,
    ) -> LegacyImportResult:
        """Import legacy records, all or nothing.

        Args:
            records: Parsed legacy JSON list.
            replace: Drop the stored entries before importing.
            now: Creation instant of the imported entries.

        Returns:
            LegacyImportResult: Import counts.

        Raises:
            ImportBatchInvalid: If the list or any mapped entry is invalid.
        """
        if not isinstance(records, list):
            raise ImportBatchInvalid("Legacy export must be a JSON list")

        imported: list[LedgerEntry] = []
        skipped = 0
        for index, record in enumerate(records):
            if not isinstance(record, Mapping):
                raise ImportBatchInvalid(
                    f"Legacy record #{index} is not an object",
                    index=index,
                )
            raw_entries = map_legacy_record(record)
            if not raw_entries:
                skipped += 1
                self._logger.warning(
                    f"Skipping legacy record {record.get('id')!r}: no amount"
                )
                continue
            for raw in raw_entries:
                try:
                    imported.append(validate_entry(raw, now=now))
                except LedgerValidationError as exc:
                    raise ImportBatchInvalid(
                        f"Legacy record #{index} ({record.get('id')!r}) "
                        f"is invalid: {exc}",
                        cause=exc,
                        index=index,
                        entry_id=record.get("id"),
                    ) from exc

        imported_ids = {entry.id for entry in imported}
        if len(imported_ids) != len(imported):
            raise ImportBatchInvalid("Legacy export contains duplicate ids")
        kept = [] if replace else [
            entry
            for entry in self._ledger_repository.list_entries()
            if entry.id not in imported_ids
        ]
        stored = kept + imported
        self._ledger_repository.replace_entries(stored)
        self._logger.info(
            f"Imported {len(imported)} legacy entries, skipped {skipped}, "
            f"replace={replace}"
        )
        return LegacyImportResult(
            imported_count=len(imported),
            skipped_count=skipped,
            stored_count=len(stored),
        )


__all__ = [
    "ImportLegacyLedgerUseCase",
    "LegacyImportResult",
    "map_legacy_record",
]
