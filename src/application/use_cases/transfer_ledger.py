"""Use cases to export and import whole-ledger snapshots."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.models import LedgerSnapshot
from src.domain.services.serialization import (
    snapshot_from_document,
    snapshot_to_document,
)
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class ImportLedgerResult:
    """Result of an import run.

    Attributes:
        imported_count: Number of entries now stored.
        replaced_count: Number of entries stored before the import.
        rate: Exchange rate stored by the import.
    """

    imported_count: int
    replaced_count: int
    rate: Decimal


class ExportLedgerUseCase:
    """Build the bulk export document for the current ledger."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(self) -> dict:
        """Return ``{"entries": [...], "rate": "..."}`` for the ledger."""
        entries = sorted(
            self._ledger_repository.list_entries(),
            key=lambda entry: entry.id,
        )
        setting = self._ledger_repository.get_exchange_rate()
        document = snapshot_to_document(
            LedgerSnapshot(entries=tuple(entries), rate=setting.rate)
        )
        self._logger.info(f"Exported {len(entries)} entries")
        return document


class ImportLedgerUseCase:
    """Replace the ledger with a validated snapshot, all or nothing."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        document,
        now: datetime | None = None,
    ) -> ImportLedgerResult:
        """Validate every entry, then replace entries and rate.

        Args:
            document: Parsed bulk export document.
            now: Creation instant for entries without a readable createdAt.

        Returns:
            ImportLedgerResult: Counts and stored rate.

        Raises:
            ImportBatchInvalid: If any entry fails validation. Nothing is
                written in that case.
        """
        snapshot = snapshot_from_document(document, now=now)
        previous_count = len(self._ledger_repository.list_entries())
        self._ledger_repository.set_exchange_rate(snapshot.rate)
        self._ledger_repository.replace_entries(list(snapshot.entries))
        self._logger.info(
            f"Imported {len(snapshot.entries)} entries "
            f"(replaced {previous_count}), rate={snapshot.rate}"
        )
        return ImportLedgerResult(
            imported_count=len(snapshot.entries),
            replaced_count=previous_count,
            rate=snapshot.rate,
        )


__all__ = [
    "ExportLedgerUseCase",
    "ImportLedgerResult",
    "ImportLedgerUseCase",
]
