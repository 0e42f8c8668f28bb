"""Use cases to create, update and delete ledger entries."""

from collections.abc import Mapping
from datetime import datetime

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.constants import ADJUSTMENT_DESCRIPTION_PREFIX
from src.domain.models import EntryKind, LedgerEntry
from src.domain.services.validation import validate_entry
from src.infrastructure.logging.logger import get_app_logger


class RecordEntryUseCase:
    """Validate a submitted entry and persist it."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing ledger storage.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        raw: Mapping,
        entry_id: str | None = None,
        now: datetime | None = None,
    ) -> LedgerEntry:
        """Create a new entry, or fully replace the one with entry_id.

        Args:
            raw: Raw form values.
            entry_id: Id of the entry being edited, None to create.
            now: Optional creation instant, mainly for tests.

        Returns:
            LedgerEntry: The stored entry.

        Raises:
            LedgerValidationError: If the submission is invalid.
            LedgerPersistenceError: If the store fails.
        """
        values = self._prepare(dict(raw))
        if entry_id:
            values["id"] = entry_id
        else:
            values.pop("id", None)
        existing = self._ledger_repository.list_entries() if entry_id else []
        entry = validate_entry(values, existing_entries=existing, now=now)
        self._ledger_repository.save_entry(entry)
        action = "Updated" if entry_id else "Created"
        self._logger.info(
            f"{action} {entry.kind.value} entry {entry.id} "
            f"on {entry.account.value}: {entry.amount}"
        )
        return entry

    def _prepare(self, values: dict) -> dict:
        return values


class RecordAdjustmentUseCase(RecordEntryUseCase):
    """Record a balance adjustment, which only ever adds to an account."""

    def _prepare(self, values: dict) -> dict:
        values["kind"] = EntryKind.ADJUSTMENT
        values["quantity"] = 1
        description = values.get("description")
        if description is None or (
            isinstance(description, str) and not description.strip()
        ):
            values["description"] = ADJUSTMENT_DESCRIPTION_PREFIX.strip()
        return values


class DeleteEntryUseCase:
    """Delete a ledger entry by id."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(self, entry_id: str) -> bool:
        """Delete the entry.

        Returns:
            bool: False when no entry had the id.
        """
        deleted = self._ledger_repository.delete_entry(entry_id)
        if deleted:
            self._logger.info(f"Deleted entry {entry_id}")
        else:
            self._logger.warning(f"No entry to delete with id {entry_id}")
        return deleted


__all__ = [
    "DeleteEntryUseCase",
    "RecordAdjustmentUseCase",
    "RecordEntryUseCase",
]
