"""Flat JSON file ledger store.

The whole ledger lives in one document::

    {"entries": [...], "settings": {"rate": "36.5", "updatedAt": "..."}}

Before each write the current file is copied into the backup directory, then
the new document is written to a temporary file and renamed over the old one.
"""

from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal
import json
import os
from pathlib import Path
import shutil
import tempfile

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.errors import LedgerPersistenceError
from src.domain.models import ExchangeRateSetting, LedgerEntry
from src.domain.services.normalization import parse_timestamp
from src.domain.services.serialization import (
    entry_from_record,
    entry_to_record,
    stored_rate,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.snapshot_publisher import SnapshotPublisher

BACKUP_PREFIX = "ledger_backup_"


class JsonLedgerRepository(SnapshotPublisher, LedgerRepositoryPort):
    """Ledger store backed by a single JSON document."""

    def __init__(
        self,
        path: Path | str,
        backup_dir: Path | str | None = None,
        max_backups: int | None = 50,
        logger=None,
    ) -> None:
        """Initialize the repository.

        Args:
            path: Ledger document path, created on first use.
            backup_dir: Backup directory. Defaults to ``backups`` next to
                the document.
            max_backups: Number of backups kept, None to keep all.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        super().__init__(logger or get_app_logger())
        self._path = Path(path)
        self._backup_dir = (
            Path(backup_dir) if backup_dir else self._path.parent / "backups"
        )
        self._max_backups = max_backups

    @property
    def path(self) -> Path:
        return self._path

    def list_entries(self) -> list[LedgerEntry]:
        document = self._read()
        entries = []
        for record in document.get("entries") or []:
            if not isinstance(record, dict):
                self._logger.warning(f"Skipping malformed record: {record!r}")
                continue
            entry = entry_from_record(record, self._logger)
            if entry is not None:
                entries.append(entry)
        return entries

    def save_entry(self, entry: LedgerEntry) -> None:
        document = self._read()
        records = [
            record
            for record in document.get("entries") or []
            if not (isinstance(record, dict) and record.get("id") == entry.id)
        ]
        records.append(entry_to_record(entry))
        document["entries"] = records
        self._write(document)
        self._publish()

    def delete_entry(self, entry_id: str) -> bool:
        document = self._read()
        records = document.get("entries") or []
        kept = [
            record
            for record in records
            if not (isinstance(record, dict) and record.get("id") == entry_id)
        ]
        if len(kept) == len(records):
            return False
        document["entries"] = kept
        self._write(document)
        self._publish()
        return True

    def replace_entries(self, entries: list[LedgerEntry]) -> None:
        document = self._read()
        document["entries"] = [entry_to_record(entry) for entry in entries]
        self._write(document)
        self._logger.info(f"Replaced ledger with {len(entries)} entries")
        self._publish()

    def get_exchange_rate(self) -> ExchangeRateSetting:
        settings = self._read().get("settings")
        if not isinstance(settings, dict):
            settings = {}
        return ExchangeRateSetting(
            rate=stored_rate(settings.get("rate"), self._logger),
            updated_at=parse_timestamp(settings.get("updatedAt")),
        )

    def set_exchange_rate(self, rate: Decimal) -> ExchangeRateSetting:
        setting = ExchangeRateSetting(
            rate=rate,
            updated_at=datetime.now(timezone.utc),
        )
        document = self._read()
        document["settings"] = {
            "rate": str(setting.rate),
            "updatedAt": setting.updated_at.isoformat(),
        }
        self._write(document)
        self._publish()
        return setting

    def _read(self) -> dict:
        if not self._path.exists():
            return _empty_document()
        with self._wrap_errors(f"read {self._path}"):
            with self._path.open(encoding="utf-8") as handle:
                document = json.load(handle)
        if not isinstance(document, dict):
            raise LedgerPersistenceError(
                f"Ledger file {self._path} does not hold a JSON object"
            )
        return document

    def _write(self, document: dict) -> None:
        with self._wrap_errors(f"write {self._path}"):
            self._path.parent.mkdir(parents=True, exist_ok=True)
            if self._path.exists():
                self._backup()
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(document, handle, indent=2, ensure_ascii=False)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise

    def _backup(self) -> Path:
        self._backup_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        backup_path = self._backup_dir / f"{BACKUP_PREFIX}{stamp}.json"
        shutil.copy2(self._path, backup_path)
        if self._max_backups is not None:
            backups = sorted(self._backup_dir.glob(f"{BACKUP_PREFIX}*.json"))
            for stale in backups[: max(len(backups) - self._max_backups, 0)]:
                stale.unlink(missing_ok=True)
        return backup_path

    @contextmanager
    def _wrap_errors(self, action: str):
        """Turn I/O, encoding and JSON errors into persistence errors."""
        try:
            yield
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            self._logger.error(f"Failed to {action}: {exc}")
            raise LedgerPersistenceError(f"Failed to {action}") from exc


def _empty_document() -> dict:
    return {"entries": [], "settings": {"rate": "0", "updatedAt": None}}


__all__ = ["JsonLedgerRepository"]
