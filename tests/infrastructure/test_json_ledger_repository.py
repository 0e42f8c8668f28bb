"""Tests for the JSON file ledger repository."""

from datetime import date, datetime, timezone
from decimal import Decimal
import json
from unittest.mock import MagicMock

import pytest

from src.domain.errors import LedgerPersistenceError
from src.domain.models import Account, EntryKind, LedgerEntry
from src.infrastructure.json_ledger_repository import (
    BACKUP_PREFIX,
    JsonLedgerRepository,
)
from src.infrastructure.snapshot_publisher import SnapshotPublisher


def _entry(entry_id: str) -> LedgerEntry:
    return LedgerEntry(
        id=entry_id,
        kind=EntryKind.ADJUSTMENT,
        description="Opening balance",
        amount=Decimal("250"),
        quantity=1,
        account=Account.CASH_USD,
        date=date(2024, 1, 1),
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def test_missing_file_reads_as_empty_ledger(tmp_path) -> None:
    repository = JsonLedgerRepository(tmp_path / "ledger.json")

    assert repository.list_entries() == []
    assert repository.get_exchange_rate().is_set is False


def test_save_writes_document_and_backs_up_previous(tmp_path) -> None:
    """Each write after the first keeps a copy of the previous file."""
    path = tmp_path / "data" / "ledger.json"
    repository = JsonLedgerRepository(path, logger=MagicMock())

    repository.save_entry(_entry("a"))
    repository.save_entry(_entry("b"))

    document = json.loads(path.read_text(encoding="utf-8"))
    assert [record["id"] for record in document["entries"]] == ["a", "b"]
    backups = list((path.parent / "backups").glob(f"{BACKUP_PREFIX}*.json"))
    assert len(backups) == 1
    assert json.loads(backups[0].read_text(encoding="utf-8"))["entries"][0][
        "id"
    ] == "a"


def test_backups_are_pruned(tmp_path) -> None:
    backup_dir = tmp_path / "bk"
    repository = JsonLedgerRepository(
        tmp_path / "ledger.json",
        backup_dir=backup_dir,
        max_backups=2,
        logger=MagicMock(),
    )

    for index in range(5):
        repository.save_entry(_entry(str(index)))

    assert len(list(backup_dir.glob(f"{BACKUP_PREFIX}*.json"))) == 2


def test_delete_entry_missing_id_leaves_file_untouched(tmp_path) -> None:
    path = tmp_path / "ledger.json"
    repository = JsonLedgerRepository(path, logger=MagicMock())
    repository.save_entry(_entry("a"))
    before = path.read_text(encoding="utf-8")

    assert repository.delete_entry("zzz") is False
    assert path.read_text(encoding="utf-8") == before
    assert repository.delete_entry("a") is True
    assert repository.list_entries() == []


def test_exchange_rate_is_stored_with_timestamp(tmp_path) -> None:
    repository = JsonLedgerRepository(tmp_path / "ledger.json")

    stored = repository.set_exchange_rate(Decimal("36.5"))

    assert repository.get_exchange_rate() == stored


def test_list_entries_skips_malformed_records(tmp_path) -> None:
    path = tmp_path / "ledger.json"
    path.write_text(
        json.dumps(
            {
                "entries": [
                    "junk",
                    {"id": "x", "kind": "income", "amount": "abc"},
                    {
                        "id": "ok",
                        "type": "income",
                        "description": "Sale",
                        "amount": 3,
                        "paymentMethod": "USDT",
                        "date": "2024-01-01",
                    },
                ]
            }
        ),
        encoding="utf-8",
    )
    logger = MagicMock()

    entries = JsonLedgerRepository(path, logger=logger).list_entries()

    assert [entry.id for entry in entries] == ["ok"]
    assert entries[0].account is Account.DIGITAL_USD
    assert logger.warning.call_count == 2


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_unreadable_file_raises_persistence_error(tmp_path, content) -> None:
    path = tmp_path / "ledger.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(LedgerPersistenceError):
        JsonLedgerRepository(path, logger=MagicMock()).list_entries()


def test_invalid_utf8_file_raises_persistence_error(tmp_path) -> None:
    path = tmp_path / "ledger.json"
    path.write_bytes(b'{"entries": [], "note": "\xff\xfe"}')

    with pytest.raises(LedgerPersistenceError):
        JsonLedgerRepository(path, logger=MagicMock()).list_entries()


@pytest.mark.parametrize("rate", ["NaN", "Infinity", "-2", "abc"])
def test_unusable_stored_rate_reads_as_unset(tmp_path, rate) -> None:
    path = tmp_path / "ledger.json"
    path.write_text(
        json.dumps({"entries": [], "settings": {"rate": rate}}),
        encoding="utf-8",
    )
    logger = MagicMock()

    setting = JsonLedgerRepository(path, logger=logger).get_exchange_rate()

    assert setting.is_set is False
    assert setting.rate == Decimal("0")
    logger.warning.assert_called_once()


def test_exchange_rate_write_notifies_subscribers(tmp_path) -> None:
    repository = JsonLedgerRepository(
        tmp_path / "ledger.json",
        logger=MagicMock(),
    )
    repository.save_entry(_entry("a"))
    snapshots = []
    repository.subscribe(snapshots.append)

    repository.set_exchange_rate(Decimal("36.5"))

    assert [len(snapshot) for snapshot in snapshots] == [1, 1]


def test_snapshot_publisher_needs_a_store() -> None:
    with pytest.raises(TypeError):
        SnapshotPublisher(logger=MagicMock())
