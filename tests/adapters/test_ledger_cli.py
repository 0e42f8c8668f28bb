"""Tests for the ledger_cli adapter."""

from datetime import date, datetime, timezone
from decimal import Decimal
import json
from unittest.mock import MagicMock

import pytest

from src.adapters import ledger_cli
from src.domain.models import Account, EntryKind, LedgerEntry
from src.infrastructure.json_ledger_repository import JsonLedgerRepository


@pytest.fixture
def repository(tmp_path, monkeypatch) -> JsonLedgerRepository:
    repository = JsonLedgerRepository(
        tmp_path / "ledger.json",
        logger=MagicMock(),
    )
    monkeypatch.setattr(ledger_cli, "build_ledger_repository", lambda: repository)
    monkeypatch.setattr(ledger_cli, "get_app_logger", lambda: MagicMock())
    return repository


def _entry(entry_id: str, day: date) -> LedgerEntry:
    return LedgerEntry(
        id=entry_id,
        kind=EntryKind.INCOME,
        description="Sale",
        amount=Decimal("73"),
        quantity=1,
        account=Account.CASH_LOCAL,
        date=day,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def test_summary_prints_balances_and_estimate(repository, capsys) -> None:
    repository.save_entry(_entry("a", date(2024, 1, 5)))
    repository.set_exchange_rate(Decimal("36.5"))

    status = ledger_cli.main(["summary"])

    out = capsys.readouterr().out
    assert status == 0
    assert "Cash (local): 73.00" in out
    assert "Estimated USD: 2.00" in out


def test_summary_custom_window(repository, capsys) -> None:
    repository.save_entry(_entry("a", date(2024, 1, 5)))

    ledger_cli.main(
        [
            "summary",
            "--window",
            "custom",
            "--start",
            "2024-02-01",
            "--end",
            "2024-02-29",
        ]
    )

    out = capsys.readouterr().out
    assert "0 entries" in out
    assert "unavailable" in out


def test_export_and_import_files(repository, tmp_path, capsys) -> None:
    repository.save_entry(_entry("a", date(2024, 1, 5)))
    target = tmp_path / "backup.json"

    assert ledger_cli.main(["export", str(target)]) == 0
    ledger_cli.main(["clear", "--yes"])
    assert repository.list_entries() == []
    assert ledger_cli.main(["import", str(target)]) == 0

    assert [entry.id for entry in repository.list_entries()] == ["a"]
    assert "Imported 1 entries" in capsys.readouterr().out


def test_import_legacy_file(repository, tmp_path, capsys) -> None:
    source = tmp_path / "db.json"
    source.write_text(
        json.dumps(
            [
                {
                    "id": "r1",
                    "date": "2024-01-10",
                    "type": "gasto",
                    "description": "Sugar",
                    "expense": 8,
                    "payment": {"usdt": 8},
                }
            ]
        ),
        encoding="utf-8",
    )

    status = ledger_cli.main(["import-legacy", str(source), "--replace"])

    [entry] = repository.list_entries()
    assert status == 0
    assert entry.account is Account.DIGITAL_USD
    assert "Imported 1 legacy entries" in capsys.readouterr().out


def test_set_rate_rejects_invalid_value(repository, capsys) -> None:
    status = ledger_cli.main(["set-rate", "0"])

    assert status == 1
    assert "Error" in capsys.readouterr().err
    assert repository.get_exchange_rate().is_set is False


def test_import_missing_file_fails(repository, tmp_path) -> None:
    assert ledger_cli.main(["import", str(tmp_path / "nope.json")]) == 1


def test_clear_requires_confirmation(repository) -> None:
    with pytest.raises(SystemExit):
        ledger_cli.main(["clear"])
