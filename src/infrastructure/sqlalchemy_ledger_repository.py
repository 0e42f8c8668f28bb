"""SQLAlchemy-backed ledger store."""

from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.database import DatabaseEnginePort
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

CREATE_ENTRIES_SQL = """
CREATE TABLE IF NOT EXISTS ledger_entries (
    id TEXT PRIMARY KEY,
    kind TEXT NOT NULL,
    description TEXT NOT NULL,
    amount TEXT NOT NULL,
    quantity INTEGER NOT NULL,
    account TEXT NOT NULL,
    entry_date TEXT,
    created_at TEXT NOT NULL
)
"""

CREATE_SETTINGS_SQL = """
CREATE TABLE IF NOT EXISTS ledger_settings (
    key TEXT PRIMARY KEY,
    rate TEXT NOT NULL,
    updated_at TEXT
)
"""

SELECT_ENTRIES_SQL = text(
    """
    SELECT id, kind, description, amount, quantity, account,
           entry_date, created_at
    FROM ledger_entries
    """
)

UPSERT_ENTRY_SQL = text(
    """
    INSERT INTO ledger_entries (
        id, kind, description, amount, quantity, account,
        entry_date, created_at
    )
    VALUES (
        :id, :kind, :description, :amount, :quantity, :account,
        :date, :createdAt
    )
    ON CONFLICT (id) DO UPDATE SET
        kind = excluded.kind,
        description = excluded.description,
        amount = excluded.amount,
        quantity = excluded.quantity,
        account = excluded.account,
        entry_date = excluded.entry_date,
        created_at = excluded.created_at
    """
)

DELETE_ENTRY_SQL = text("DELETE FROM ledger_entries WHERE id = :id")

DELETE_ALL_ENTRIES_SQL = "DELETE FROM ledger_entries"

SELECT_RATE_SQL = text(
    """
    SELECT rate, updated_at
    FROM ledger_settings
    WHERE key = :key
    """
)

UPSERT_RATE_SQL = text(
    """
    INSERT INTO ledger_settings (key, rate, updated_at)
    VALUES (:key, :rate, :updated_at)
    ON CONFLICT (key) DO UPDATE SET
        rate = excluded.rate,
        updated_at = excluded.updated_at
    """
)

RATE_KEY = "exchange_rate"


class SqlAlchemyLedgerRepository(SnapshotPublisher, LedgerRepositoryPort):
    """Ledger store backed by two SQL tables."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        super().__init__(logger or get_app_logger())
        self._db_port = db_port
        self._schema_ready = False

    def list_entries(self) -> list[LedgerEntry]:
        """Return every stored entry."""
        with self._wrap_errors("read entries"):
            engine = self._engine()
            with engine.connect() as conn:
                rows = conn.execute(SELECT_ENTRIES_SQL).all()
        entries = []
        for row in rows:
            entry = entry_from_record(
                {
                    "id": row.id,
                    "kind": row.kind,
                    "description": row.description,
                    "amount": row.amount,
                    "quantity": row.quantity,
                    "account": row.account,
                    "date": row.entry_date,
                    "createdAt": row.created_at,
                },
                self._logger,
            )
            if entry is not None:
                entries.append(entry)
        return entries

    def save_entry(self, entry: LedgerEntry) -> None:
        with self._wrap_errors(f"save entry {entry.id}"):
            with self._engine().begin() as conn:
                conn.execute(UPSERT_ENTRY_SQL, entry_to_record(entry))
        self._publish()

    def delete_entry(self, entry_id: str) -> bool:
        with self._wrap_errors(f"delete entry {entry_id}"):
            with self._engine().begin() as conn:
                result = conn.execute(DELETE_ENTRY_SQL, {"id": entry_id})
                deleted = result.rowcount > 0
        if deleted:
            self._publish()
        return deleted

    def replace_entries(self, entries: list[LedgerEntry]) -> None:
        records = [entry_to_record(entry) for entry in entries]
        with self._wrap_errors("replace entries"):
            with self._engine().begin() as conn:
                conn.exec_driver_sql(DELETE_ALL_ENTRIES_SQL)
                if records:
                    conn.execute(UPSERT_ENTRY_SQL, records)
        self._logger.info(f"Replaced ledger with {len(records)} entries")
        self._publish()

    def get_exchange_rate(self) -> ExchangeRateSetting:
        with self._wrap_errors("read exchange rate"):
            with self._engine().connect() as conn:
                row = conn.execute(SELECT_RATE_SQL, {"key": RATE_KEY}).first()
        if row is None:
            return ExchangeRateSetting()
        return ExchangeRateSetting(
            rate=stored_rate(row.rate, self._logger),
            updated_at=parse_timestamp(row.updated_at),
        )

    def set_exchange_rate(self, rate: Decimal) -> ExchangeRateSetting:
        setting = ExchangeRateSetting(
            rate=rate,
            updated_at=datetime.now(timezone.utc),
        )
        with self._wrap_errors("write exchange rate"):
            with self._engine().begin() as conn:
                conn.execute(
                    UPSERT_RATE_SQL,
                    {
                        "key": RATE_KEY,
                        "rate": str(setting.rate),
                        "updated_at": setting.updated_at.isoformat(),
                    },
                )
        self._publish()
        return setting

    def _engine(self):
        engine = self._db_port.get_ledger_engine()
        if not self._schema_ready:
            with engine.begin() as conn:
                conn.exec_driver_sql(CREATE_ENTRIES_SQL)
                conn.exec_driver_sql(CREATE_SETTINGS_SQL)
            self._schema_ready = True
        return engine

    @contextmanager
    def _wrap_errors(self, action: str):
        """Turn SQLAlchemy errors into persistence errors."""
        try:
            yield
        except SQLAlchemyError as exc:
            self._logger.error(f"Failed to {action}: {exc}")
            raise LedgerPersistenceError(f"Failed to {action}") from exc


__all__ = ["SqlAlchemyLedgerRepository"]
