"""Factory helpers to select the ledger store backend."""

from pathlib import Path

from sqlalchemy.engine import make_url

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.json_ledger_repository import JsonLedgerRepository
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import LedgerSettings
from src.infrastructure.sqlalchemy_ledger_repository import (
    SqlAlchemyLedgerRepository,
)


def _ensure_sqlite_parent(db_url: str | None, logger) -> None:
    """Create the directory of a SQLite database file when missing."""
    if not db_url or not db_url.startswith("sqlite"):
        return
    database = make_url(db_url).database
    if not database or database == ":memory:":
        return
    parent = Path(database).expanduser().parent
    if not parent.exists():
        logger.info(f"Creating SQLite directory {parent}")
        parent.mkdir(parents=True, exist_ok=True)


def create_ledger_repository(
    settings: LedgerSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
    logger=None,
) -> LedgerRepositoryPort:
    """Return a ledger repository implementation based on configuration.

    Args:
        settings: Ledger settings. Defaults to LedgerSettings.from_env().
        db_port: Optional database port override for the SQL backend.
        logger: Optional logger compatible with logging.Logger-like API.

    Returns:
        LedgerRepositoryPort: Concrete repository implementation.

    Raises:
        ValueError: If the configured backend is unknown.
    """
    resolved_logger = logger or get_app_logger()
    resolved_settings = settings or LedgerSettings.from_env()
    backend = resolved_settings.backend.strip().lower()

    if backend == "sqlalchemy":
        _ensure_sqlite_parent(resolved_settings.db_url, resolved_logger)
        resolved_db = db_port or SqlAlchemyDatabaseEngineAdapter(
            default_url=resolved_settings.db_url
        )
        return SqlAlchemyLedgerRepository(resolved_db, logger=resolved_logger)

    if backend == "json":
        if resolved_settings.json_file is None:
            raise RuntimeError("JSON backend requires a LEDGER_JSON_FILE path.")
        return JsonLedgerRepository(
            resolved_settings.json_file,
            backup_dir=resolved_settings.backup_dir,
            logger=resolved_logger,
        )

    raise ValueError(
        "Unsupported ledger backend: "
        f"{backend}. Expected sqlalchemy or json."
    )


__all__ = ["create_ledger_repository"]
