"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.ledger_repository_factory import (
    create_ledger_repository,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import LedgerSettings


def build_settings() -> LedgerSettings:
    """Return the ledger settings from the environment."""
    return LedgerSettings.from_env()


def build_database_adapter(
    settings: LedgerSettings | None = None,
) -> DatabaseEnginePort:
    """Return the database adapter instance."""
    resolved = settings or build_settings()
    return SqlAlchemyDatabaseEngineAdapter(default_url=resolved.db_url)


def build_ledger_repository(
    settings: LedgerSettings | None = None,
) -> LedgerRepositoryPort:
    """Return the configured ledger repository."""
    resolved = settings or build_settings()
    db_port = (
        build_database_adapter(resolved)
        if resolved.backend == "sqlalchemy"
        else None
    )
    return create_ledger_repository(
        resolved,
        db_port=db_port,
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_ledger_repository",
    "build_settings",
]
