"""Database infrastructure for the ledger.

This module exposes helpers to create and reuse the SQLAlchemy engine of the
ledger store. SQLite is used by default; any SQLAlchemy URL may be
configured through LEDGER_DB_URL.
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from src.application.ports.database import DatabaseEnginePort


def _get_env_var(name: str, default: str | None = None) -> str:
    """Read an environment variable or raise a descriptive error.

    Args:
        name: Name of the environment variable to read.
        default: Value returned when the variable is missing.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the variable is missing and has no default.
    """
    dotenv.load_dotenv()
    value = os.getenv(name) or default
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine.

    Args:
        db_url: Fully qualified database URL.

    Returns:
        Engine: Engine with a small connection pool and health checks for
        server databases, or the driver defaults for SQLite files.
    """
    if db_url.startswith("sqlite"):
        return create_engine(db_url, future=True)
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_ledger_engine: Optional[Engine] = None


def get_ledger_engine(default_url: str | None = None) -> Engine:
    """Get a singleton SQLAlchemy engine for the ledger database.

    Args:
        default_url: URL used when LEDGER_DB_URL is not set.

    Returns:
        Engine: Lazily initialized engine.
    """
    global _ledger_engine
    if _ledger_engine is None:
        db_url = _get_env_var("LEDGER_DB_URL", default_url)
        _ledger_engine = _create_engine(db_url)
    return _ledger_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by SQLAlchemy engines.

    The adapter hides configuration details (environment variables, pooling)
    behind the port.
    """

    def __init__(self, default_url: str | None = None) -> None:
        self._default_url = default_url

    def get_ledger_engine(self) -> Engine:
        """Get the engine for the ledger database."""
        return get_ledger_engine(self._default_url)


__all__ = [
    "get_ledger_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
