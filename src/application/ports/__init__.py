"""Application ports package."""

from .database import DatabaseEnginePort
from .ledger_repository import LedgerRepositoryPort, SnapshotListener

__all__ = [
    "DatabaseEnginePort",
    "LedgerRepositoryPort",
    "SnapshotListener",
]
