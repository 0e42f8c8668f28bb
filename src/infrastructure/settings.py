"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

from src.infrastructure.logging.logger import get_app_logger
from src.utils.utils import get_project_root


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for selecting and locating the ledger store.

    Attributes:
        backend: Backend identifier (sqlalchemy or json).
        db_url: SQLAlchemy URL for the sqlalchemy backend.
        json_file: Path to the ledger document for the json backend.
        backup_dir: Directory receiving a copy of the document before
            each write of the json backend.
        local_currency_label: Display label of the local currency.
    """

    backend: str = "sqlalchemy"
    db_url: Optional[str] = None
    json_file: Optional[Path] = None
    backup_dir: Optional[Path] = None
    local_currency_label: str = "Bs."

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        backend = os.getenv("LEDGER_BACKEND", "sqlalchemy").strip().lower()
        logger = get_app_logger()
        data_dir = get_project_root() / "data"

        db_url = os.getenv("LEDGER_DB_URL") or (
            f"sqlite:///{data_dir / 'ledger.db'}"
        )
        raw_json = os.getenv("LEDGER_JSON_FILE")
        json_file = (
            cls._normalize_path(raw_json, logger=logger)
            if raw_json
            else data_dir / "ledger.json"
        )
        raw_backup = os.getenv("LEDGER_BACKUP_DIR")
        backup_dir = (
            cls._normalize_path(raw_backup, logger=logger)
            if raw_backup
            else json_file.parent / "backups"
        )
        label = os.getenv("LEDGER_LOCAL_CURRENCY", "Bs.").strip() or "Bs."
        return cls(
            backend=backend,
            db_url=db_url,
            json_file=json_file,
            backup_dir=backup_dir,
            local_currency_label=label,
        )

    @staticmethod
    def _normalize_path(raw_path: str, logger) -> Path:
        """Normalize a filesystem path or file:// URI.

        Args:
            raw_path: Raw path string.
            logger: Logger used for warnings.

        Returns:
            Path: Absolute filesystem path.
        """
        parsed = urlparse(raw_path)
        if parsed.scheme == "file":
            raw_path = unquote(parsed.path)
        path = Path(raw_path).expanduser().resolve()
        if not path.parent.exists():
            logger.warning(
                f"Parent directory does not exist for {path}; "
                "it will be created on first write"
            )
        return path


__all__ = ["LedgerSettings"]
