"""Use case to wipe the ledger."""

from decimal import Decimal

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.infrastructure.logging.logger import get_app_logger


class ClearLedgerUseCase:
    """Delete every entry and reset the exchange rate to unset."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(self) -> int:
        """Clear the ledger.

        Returns:
            int: Number of entries removed.
        """
        removed = len(self._ledger_repository.list_entries())
        self._ledger_repository.set_exchange_rate(Decimal("0"))
        self._ledger_repository.replace_entries([])
        self._logger.warning(f"Cleared ledger: removed {removed} entries")
        return removed


__all__ = ["ClearLedgerUseCase"]
