"""Use cases to read and update the exchange-rate setting."""

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.models import ExchangeRateSetting
from src.domain.services.validation import validate_exchange_rate
from src.infrastructure.logging.logger import get_app_logger


class GetExchangeRateUseCase:
    """Return the current exchange-rate setting."""

    def __init__(self, ledger_repository: LedgerRepositoryPort) -> None:
        self._ledger_repository = ledger_repository

    def execute(self) -> ExchangeRateSetting:
        return self._ledger_repository.get_exchange_rate()


class SetExchangeRateUseCase:
    """Overwrite the exchange-rate setting with a positive rate."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(self, rate) -> ExchangeRateSetting:
        """Validate and store the rate.

        Args:
            rate: Local-currency units per 1 USD.

        Returns:
            ExchangeRateSetting: The stored setting.

        Raises:
            InvalidExchangeRate: If the rate is not a positive number.
        """
        validated = validate_exchange_rate(rate)
        setting = self._ledger_repository.set_exchange_rate(validated)
        self._logger.info(f"Exchange rate set to {setting.rate}")
        return setting


__all__ = ["GetExchangeRateUseCase", "SetExchangeRateUseCase"]
