"""Tests for the exchange-rate use cases."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.exchange_rate import (
    GetExchangeRateUseCase,
    SetExchangeRateUseCase,
)
from src.domain.errors import InvalidExchangeRate
from src.domain.models import ExchangeRateSetting


def test_set_exchange_rate_stores_validated_rate() -> None:
    repository = MagicMock()
    repository.set_exchange_rate.return_value = ExchangeRateSetting(
        rate=Decimal("36.5")
    )

    setting = SetExchangeRateUseCase(repository, logger=MagicMock()).execute(
        "36.5"
    )

    assert setting.rate == Decimal("36.5")
    repository.set_exchange_rate.assert_called_once_with(Decimal("36.5"))


@pytest.mark.parametrize("rate", ["0", "-2", "", "abc"])
def test_set_exchange_rate_rejects_non_positive_rates(rate) -> None:
    repository = MagicMock()

    with pytest.raises(InvalidExchangeRate):
        SetExchangeRateUseCase(repository, logger=MagicMock()).execute(rate)

    repository.set_exchange_rate.assert_not_called()


def test_get_exchange_rate_returns_repository_setting() -> None:
    repository = MagicMock()
    repository.get_exchange_rate.return_value = ExchangeRateSetting()

    setting = GetExchangeRateUseCase(repository).execute()

    assert setting.is_set is False
