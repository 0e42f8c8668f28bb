"""Flat-rate conversion of local balances into USD."""

from decimal import Decimal

from src.domain.models.ledger import ExchangeRateSetting


def estimate_usd(
    total_local: Decimal,
    setting: ExchangeRateSetting,
) -> Decimal | None:
    """Estimate the USD value of a local-currency total.

    Args:
        total_local: Local-currency balance to convert.
        setting: Exchange rate, local units per 1 USD.

    Returns:
        Decimal | None: Converted amount, or None when the rate is unset.
    """
    if not setting.is_set:
        return None
    return total_local / setting.rate


__all__ = ["estimate_usd"]
