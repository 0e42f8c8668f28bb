"""Decimal parsing for ledger amounts and exchange rates."""

from decimal import Decimal


def coerce_decimal(value) -> Decimal:
    """Read a stored amount, rate or legacy column as Decimal.

    Blank strings and None count as zero, because the earlier tool and the
    settings record both leave unset numbers empty. Floats go through their
    string form so 36.5 reads as Decimal("36.5") and not its binary value.

    Raises:
        InvalidOperation: If the value is not a number.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    text = str(value).strip()
    return Decimal(text or "0")


__all__ = ["coerce_decimal"]
