"""Tests for raw value normalization helpers."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation

import pytest

from src.domain.errors import InvalidAccount, InvalidDate, InvalidQuantity
from src.domain.models import Account, EntryKind
from src.domain.services.normalization import (
    normalize_account,
    normalize_kind,
    parse_amount,
    parse_entry_date,
    parse_quantity,
    parse_timestamp,
)
from src.utils.decimal_utils import coerce_decimal


def test_normalize_kind_accepts_enum_value_and_name() -> None:
    assert normalize_kind(EntryKind.EXPENSE) is EntryKind.EXPENSE
    assert normalize_kind(" Income ") is EntryKind.INCOME
    assert normalize_kind("ADJUSTMENT") is EntryKind.ADJUSTMENT


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("digital_usd", Account.DIGITAL_USD),
        ("CASH_USD", Account.CASH_USD),
        ("EFECTIVO_BS", Account.CASH_LOCAL),
        ("usdt", Account.DIGITAL_USD),
        (Account.MOBILE_PAYMENT_LOCAL, Account.MOBILE_PAYMENT_LOCAL),
    ],
)
def test_normalize_account_accepts_known_spellings(value, expected) -> None:
    """Wire values, names and legacy codes map to accounts."""
    assert normalize_account(value) is expected


def test_normalize_account_rejects_unknown_values() -> None:
    with pytest.raises(InvalidAccount):
        normalize_account(None)


def test_parse_amount_keeps_decimal_precision() -> None:
    """Floats go through their string form."""
    assert parse_amount(0.1) == Decimal("0.1")
    assert parse_amount(" 12.50 ") == Decimal("12.50")


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, 1), ("", 1), ("  ", 1), (3, 3), ("4", 4), ("2.0", 2)],
)
def test_parse_quantity_values(value, expected) -> None:
    assert parse_quantity(value) == expected


@pytest.mark.parametrize("value", [-1, False, "x", 2.5])
def test_parse_quantity_rejects_explicit_invalid_values(value) -> None:
    with pytest.raises(InvalidQuantity):
        parse_quantity(value)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2024-01-05", date(2024, 1, 5)),
        ("2024-1-5", date(2024, 1, 5)),
        ("2024/01/05", date(2024, 1, 5)),
        ("2024-01-05T23:30:00Z", date(2024, 1, 5)),
        ("2024-01-05T22:00:00-04:00", date(2024, 1, 6)),
        (date(2024, 1, 5), date(2024, 1, 5)),
        (
            datetime(2024, 1, 5, 21, tzinfo=timezone(timedelta(hours=-5))),
            date(2024, 1, 6),
        ),
    ],
)
def test_parse_entry_date_normalizes_to_utc_day(value, expected) -> None:
    """Timestamps are reduced to their UTC calendar day."""
    assert parse_entry_date(value) == expected


@pytest.mark.parametrize("value", [None, 20240105, "2024-02-30", "yesterday"])
def test_parse_entry_date_rejects_unreadable_values(value) -> None:
    with pytest.raises(InvalidDate):
        parse_entry_date(value)


def test_parse_timestamp_returns_aware_utc_or_none() -> None:
    assert parse_timestamp("2024-01-05T10:00:00Z") == datetime(
        2024, 1, 5, 10, tzinfo=timezone.utc
    )
    assert parse_timestamp("2024-01-05T10:00:00").tzinfo is timezone.utc
    assert parse_timestamp("garbage") is None
    assert parse_timestamp(None) is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, "0"), ("  ", "0"), (" 12.50 ", "12.50"), (36.5, "36.5"), (7, "7")],
)
def test_coerce_decimal_reads_stored_numbers(raw, expected) -> None:
    assert coerce_decimal(raw) == Decimal(expected)


def test_coerce_decimal_rejects_text() -> None:
    with pytest.raises(InvalidOperation):
        coerce_decimal("twelve")
