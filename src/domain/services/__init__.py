"""Domain services package."""

from .balances import compute_balance_summary, partition_entries
from .date_window import (
    DateWindow,
    WindowMode,
    filter_entries,
    resolve_window,
    sort_entries,
    today_utc,
)
from .fx import estimate_usd
from .normalization import (
    normalize_account,
    normalize_kind,
    parse_amount,
    parse_entry_date,
    parse_quantity,
    parse_timestamp,
)
from .serialization import (
    entry_from_record,
    entry_to_record,
    snapshot_from_document,
    snapshot_to_document,
    stored_rate,
)
from .validation import validate_entry, validate_exchange_rate

__all__ = [
    "DateWindow",
    "WindowMode",
    "compute_balance_summary",
    "entry_from_record",
    "entry_to_record",
    "estimate_usd",
    "filter_entries",
    "normalize_account",
    "normalize_kind",
    "parse_amount",
    "parse_entry_date",
    "parse_quantity",
    "parse_timestamp",
    "partition_entries",
    "resolve_window",
    "snapshot_from_document",
    "snapshot_to_document",
    "sort_entries",
    "stored_rate",
    "today_utc",
    "validate_entry",
    "validate_exchange_rate",
]
