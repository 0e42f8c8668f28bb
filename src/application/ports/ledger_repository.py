"""Port for durable ledger storage with change notification."""

from collections.abc import Callable
from decimal import Decimal
from typing import Protocol

from src.domain.models import ExchangeRateSetting, LedgerEntry

SnapshotListener = Callable[[list[LedgerEntry]], None]


class LedgerRepositoryPort(Protocol):
    """Port exposing ledger entries and the exchange-rate setting.

    Implementations raise LedgerPersistenceError when the underlying store
    fails. They do not retry.
    """

    def list_entries(self) -> list[LedgerEntry]:
        """Return every stored entry, in no particular order."""

    def save_entry(self, entry: LedgerEntry) -> None:
        """Create the entry or fully replace the one with the same id."""

    def delete_entry(self, entry_id: str) -> bool:
        """Delete an entry by id.

        Returns:
            bool: False when no entry had the id.
        """

    def replace_entries(self, entries: list[LedgerEntry]) -> None:
        """Replace the whole entry collection."""

    def get_exchange_rate(self) -> ExchangeRateSetting:
        """Return the exchange-rate setting, rate 0 when never set."""

    def set_exchange_rate(self, rate: Decimal) -> ExchangeRateSetting:
        """Overwrite the exchange-rate setting."""

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a listener for fresh snapshots after each write.

        Entry writes and exchange-rate writes both notify listeners. The
        listener is called once immediately with the current snapshot.

        Returns:
            Callable[[], None]: Function removing the listener.
        """


__all__ = ["LedgerRepositoryPort", "SnapshotListener"]
