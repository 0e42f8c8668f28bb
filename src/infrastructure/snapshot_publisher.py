"""In-process change notification shared by the ledger stores."""

from abc import ABC, abstractmethod
from collections.abc import Callable

from src.application.ports.ledger_repository import SnapshotListener
from src.domain.models import LedgerEntry


class SnapshotPublisher(ABC):
    """Deliver a fresh snapshot to listeners after each write.

    Subclasses provide list_entries() and call _publish() once an entry or
    exchange-rate write has been committed.
    """

    def __init__(self, logger) -> None:
        self._listeners: list[SnapshotListener] = []
        self._logger = logger

    @abstractmethod
    def list_entries(self) -> list[LedgerEntry]:
        """Return the current snapshot."""

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a listener and deliver the current snapshot to it."""
        self._listeners.append(listener)
        listener(self.list_entries())

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _publish(self) -> None:
        if not self._listeners:
            return
        snapshot = self.list_entries()
        for listener in list(self._listeners):
            listener(list(snapshot))
        self._logger.debug(
            f"Published snapshot of {len(snapshot)} entries "
            f"to {len(self._listeners)} listeners"
        )


__all__ = ["SnapshotPublisher"]
