"""Use case to build the filtered ledger view with balances."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.models import (
    BalanceSummary,
    EntryPartition,
    ExchangeRateSetting,
    LedgerEntry,
)
from src.domain.services.balances import (
    compute_balance_summary,
    partition_entries,
)
from src.domain.services.date_window import (
    DateWindow,
    WindowMode,
    filter_entries,
    resolve_window,
    sort_entries,
)
from src.domain.services.fx import estimate_usd
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class LedgerViewSelection:
    """Reporting period chosen by the user."""

    mode: WindowMode = WindowMode.ALL
    start: date | None = None
    end: date | None = None


@dataclass(frozen=True)
class LedgerView:
    """Entries and balances for a reporting window.

    Attributes:
        window: Resolved date window.
        entries: Filtered entries, newest first.
        partition: Income+adjustment and expense views of entries.
        summary: Balances computed from entries.
        exchange_rate: Exchange-rate setting used for the estimate.
        estimated_usd: Local total converted to USD, None when the rate is
            unset.
    """

    window: DateWindow
    entries: list[LedgerEntry]
    partition: EntryPartition
    summary: BalanceSummary
    exchange_rate: ExchangeRateSetting
    estimated_usd: Decimal | None


def build_ledger_view(
    entries: Iterable[LedgerEntry],
    exchange_rate: ExchangeRateSetting,
    selection: LedgerViewSelection,
    today: date | None = None,
) -> LedgerView:
    """Filter, sort, partition and aggregate a snapshot.

    Args:
        entries: Full snapshot of the ledger.
        exchange_rate: Exchange-rate setting for the USD estimate.
        selection: Reporting period.
        today: Anchor day for relative periods.

    Returns:
        LedgerView: Fresh view computed from the snapshot only.
    """
    window = resolve_window(
        selection.mode,
        today=today,
        start=selection.start,
        end=selection.end,
    )
    filtered = sort_entries(filter_entries(entries, window))
    summary = compute_balance_summary(filtered)
    return LedgerView(
        window=window,
        entries=filtered,
        partition=partition_entries(filtered),
        summary=summary,
        exchange_rate=exchange_rate,
        estimated_usd=estimate_usd(summary.local_total, exchange_rate),
    )


class GetLedgerViewUseCase:
    """Load the ledger and compute the view for a reporting window."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing ledger storage.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        selection: LedgerViewSelection | None = None,
        today: date | None = None,
    ) -> LedgerView:
        """Return the ledger view for the selection.

        Args:
            selection: Reporting period, ALL when omitted.
            today: Anchor day for relative periods.

        Returns:
            LedgerView: Filtered entries and balances.
        """
        entries = self._ledger_repository.list_entries()
        exchange_rate = self._ledger_repository.get_exchange_rate()
        view = build_ledger_view(
            entries,
            exchange_rate,
            selection or LedgerViewSelection(),
            today=today,
        )
        self._logger.info(
            f"Ledger view {view.window.mode.value}: "
            f"{len(view.entries)}/{len(entries)} entries, "
            f"local={view.summary.local_total}, usd={view.summary.usd_total}"
        )
        return view


class LedgerViewProjector:
    """Recompute the ledger view each time a snapshot arrives.

    Holds no derived state: every snapshot produces a fresh view from
    scratch, which is handed to the callback.
    """

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        on_view: Callable[[LedgerView], None],
        selection: LedgerViewSelection | None = None,
        today: Callable[[], date | None] | None = None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._on_view = on_view
        self._selection = selection or LedgerViewSelection()
        self._today = today or (lambda: None)
        self._unsubscribe: Callable[[], None] | None = None

    def start(self) -> None:
        """Subscribe to snapshots; the first view is produced immediately."""
        if self._unsubscribe is None:
            self._unsubscribe = self._ledger_repository.subscribe(
                self.handle_snapshot
            )

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def handle_snapshot(self, entries: list[LedgerEntry]) -> LedgerView:
        """Build and publish the view for a snapshot."""
        view = build_ledger_view(
            entries,
            self._ledger_repository.get_exchange_rate(),
            self._selection,
            today=self._today(),
        )
        self._on_view(view)
        return view


__all__ = [
    "GetLedgerViewUseCase",
    "LedgerView",
    "LedgerViewProjector",
    "LedgerViewSelection",
    "build_ledger_view",
]
