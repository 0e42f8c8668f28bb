"""Date-window selection for ledger reporting periods."""

import calendar
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from enum import Enum

from src.domain.models.ledger import LedgerEntry


class WindowMode(str, Enum):
    """Reporting period selectable by the user."""

    ALL = "all"
    TODAY = "today"
    THIS_WEEK = "this_week"
    THIS_MONTH = "this_month"
    CUSTOM = "custom"


@dataclass(frozen=True)
class DateWindow:
    """Inclusive calendar-day window.

    Attributes:
        mode: Mode the window was resolved from.
        start: First included day, None when unbounded.
        end: Last included day, None when unbounded.
    """

    mode: WindowMode
    start: date | None = None
    end: date | None = None

    @property
    def is_unbounded(self) -> bool:
        return self.start is None and self.end is None

    def contains(self, day: date) -> bool:
        """Return True when the day falls inside the window."""
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


def today_utc() -> date:
    """Return the current UTC calendar day."""
    return datetime.now(timezone.utc).date()


def resolve_window(
    mode: WindowMode | str,
    today: date | None = None,
    start: date | None = None,
    end: date | None = None,
) -> DateWindow:
    """Resolve a reporting mode into concrete bounds.

    Args:
        mode: Selected reporting mode.
        today: Anchor day. Defaults to the current UTC day.
        start: Custom window start.
        end: Custom window end.

    Returns:
        DateWindow: Window with inclusive bounds. A custom window missing
        either bound is unbounded, like ALL.
    """
    mode = WindowMode(mode)
    anchor = today or today_utc()
    if mode is WindowMode.TODAY:
        return DateWindow(mode, anchor, anchor)
    if mode is WindowMode.THIS_WEEK:
        week_start = anchor - timedelta(days=anchor.isoweekday() - 1)
        return DateWindow(mode, week_start, week_start + timedelta(days=6))
    if mode is WindowMode.THIS_MONTH:
        last_day = calendar.monthrange(anchor.year, anchor.month)[1]
        return DateWindow(
            mode,
            date(anchor.year, anchor.month, 1),
            date(anchor.year, anchor.month, last_day),
        )
    if mode is WindowMode.CUSTOM and start is not None and end is not None:
        return DateWindow(mode, start, end)
    return DateWindow(mode)


def filter_entries(
    entries: Iterable[LedgerEntry],
    window: DateWindow,
) -> list[LedgerEntry]:
    """Return the entries whose date falls inside the window."""
    return [entry for entry in entries if window.contains(entry.date)]


def sort_entries(entries: Iterable[LedgerEntry]) -> list[LedgerEntry]:
    """Sort entries by descending date, then descending id."""
    return sorted(
        entries,
        key=lambda entry: (entry.date, entry.id),
        reverse=True,
    )


__all__ = [
    "DateWindow",
    "WindowMode",
    "filter_entries",
    "resolve_window",
    "sort_entries",
    "today_utc",
]
