"""
Admin availability calendar state.

The admin edits a local draft of booked dates while a second list mirrors what
the database held the last time each month was fetched. Both lists span every
month visited in the session and are kept sorted and de-duplicated, so dirty
checks are plain list comparisons.
"""
from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass, field
from datetime import date as date_type
from typing import Iterable, Protocol

from .services import StudioError


logger = logging.getLogger(__name__)


NO_CHANGES_MESSAGE = "No changes to save."
SAVED_MESSAGE = "Availability updated successfully."


class BookedDaySource(Protocol):
    def fetch(self, first: date_type, last: date_type) -> list[str]: ...

    def upsert(self, dates: list[str]) -> None: ...

    def delete(self, dates: list[str]) -> None: ...


class AvailabilitySaveError(StudioError):
    """
    Raised when a save fails part way. ``added_committed`` tells whether the
    upsert half reached the database before the delete half failed.
    """

    def __init__(self, message: str, *, added_committed: bool = False, committed: Iterable[str] = ()):
        super().__init__(message)
        self.added_committed = added_committed
        self.committed = list(committed)


@dataclass(frozen=True)
class SaveOutcome:
    message: str
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


def month_key(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def month_key_from_iso(value: str) -> str:
    return value[:7]


def month_bounds(year: int, month: int) -> tuple[date_type, date_type]:
    last_day = calendar.monthrange(year, month)[1]
    return date_type(year, month, 1), date_type(year, month, last_day)


def to_sorted_unique(dates: Iterable[str]) -> list[str]:
    return sorted(set(dates))


def replace_month_dates(dates: Iterable[str], key: str, incoming: Iterable[str]) -> list[str]:
    kept = [d for d in dates if month_key_from_iso(d) != key]
    return to_sorted_unique([*kept, *incoming])


class AvailabilityDraft:
    SESSION_KEY = "studio.availability_draft"

    def __init__(
        self,
        server_dates: Iterable[str] = (),
        local_dates: Iterable[str] = (),
        loaded_months: Iterable[str] = (),
    ):
        self.server_dates = to_sorted_unique(server_dates)
        self.local_dates = to_sorted_unique(local_dates)
        self.loaded_months = set(loaded_months)

    @classmethod
    def from_session(cls, session) -> "AvailabilityDraft":
        raw = session.get(cls.SESSION_KEY) or {}
        return cls(
            server_dates=raw.get("server", []),
            local_dates=raw.get("local", []),
            loaded_months=raw.get("months", []),
        )

    def to_session(self, session) -> None:
        session[self.SESSION_KEY] = {
            "server": self.server_dates,
            "local": self.local_dates,
            "months": sorted(self.loaded_months),
        }

    def load_month(self, store: BookedDaySource, year: int, month: int, *, force_sync: bool = False) -> list[str]:
        """
        Refresh the server slice for one month. The local slice follows only
        on the first load of that month or when ``force_sync`` is set, so
        edits in months the admin navigated away from survive.
        """
        key = month_key(year, month)
        first, last = month_bounds(year, month)
        month_dates = to_sorted_unique(store.fetch(first, last))

        self.server_dates = replace_month_dates(self.server_dates, key, month_dates)
        if key not in self.loaded_months or force_sync:
            self.local_dates = replace_month_dates(self.local_dates, key, month_dates)
        self.loaded_months.add(key)
        return month_dates

    def ensure_month(self, store: BookedDaySource, year: int, month: int) -> None:
        if month_key(year, month) not in self.loaded_months:
            self.load_month(store, year, month)

    def discard_month(self, store: BookedDaySource, year: int, month: int) -> list[str]:
        return self.load_month(store, year, month, force_sync=True)

    def toggle(self, value: str) -> bool:
        """
        Flip one date in the local draft. Returns True when the date is now booked.
        """
        iso = date_type.fromisoformat(value).isoformat()
        if iso in self.local_dates:
            self.local_dates = [d for d in self.local_dates if d != iso]
            return False
        self.local_dates = to_sorted_unique([*self.local_dates, iso])
        return True

    def is_booked(self, value: str) -> bool:
        return value in self.local_dates

    @property
    def is_dirty(self) -> bool:
        return self.local_dates != self.server_dates

    def month_is_dirty(self, key: str) -> bool:
        local = [d for d in self.local_dates if month_key_from_iso(d) == key]
        server = [d for d in self.server_dates if month_key_from_iso(d) == key]
        return local != server

    def month_booked_count(self, key: str) -> int:
        return sum(1 for d in self.local_dates if month_key_from_iso(d) == key)

    def pending_changes(self) -> tuple[list[str], list[str]]:
        server = set(self.server_dates)
        local = set(self.local_dates)
        added = [d for d in self.local_dates if d not in server]
        removed = [d for d in self.server_dates if d not in local]
        return added, removed

    def save(self, store: BookedDaySource) -> SaveOutcome:
        """
        Push the minimal diff: upsert added dates, then delete removed ones.

        The two writes are not atomic. A failed upsert aborts before any
        delete; a failed delete leaves the additions committed and the draft
        still dirty until the next save or resync.
        """
        added, removed = self.pending_changes()
        if not added and not removed:
            return SaveOutcome(message=NO_CHANGES_MESSAGE)

        if added:
            try:
                store.upsert(added)
            except StudioError as exc:
                logger.warning("Booked day upsert failed: %s", exc)
                raise AvailabilitySaveError(str(exc), added_committed=False) from exc

        if removed:
            try:
                store.delete(removed)
            except StudioError as exc:
                logger.warning("Booked day delete failed after %d upserts: %s", len(added), exc)
                raise AvailabilitySaveError(str(exc), added_committed=bool(added), committed=added) from exc

        self.server_dates = list(self.local_dates)
        logger.info("Availability saved: %d added, %d removed", len(added), len(removed))
        return SaveOutcome(message=SAVED_MESSAGE, added=added, removed=removed)
