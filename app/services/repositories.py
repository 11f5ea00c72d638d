"""
Repository layer abstracting RSVP storage (SQLAlchemy table vs spreadsheet workbook).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from app.core.config import Settings
from app.schemas.rsvp import Attendance, RsvpRecord, RsvpStats


class RsvpStore(ABC):
    """Persistence contract shared by every backend.

    Records reach the store fully formed: the caller has already assigned
    the id (via ``next_id``), normalized the guest count and stamped
    ``created_at``. Stores never re-derive any of these.

    ``next_id`` followed by ``insert`` is not atomic; two concurrent
    writers may be handed the same id.
    """

    @abstractmethod
    def next_id(self) -> int:
        """1 for a fresh store, otherwise one past the highest id seen or issued"""

    @abstractmethod
    def insert(self, record: RsvpRecord) -> int:
        """Persist ``record`` and return its id"""

    @abstractmethod
    def list_all(self) -> List[RsvpRecord]:
        """All records, newest first. Rows without a name are skipped."""

    @abstractmethod
    def delete_by_id(self, rsvp_id: int) -> bool:
        """Remove the matching record; False when nothing matched"""

    @abstractmethod
    def stats(self) -> RsvpStats:
        """Counts by attendance and the accepted guest total"""

    def close(self) -> None:
        """Release the underlying handle"""


def tally(records: List[RsvpRecord]) -> RsvpStats:
    """Compute stats from records in memory"""
    stats = RsvpStats(total=len(records))
    for record in records:
        if record.attendance == Attendance.ACCEPT.value:
            stats.accepted += 1
            stats.total_guests += record.guests or 0
        elif record.attendance == Attendance.DECLINE.value:
            stats.declined += 1
    return stats


def open_store(settings: Settings) -> RsvpStore:
    """Open the backend selected by ``STORE_BACKEND``"""
    backend = settings.STORE_BACKEND.lower()
    if backend == "sheet":
        from app.services.sheet_store import SheetRsvpStore
        return SheetRsvpStore(settings.SHEET_PATH, sheet_name=settings.SHEET_NAME)
    if backend == "sql":
        from app.services.sql_store import SqlRsvpStore
        return SqlRsvpStore(settings.DATABASE_URL)
    raise ValueError(f"Unknown STORE_BACKEND: {settings.STORE_BACKEND!r}")
