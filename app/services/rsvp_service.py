"""
RSVP business rules: validation, normalization and id assignment
"""

import logging
import math
import re
from typing import Any, List, Optional

from app.core.errors import NotFoundError, ValidationError
from app.schemas.rsvp import (
    Attendance,
    Comment,
    MutationResult,
    RsvpListing,
    RsvpRecord,
    RsvpSubmission,
)
from app.services.repositories import RsvpStore
from app.utils.timestamps import isoformat_utc

logger = logging.getLogger(__name__)

SAVED_MESSAGE = "RSVP saved successfully."
DELETED_MESSAGE = "RSVP deleted successfully."

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Largest id an integer column can hold (signed 64-bit)
MAX_STORED_INT = 2 ** 63 - 1
# Guest counts stay 32-bit so the accepted total cannot overflow
MAX_GUEST_COUNT = 2 ** 31 - 1


def parse_guest_count(value: Any) -> int:
    """Guest count for an accepting guest: the leading integer if positive, else 1"""
    count: Optional[int] = None
    if value is None or isinstance(value, bool):
        pass
    elif isinstance(value, int):
        count = value
    elif isinstance(value, float):
        count = int(value) if math.isfinite(value) else None
    else:
        match = _LEADING_INT.match(str(value))
        if match:
            count = int(match.group(1))
    if count is None or not 0 < count <= MAX_GUEST_COUNT:
        return 1
    return count


def parse_id(value: Any) -> Optional[int]:
    """Integral id from a path, query or body value; None when no record could have it"""
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float)):
        text = str(value).strip()
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    return value if abs(value) <= MAX_STORED_INT else None


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


class RsvpService:
    """RSVP operations over an injected store"""

    def __init__(self, store: RsvpStore):
        self.store = store

    def submit(self, submission: RsvpSubmission) -> MutationResult:
        """Validate and persist a submission.

        Raises ``ValidationError`` when name, email or attendance is missing
        or attendance is not a recognized answer.
        """
        name = _clean(submission.name)
        email = _clean(submission.email)
        attendance = submission.attendance or ""

        if not name or not email or not attendance.strip():
            logger.info("Rejected RSVP: missing required fields")
            raise ValidationError("missing_fields")

        if attendance not in (Attendance.ACCEPT.value, Attendance.DECLINE.value):
            logger.info("Rejected RSVP: invalid attendance %r", attendance)
            raise ValidationError("invalid_attendance")

        if attendance == Attendance.ACCEPT.value:
            guests = parse_guest_count(submission.guests)
        else:
            guests = 0

        record = RsvpRecord(
            id=self.store.next_id(),
            name=name,
            email=email,
            attendance=attendance,
            guests=guests,
            dietary=_clean(submission.dietary),
            message=_clean(submission.message),
            created_at=isoformat_utc(),
        )
        rsvp_id = self.store.insert(record)
        logger.info("Saved RSVP %s (%s, %d guests)", rsvp_id, attendance, guests)
        return MutationResult(id=rsvp_id, message=SAVED_MESSAGE)

    def list(self) -> RsvpListing:
        return RsvpListing(stats=self.store.stats(), rsvps=self.store.list_all())

    def comments(self) -> List[Comment]:
        """Guestbook entries: records with a non-blank message, newest first"""
        return [
            Comment(name=record.name, message=record.message.strip(), created_at=record.created_at)
            for record in self.store.list_all()
            if record.message.strip()
        ]

    def remove(self, rsvp_id: Any) -> MutationResult:
        """Delete by id; raises ``NotFoundError`` for a missing, unparsable or unknown id"""
        if rsvp_id is None or (isinstance(rsvp_id, str) and not rsvp_id.strip()):
            raise NotFoundError("ID is required.")

        parsed = parse_id(rsvp_id)
        if parsed is None or not self.store.delete_by_id(parsed):
            raise NotFoundError()

        logger.info("Deleted RSVP %s", parsed)
        return MutationResult(message=DELETED_MESSAGE)
