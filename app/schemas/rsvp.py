"""
RSVP-related Pydantic schemas
"""

from enum import Enum
from typing import Any, List, Optional, Union
from pydantic import BaseModel, field_validator

class Attendance(str, Enum):
    """Recognized attendance answers"""
    ACCEPT = "Joyfully Accept"
    DECLINE = "Regretfully Decline"

class RsvpSubmission(BaseModel):
    """Raw submission fields as they arrive from a body or from flat parameters"""
    name: Optional[str] = None
    email: Optional[str] = None
    attendance: Optional[str] = None
    guests: Optional[Union[int, float, str]] = None
    dietary: Optional[str] = None
    message: Optional[str] = None

    @field_validator("name", "email", "attendance", "dietary", "message", mode="before")
    @classmethod
    def coerce_to_text(cls, value: Any) -> Optional[str]:
        # JSON bodies may carry numbers or booleans where text is expected
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("guests", mode="before")
    @classmethod
    def coerce_guests(cls, value: Any) -> Any:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, (int, float, str)):
            return value
        return str(value)

class RsvpRecord(BaseModel):
    """A persisted RSVP"""
    id: int
    name: str
    email: str
    attendance: str
    guests: int
    dietary: str = ""
    message: str = ""
    created_at: str

    class Config:
        from_attributes = True

class RsvpStats(BaseModel):
    """Aggregate counts over all stored RSVPs"""
    total: int = 0
    accepted: int = 0
    declined: int = 0
    total_guests: int = 0

class RsvpListing(BaseModel):
    stats: RsvpStats
    rsvps: List[RsvpRecord]

class Comment(BaseModel):
    """Guestbook entry"""
    name: str
    message: str
    created_at: str

class MutationResult(BaseModel):
    """Acknowledgement of a successful submit or delete"""
    id: Optional[int] = None
    message: str
