"""
Pydantic schemas package
"""

from .rsvp import *

__all__ = [
    "Attendance",
    "RsvpSubmission",
    "RsvpRecord",
    "RsvpStats",
    "RsvpListing",
    "Comment",
    "MutationResult",
]
