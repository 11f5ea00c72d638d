"""
Error taxonomy shared by the stores, the RSVP service and the transports
"""

from typing import Optional


class RsvpError(Exception):
    """Base error. ``message`` is safe to show to callers."""

    message = "Request failed."

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(RsvpError):
    """Submission rejected by presence or enum checks"""

    MESSAGES = {
        "missing_fields": "Name, email, and attendance are required.",
        "invalid_attendance": "Invalid attendance value.",
    }

    def __init__(self, code: str):
        self.code = code
        super().__init__(self.MESSAGES[code])


class NotFoundError(RsvpError):
    message = "RSVP not found."


class StorageError(RsvpError):
    """Storage engine failure. The original exception is chained as ``__cause__``."""

    message = "Storage backend failure."
