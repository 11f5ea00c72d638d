"""
Action dispatch for the script-style transports

Both entry points carry an ``action`` field next to the RSVP fields. The
query-style entry point reads flat string parameters and defaults to
listing; the body-style entry point reads a structured body and defaults
to submitting.
"""

import logging
from typing import Any, Dict, Mapping

from app.core.errors import NotFoundError, StorageError, ValidationError
from app.schemas.rsvp import RsvpSubmission
from app.services.rsvp_service import RsvpService
from app.utils.responses import (
    comments_payload,
    error_payload,
    listing_payload,
    mutation_payload,
)

logger = logging.getLogger(__name__)

SUBMISSION_FIELDS = ("name", "email", "attendance", "guests", "dietary", "message")

FAILURE_MESSAGES = {
    "rsvps": "Failed to fetch RSVPs.",
    "comments": "Failed to fetch comments.",
    "rsvp": "Failed to save RSVP.",
    "delete": "Failed to delete RSVP.",
}


def _submission(fields: Mapping[str, Any]) -> RsvpSubmission:
    return RsvpSubmission.model_validate({key: fields.get(key) for key in SUBMISSION_FIELDS})


def _run(service: RsvpService, action: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
    try:
        if action == "comments":
            return comments_payload(service.comments())
        if action == "rsvp":
            return mutation_payload(service.submit(_submission(fields)))
        if action == "delete":
            return mutation_payload(service.remove(fields.get("id")))
        return listing_payload(service.list())
    except (ValidationError, NotFoundError) as e:
        return error_payload(e.message)
    except StorageError:
        logger.exception("Storage failure while handling action %r", action)
        return error_payload(FAILURE_MESSAGES[action])


def dispatch_query(service: RsvpService, params: Mapping[str, Any]) -> Dict[str, Any]:
    """Route flat parameters; unknown or missing actions list RSVPs"""
    action = params.get("action") or "rsvps"
    if action not in FAILURE_MESSAGES:
        action = "rsvps"
    return _run(service, action, params)


def dispatch_body(service: RsvpService, body: Mapping[str, Any]) -> Dict[str, Any]:
    """Route a structured body; anything but ``delete`` is a submission"""
    action = "delete" if body.get("action") == "delete" else "rsvp"
    return _run(service, action, body)
