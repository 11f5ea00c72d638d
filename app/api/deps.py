"""
Shared FastAPI dependencies
"""

from fastapi import Request

from app.services.rsvp_service import RsvpService


def get_rsvp_service(request: Request) -> RsvpService:
    """The service bound to the store opened at startup"""
    return request.app.state.rsvp_service
