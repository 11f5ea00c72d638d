"""
Resource-style RSVP API routes
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from app.api.deps import get_rsvp_service
from app.core.errors import NotFoundError, StorageError, ValidationError
from app.schemas.rsvp import RsvpSubmission
from app.services.excel_service import ExcelService
from app.services.rsvp_service import RsvpService
from app.utils.responses import (
    comments_payload,
    error_response,
    listing_payload,
    mutation_payload,
)

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/rsvp", status_code=201)
async def submit_rsvp(
    submission: RsvpSubmission,
    service: RsvpService = Depends(get_rsvp_service)
):
    """Submit an RSVP"""
    try:
        result = service.submit(submission)
    except ValidationError as e:
        return error_response(e.message, status_code=400)
    except StorageError:
        logger.exception("Error saving RSVP")
        return error_response("Failed to save RSVP.", status_code=500)

    return JSONResponse(content=mutation_payload(result), status_code=201)

@router.get("/rsvps")
async def list_rsvps(service: RsvpService = Depends(get_rsvp_service)):
    """All RSVPs with attendance stats (admin)"""
    try:
        listing = service.list()
    except StorageError:
        logger.exception("Error fetching RSVPs")
        return error_response("Failed to fetch RSVPs.", status_code=500)

    return listing_payload(listing)

@router.get("/rsvps/export.xlsx")
async def export_rsvps(service: RsvpService = Depends(get_rsvp_service)):
    """Download all RSVPs as an Excel workbook (admin)"""
    try:
        listing = service.list()
    except StorageError:
        logger.exception("Error exporting RSVPs")
        return error_response("Failed to fetch RSVPs.", status_code=500)

    return Response(
        content=ExcelService.export_rsvps(listing.rsvps),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=rsvps.xlsx"}
    )

@router.delete("/rsvp/{rsvp_id}")
async def delete_rsvp(
    rsvp_id: str,
    service: RsvpService = Depends(get_rsvp_service)
):
    """Delete an RSVP by id (admin)"""
    try:
        result = service.remove(rsvp_id)
    except NotFoundError as e:
        return error_response(e.message, status_code=404)
    except StorageError:
        logger.exception("Error deleting RSVP %s", rsvp_id)
        return error_response("Failed to delete RSVP.", status_code=500)

    return mutation_payload(result)

@router.get("/comments")
async def list_comments(service: RsvpService = Depends(get_rsvp_service)):
    """Guestbook messages (public)"""
    try:
        comments = service.comments()
    except StorageError:
        logger.exception("Error fetching comments")
        return error_response("Failed to fetch comments.", status_code=500)

    return comments_payload(comments)
