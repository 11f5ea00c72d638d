"""
Script-style routes: one URL, the operation picked by an ``action`` field

GET answers can be wrapped in a caller-named function (``callback``) so
pages can load them through a <script> tag instead of a cross-origin
request. POST accepts a JSON body and falls back to flat form and query
parameters when the body is not a JSON object.
"""

import json
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.api.deps import get_rsvp_service
from app.services.dispatch import dispatch_body, dispatch_query
from app.services.rsvp_service import RsvpService
from app.utils.responses import ResponseEncoding, encoded_response, error_response

router = APIRouter()

async def _flat_parameters(request: Request) -> Dict[str, Any]:
    fields: Dict[str, Any] = dict(request.query_params)
    form = await request.form()
    fields.update({key: value for key, value in form.items() if isinstance(value, str)})
    return fields

@router.get("/exec")
async def exec_get(request: Request, service: RsvpService = Depends(get_rsvp_service)):
    """Query-style entry point"""
    try:
        encoding = ResponseEncoding.from_callback(request.query_params.get("callback"))
    except ValueError:
        return error_response("Invalid callback.", status_code=400)

    payload = dispatch_query(service, request.query_params)
    return encoded_response(payload, encoding)

@router.post("/exec")
async def exec_post(request: Request, service: RsvpService = Depends(get_rsvp_service)):
    """Body-style entry point"""
    raw = await request.body()
    try:
        body = json.loads(raw)
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = await _flat_parameters(request)

    return JSONResponse(content=dispatch_body(service, body))
