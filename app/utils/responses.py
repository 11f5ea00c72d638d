"""
Response payloads and their encodings

Every transport answers with one of three payload shapes (listing,
comments, mutation acknowledgement) or an ``{"error": ...}`` payload.
A payload is rendered either as plain JSON or wrapped in a call to a
caller-named function so it can be loaded through a <script> tag.
"""

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from app.schemas.rsvp import Comment, MutationResult, RsvpListing

JSON_MEDIA_TYPE = "application/json"
SCRIPT_MEDIA_TYPE = "application/javascript"

# Dotted JavaScript identifier, e.g. "cb" or "jQuery123.handle"
_CALLBACK_TOKEN = re.compile(r"^[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*$")
MAX_CALLBACK_LENGTH = 128


class EncodingKind(str, Enum):
    PLAIN = "plain"
    WRAPPED = "wrapped"


@dataclass(frozen=True)
class ResponseEncoding:
    kind: EncodingKind = EncodingKind.PLAIN
    token: Optional[str] = None

    @classmethod
    def plain(cls) -> "ResponseEncoding":
        return cls()

    @classmethod
    def wrapped(cls, token: str) -> "ResponseEncoding":
        if not is_safe_callback(token):
            raise ValueError(f"Unsafe callback name: {token!r}")
        return cls(EncodingKind.WRAPPED, token)

    @classmethod
    def from_callback(cls, callback: Optional[str]) -> "ResponseEncoding":
        """Plain when no callback is given; raises ValueError for an unsafe one"""
        if not callback:
            return cls.plain()
        return cls.wrapped(callback)


def is_safe_callback(token: str) -> bool:
    return len(token) <= MAX_CALLBACK_LENGTH and bool(_CALLBACK_TOKEN.match(token))


def listing_payload(listing: RsvpListing) -> Dict[str, Any]:
    return jsonable_encoder(listing)


def comments_payload(comments: List[Comment]) -> Dict[str, Any]:
    return {"comments": jsonable_encoder(comments)}


def mutation_payload(result: MutationResult) -> Dict[str, Any]:
    """``{id, message}`` after a submit, ``{message}`` after a delete"""
    return jsonable_encoder(result, exclude_none=True)


def error_payload(message: str) -> Dict[str, Any]:
    return {"error": message}


def encode_payload(payload: Dict[str, Any], encoding: ResponseEncoding) -> str:
    body = json.dumps(payload, ensure_ascii=False)
    if encoding.kind is EncodingKind.WRAPPED:
        return f"{encoding.token}({body});"
    return body


def encoded_response(
    payload: Dict[str, Any],
    encoding: ResponseEncoding = ResponseEncoding(),
    status_code: int = 200
) -> Response:
    """Render ``payload`` with the media type matching ``encoding``"""
    media_type = SCRIPT_MEDIA_TYPE if encoding.kind is EncodingKind.WRAPPED else JSON_MEDIA_TYPE
    return Response(
        content=encode_payload(payload, encoding),
        media_type=media_type,
        status_code=status_code
    )


def error_response(message: str, status_code: int = 400) -> JSONResponse:
    """Create ``{"error": message}`` response"""
    return JSONResponse(
        content=error_payload(message),
        status_code=status_code
    )
