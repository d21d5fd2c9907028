"""
Notes App Backend — Request Body Parser
=========================================

What:  Decodes a request body into a mapping of field name → value.
How:   Accumulates the full body, then decodes it according to a BodyFormat:
       FORM  → application/x-www-form-urlencoded, values are strings
       JSON  → a JSON object, values are whatever the client sent
Who:   Used by both the HTML routes (FORM) and the JSON API (JSON) through
       the `form_body` / `json_body` dependencies.

Malformed bodies raise ValidationError, which the global handler turns into
a 400 response (JSON for the API, an HTML page for the web routes).
"""

import json
import logging
from enum import Enum
from typing import Any, Dict
from urllib.parse import parse_qs

from fastapi import Request

from notes_app.exceptions import ValidationError

logger = logging.getLogger(__name__)


class BodyFormat(str, Enum):
    FORM = "form"
    JSON = "json"


def decode_form(raw: bytes) -> Dict[str, str]:
    """
    Decode a URL-encoded form body.

    Repeated keys keep their first value; blank values are kept as "".
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        raise ValidationError(message="Form body is not valid UTF-8", field="body")

    parsed = parse_qs(text, keep_blank_values=True)
    return {name: values[0] for name, values in parsed.items()}


def decode_json(raw: bytes) -> Dict[str, Any]:
    """Decode a JSON body that must be an object."""
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValidationError(
            message="Request body is not valid JSON",
            field="body",
            context={"reason": str(e)},
        )

    if not isinstance(data, dict):
        raise ValidationError(
            message="Request body must be a JSON object",
            field="body",
            context={"found": type(data).__name__},
        )
    return data


_DECODERS = {
    BodyFormat.FORM: decode_form,
    BodyFormat.JSON: decode_json,
}


async def parse_body(request: Request, body_format: BodyFormat) -> Dict[str, Any]:
    """
    Read the whole request body and decode it.

    Args:
        request: The incoming request; its body stream is consumed.
        body_format: Which decoder to apply.

    Returns:
        Field name → value mapping.

    Raises:
        ValidationError: The body cannot be decoded in the requested format.
    """
    raw = await request.body()
    logger.debug("Decoding %d-byte %s body", len(raw), body_format.value)
    return _DECODERS[body_format](raw)


class BodyParser:
    """
    FastAPI dependency wrapping parse_body for a fixed format.

    Usage:
        @router.post("/notes/new")
        async def create(fields: dict = Depends(form_body)): ...
    """

    def __init__(self, body_format: BodyFormat):
        self.body_format = body_format

    async def __call__(self, request: Request) -> Dict[str, Any]:
        return await parse_body(request, self.body_format)


form_body = BodyParser(BodyFormat.FORM)
json_body = BodyParser(BodyFormat.JSON)
