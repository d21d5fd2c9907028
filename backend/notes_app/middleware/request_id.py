"""
Notes App Backend — Request ID Middleware
===========================================

What:  Assigns an id to each incoming request and echoes it in the response.
How:   Reuses the client's X-Request-ID header when it is a short token of
       letters, digits, '-' or '_'; otherwise generates 8 hex chars. The id
       is stored in a ContextVar (read by the access log and the error
       handlers) and set as X-Request-ID on the response.
When:  Outermost middleware.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local id of the request currently being handled.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Client ids end up in log lines and JSON error bodies
_VALID_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def resolve_request_id(header_value: str | None) -> str:
    if header_value and _VALID_ID.match(header_value):
        return header_value
    return uuid.uuid4().hex[:8]


def current_request_id(request: Request) -> str:
    """
    Id of `request`, also outside RequestIDMiddleware.

    The ContextVar is reset once the middleware returns; request.state lives
    in the shared ASGI scope and stays readable from outer layers such as
    ServerErrorMiddleware.
    """
    return request_id_var.get("") or getattr(request.state, "request_id", "")


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get("X-Request-ID"))
        request.state.request_id = rid
        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
