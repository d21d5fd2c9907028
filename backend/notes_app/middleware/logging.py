"""
Notes App Backend — Request Logging Middleware
================================================

What:  One access log line per HTTP request.
How:   Times the downstream call and logs the surface (api or web), method,
       path, status, duration and request id on the `notes_app.access`
       logger. Redirects also log their target, so a form post shows where
       the browser was sent.
When:  Inside RequestIDMiddleware, so the request id is already set.

Example lines:
    2024-01-15T12:00:00 [INFO] notes_app.access: web POST /notes/new 302 → / 3.1ms [a1b2c3d4]
    2024-01-15T12:00:01 [WARNING] notes_app.access: api GET /api/notes/7 404 0.8ms [e5f6a7b8]

Request bodies are never logged (note content stays out of the logs).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notes_app.middleware.request_id import request_id_var

logger = logging.getLogger("notes_app.access")

# Probes hit this every few seconds
SKIPPED_PATHS = {"/health"}


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request with a level chosen by response status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        surface = "api" if path.startswith("/api/") else "web"
        status = response.status_code
        location = response.headers.get("location")
        target = f" → {location}" if location else ""
        rid = request_id_var.get("")

        logger.log(
            _level_for(status),
            "%s %s %s %d%s %.1fms [%s]",
            surface,
            request.method,
            path,
            status,
            target,
            duration_ms,
            rid,
            extra={
                "request_id": rid,
                "surface": surface,
                "status": status,
                "duration_ms": round(duration_ms, 2),
            },
        )

        return response
