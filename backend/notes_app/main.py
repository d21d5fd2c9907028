"""
Notes App Backend — FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance;
       run() starts uvicorn on the configured host/port.
Who:   uvicorn (`uvicorn notes_app.main:app`), the `notes-app` console script,
       `python -m notes_app`, and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:   [Request ID] → [Access Logging]      │
    │                                                     │
    │  Routes (first match wins, in this order):          │
    │    /api/notes…   JSON CRUD                          │
    │    /, /notes/…   HTML CRUD                          │
    │    /health       health check                       │
    │    anything else → catch-all 404 page               │
    │                                                     │
    │  Exception Handlers:                                │
    │    ValidationError → 400 │ NotFoundError → 404      │
    │    FileStorageError → 500 │ unexpected → 500        │
    │    JSON under /api/, HTML page everywhere else      │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from notes_app import __version__
from notes_app.config import settings
from notes_app.exceptions import (
    FileStorageError,
    NotFoundError,
    ValidationError,
)
from notes_app.middleware.logging import RequestLoggingMiddleware
from notes_app.middleware.request_id import (
    RequestIDMiddleware,
    current_request_id,
    request_id_var,
)
from notes_app.routes import api, health, web
from notes_app.views.pages import render_message, render_page

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once for the whole process.

    Format: 2024-01-15T12:00:00 [INFO] notes_app.services.note_service: Created note 1705...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # RequestLoggingMiddleware already writes one line per request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Notes App %s starting up...", __version__)
    logger.info("Note store: %s", Path(settings.data_file).resolve())
    logger.info("Note app running at http://%s:%d", settings.host, settings.port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Notes App shutting down.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def is_api_request(request: Request) -> bool:
    """API routes answer errors in JSON; every other path gets an HTML page."""
    return request.url.path.startswith("/api/")


def _error_page(title: str, message: str, status_code: int) -> HTMLResponse:
    return HTMLResponse(render_page(title, render_message(message)), status_code=status_code)


def _error_json(
    status_code: int, error: str, message: str, details=None, request_id=None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "message": message,
            "details": details or {},
            "request_id": request_id if request_id is not None else request_id_var.get(""),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to responses.

    Handler table:
        ValidationError           → 400
        NotFoundError             → 404 {"error": "Note not found"} / "Not Found" page
        FileStorageError          → 500
        Starlette 404 / 405       → catch-all "404 Not Found" page
        Exception (fallback)      → 500

    Responses never carry file paths or stack traces; those go to the log.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        if is_api_request(request):
            return _error_json(400, "validation_error", exc.message, exc.context)
        return _error_page("Bad Request", exc.message, 400)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        if is_api_request(request):
            return JSONResponse(status_code=404, content={"error": exc.message})
        return _error_page("Not Found", exc.message, 404)

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        rid = request_id_var.get("")
        logger.error("[%s] File storage error: %s | Context: %s", rid, exc.message, exc.context)
        if is_api_request(request):
            return _error_json(500, "server_error", exc.message)
        return _error_page("Server Error", exc.message, 500)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """
        Catch-all for requests no route answers.

        Unknown paths (404) and known paths with an unsupported method (405)
        both get the plain 404 page, whatever the path prefix.
        """
        if exc.status_code in (404, 405):
            return _error_page("Not Found", "404 Not Found", 404)
        if is_api_request(request):
            return _error_json(exc.status_code, "http_error", str(exc.detail))
        return _error_page("Error", str(exc.detail), exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Fallback 500.

        Starlette runs this from ServerErrorMiddleware, outside
        RequestIDMiddleware, so the id comes from request.state rather than
        the ContextVar. The exception is re-raised after the response is
        sent, which puts the traceback in the server log a second time.
        """
        rid = current_request_id(request)
        logger.error(
            "[%s] Unexpected error: %s",
            rid,
            str(exc),
            exc_info=True,
        )
        message = "An unexpected error occurred. Please try again."
        if is_api_request(request):
            return _error_json(500, "internal_server_error", message, request_id=rid)
        return _error_page("Server Error", message, 500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Notes App",
        description=(
            "Minimal notes manager with server-rendered HTML pages and a parallel "
            "JSON REST API, persisted to a single JSON file."
        ),
        version=__version__,
        # Only the routes in routes/ answer; everything else is the 404 page
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(api.router)
    app.include_router(web.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn on settings.host:settings.port."""
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
