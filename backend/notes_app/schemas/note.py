"""
Notes App Backend — Pydantic Schemas
=====================================

What:  Pydantic models for the persisted note record and the API responses.
How:   The store validates every item of the JSON file into a `Note`; the
       API returns `Note` instances directly, so the persisted shape and the
       wire shape are the same object.
Who:   Used by NoteStore, NoteService, the route handlers and the renderer.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Domain Model: what the store holds and the API returns
# ══════════════════════════════════════════════════════════════════════════


class Note(BaseModel):
    """
    What:  The single persisted entity, an id/title/content triple.

    id:
        Millisecond clock value taken at creation time, bumped to the next
        free integer when that value is already present in the store.
    title / content:
        Free text. Required on the HTML create form, optional via the JSON
        API (absent fields are returned as null and left out of the file).
        New values must be strings, but files written by older versions may
        hold any JSON value here; those load as-is and the pages show
        their str() form.

    Unknown keys found in the backing file are kept (extra="allow") so that
    read-all followed by write-all never drops data.
    """
    id: int = Field(description="Creation timestamp in milliseconds, unique per store")
    title: Any = Field(default=None, description="Note title")
    content: Any = Field(default=None, description="Note body text")

    model_config = ConfigDict(extra="allow")


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Response Models
# ══════════════════════════════════════════════════════════════════════════


class NotFoundResponse(BaseModel):
    """Body of every API 404: {"error": "Note not found"}."""
    error: str = Field(default="Note not found")


class ErrorResponse(BaseModel):
    """
    What:  Error body for API failures other than not-found.

    Example:
        {
            "error": "validation_error",
            "message": "Request body must be a JSON object",
            "details": {"field": "body"},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response.
    Who:   Returned by GET /health for process supervisors and probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    store: str = Field(description="Backing file status: readable, unreadable")
    note_count: Optional[int] = Field(default=None, description="Notes currently stored")
    uptime_seconds: float = Field(description="Seconds since service started")
