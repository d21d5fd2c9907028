"""
Notes App Backend — Health Check Route
========================================

What:  Health check endpoint for process supervisors and probes.
How:   Reads the backing file through the injected store and reports
       whether that worked.
When:  Periodically (e.g. every 30 seconds by a container health check).

Status levels:
    - healthy:   The store file is readable (or absent, i.e. empty)
    - unhealthy: Reading the store raised FileStorageError
"""

import logging
import time

from fastapi import APIRouter, Depends

from notes_app import __version__
from notes_app.exceptions import FileStorageError
from notes_app.schemas.note import HealthResponse
from notes_app.services.note_store import NoteStore, get_note_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: NoteStore = Depends(get_note_store)) -> HealthResponse:
    """
    Probe the store and report the aggregate status.

    Always answers 200; the `status` field carries the verdict.
    """
    store_status = "readable"
    overall = "healthy"
    note_count = None

    try:
        note_count = len(await store.read_all())
    except FileStorageError as e:
        store_status = "unreadable"
        overall = "unhealthy"
        logger.warning("Health check: store unreadable: %s | Context: %s", e.message, e.context)

    return HealthResponse(
        status=overall,
        version=__version__,
        store=store_status,
        note_count=note_count,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
