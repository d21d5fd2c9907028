"""
Notes App Backend — JSON API Route Handlers
=============================================

What:  REST endpoints under /api/notes.
How:   Bodies are decoded by the shared JSON body parser, work is delegated
       to NoteService, results are returned as Note models.
Who:   Scripts and other programs; the HTML pages use routes/web.py.

Endpoints:
    GET    /api/notes          → 200, array of notes
    GET    /api/notes/{id}     → 200 note | 404 {"error": "Note not found"}
    POST   /api/notes          → 201, created note
    PUT    /api/notes/{id}     → 200 merged note | 404
    DELETE /api/notes/{id}     → 200 removed note | 404

`{id}` uses the int path convertor: non-numeric ids never match and fall
through to the catch-all 404 page.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from notes_app.schemas.note import ErrorResponse, Note, NotFoundResponse
from notes_app.services.body_parser import json_body
from notes_app.services.note_service import note_service
from notes_app.services.note_store import NoteStore, get_note_store

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/api", tags=["Notes API"])

_NOT_FOUND = {404: {"description": "Note not found", "model": NotFoundResponse}}
_BAD_BODY = {400: {"description": "Malformed JSON body", "model": ErrorResponse}}


@router.get(
    "/notes",
    response_model=List[Note],
    summary="List all notes",
)
async def list_notes(store: NoteStore = Depends(get_note_store)) -> List[Note]:
    return await note_service.list_notes(store)


@router.get(
    "/notes/{note_id:int}",
    response_model=Note,
    responses=_NOT_FOUND,
    summary="Get a single note by id",
)
async def get_note(note_id: int, store: NoteStore = Depends(get_note_store)) -> Note:
    return await note_service.get_note(store, note_id)


@router.post(
    "/notes",
    response_model=Note,
    status_code=status.HTTP_201_CREATED,
    responses=_BAD_BODY,
    summary="Create a note from a JSON body",
)
async def create_note(
    fields: Dict[str, Any] = Depends(json_body),
    store: NoteStore = Depends(get_note_store),
) -> Note:
    """
    Create a note from {"title": ..., "content": ...}.

    Both fields are optional; missing ones are stored as null. The new id is
    returned in the body.
    """
    return await note_service.create_note(store, fields)


@router.put(
    "/notes/{note_id:int}",
    response_model=Note,
    responses={**_NOT_FOUND, **_BAD_BODY},
    summary="Shallow-merge a JSON body into a note",
)
async def update_note(
    note_id: int,
    fields: Dict[str, Any] = Depends(json_body),
    store: NoteStore = Depends(get_note_store),
) -> Note:
    """
    Overwrite title and/or content with the values present in the body.

    Fields not named in the body are preserved. `id` in the body is ignored.
    """
    return await note_service.update_note(store, note_id, fields)


@router.delete(
    "/notes/{note_id:int}",
    response_model=Note,
    responses=_NOT_FOUND,
    summary="Delete a note",
)
async def delete_note(note_id: int, store: NoteStore = Depends(get_note_store)) -> Note:
    return await note_service.delete_note(store, note_id)
