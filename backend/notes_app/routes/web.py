"""
Notes App Backend — HTML Page Route Handlers
==============================================

What:  Server-rendered pages for browsing and editing notes.
How:   Form bodies are decoded by the shared form body parser, work is
       delegated to NoteService, pages are built by views/pages.py.
       Mutating POSTs answer with a 302 redirect (post/redirect/get).
Who:   Browsers.

Endpoints:
    GET  /                    → list page
    GET  /notes/new           → empty form
    POST /notes/new           → create, 302 → /
    GET  /notes/{id}          → detail page        | 404 page
    GET  /notes/{id}/edit     → pre-filled form    | 404 page
    POST /notes/{id}/edit     → merge, 302 → /notes/{id} | 404 page
    POST /notes/{id}/delete   → delete, 302 → /    | 404 page
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import HTMLResponse, RedirectResponse

from notes_app.services.body_parser import form_body
from notes_app.services.note_service import note_service, require_fields
from notes_app.services.note_store import NoteStore, get_note_store
from notes_app.views.pages import (
    render_detail,
    render_form,
    render_list,
    render_page,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes Web"], include_in_schema=False)


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)


@router.get("/", response_class=HTMLResponse)
async def list_page(store: NoteStore = Depends(get_note_store)) -> HTMLResponse:
    notes = await note_service.list_notes(store)
    return HTMLResponse(render_page("Notes", render_list(notes)))


@router.get("/notes/new", response_class=HTMLResponse)
async def new_note_page() -> HTMLResponse:
    return HTMLResponse(render_page("New Note", render_form()))


@router.post("/notes/new")
async def create_note(
    fields: Dict[str, Any] = Depends(form_body),
    store: NoteStore = Depends(get_note_store),
) -> RedirectResponse:
    """Create from the form; title and content must both be non-blank."""
    require_fields(fields, ("title", "content"))
    await note_service.create_note(store, fields)
    return _redirect("/")


@router.get("/notes/{note_id:int}", response_class=HTMLResponse)
async def detail_page(note_id: int, store: NoteStore = Depends(get_note_store)) -> HTMLResponse:
    note = await note_service.get_note(store, note_id)
    return HTMLResponse(render_page(note.title or "Untitled", render_detail(note)))


@router.get("/notes/{note_id:int}/edit", response_class=HTMLResponse)
async def edit_note_page(note_id: int, store: NoteStore = Depends(get_note_store)) -> HTMLResponse:
    note = await note_service.get_note(store, note_id)
    return HTMLResponse(render_page("Edit Note", render_form(note)))


@router.post("/notes/{note_id:int}/edit")
async def update_note(
    note_id: int,
    fields: Dict[str, Any] = Depends(form_body),
    store: NoteStore = Depends(get_note_store),
) -> RedirectResponse:
    await note_service.update_note(store, note_id, fields)
    return _redirect(f"/notes/{note_id}")


@router.post("/notes/{note_id:int}/delete")
async def delete_note(note_id: int, store: NoteStore = Depends(get_note_store)) -> RedirectResponse:
    await note_service.delete_note(store, note_id)
    return _redirect("/")
