"""
Notes App Backend — Note Service (CRUD Logic)
===============================================

What:  The create / read / update / delete operations shared by the JSON API
       and the HTML pages.
How:   Every call receives the NoteStore to act on. Reads go straight to
       store.read_all(); mutations run inside store.transaction() so the
       read-modify-write cycle is serialized.
Who:   Called by route handlers in routes/api.py and routes/web.py.

Shallow Merge:
    Updates copy only the mergeable fields (title, content) that are present
    in the incoming mapping onto the stored note. Fields absent from the
    mapping keep their stored value. `id` and any unknown key are ignored,
    so a client can never renumber a note.

Id Assignment:
    New ids are the current time in milliseconds. If that value is already
    taken in the store (two creates in the same millisecond), the next free
    integer above it is used instead.
"""

import logging
import time
from typing import Any, Iterable, List, Mapping

from notes_app.exceptions import NotFoundError, ValidationError
from notes_app.schemas.note import Note
from notes_app.services.note_store import NoteStore

logger = logging.getLogger(__name__)

MERGEABLE_FIELDS = ("title", "content")


def _find_index(notes: List[Note], note_id: int) -> int:
    for idx, note in enumerate(notes):
        if note.id == note_id:
            return idx
    raise NotFoundError(resource="note", resource_id=note_id)


def _next_id(notes: List[Note]) -> int:
    taken = {note.id for note in notes}
    candidate = int(time.time() * 1000)
    while candidate in taken:
        candidate += 1
    return candidate


def mergeable_fields(fields: Mapping[str, Any]) -> dict:
    """
    Pick the mergeable fields out of an incoming mapping.

    Raises:
        ValidationError: A mergeable field holds something other than a
            string or null.
    """
    picked = {}
    for name in MERGEABLE_FIELDS:
        if name not in fields:
            continue
        value = fields[name]
        if value is not None and not isinstance(value, str):
            raise ValidationError(
                message=f"Field '{name}' must be a string",
                field=name,
                context={"found": type(value).__name__},
            )
        picked[name] = value
    return picked


def require_fields(fields: Mapping[str, Any], names: Iterable[str]) -> None:
    """Raise ValidationError unless every named field is present and non-blank."""
    missing = [
        name for name in names
        if not isinstance(fields.get(name), str) or not fields[name].strip()
    ]
    if missing:
        raise ValidationError(
            message=f"Missing required field(s): {', '.join(missing)}",
            field=missing[0],
            context={"missing": missing},
        )


class NoteService:
    """
    Stateless note operations over an injected NoteStore.

    Every method raises NotFoundError for an unknown id and lets
    FileStorageError / ValidationError from lower layers propagate.
    """

    async def list_notes(self, store: NoteStore) -> List[Note]:
        return await store.read_all()

    async def get_note(self, store: NoteStore, note_id: int) -> Note:
        notes = await store.read_all()
        return notes[_find_index(notes, note_id)]

    async def create_note(self, store: NoteStore, fields: Mapping[str, Any]) -> Note:
        """
        Append a new note built from the mergeable fields of `fields`.

        Missing title/content are left out of the file and read back as null.
        """
        values = mergeable_fields(fields)
        async with store.transaction() as notes:
            note = Note(id=_next_id(notes), **values)
            notes.append(note)

        logger.info("Created note %d", note.id)
        return note

    async def update_note(
        self, store: NoteStore, note_id: int, fields: Mapping[str, Any]
    ) -> Note:
        """Shallow-merge `fields` into the stored note and return the result."""
        values = mergeable_fields(fields)
        async with store.transaction() as notes:
            idx = _find_index(notes, note_id)
            notes[idx] = Note.model_validate(
                {**notes[idx].model_dump(exclude_unset=True), **values}
            )
            note = notes[idx]

        logger.info("Updated note %d (%s)", note_id, ", ".join(values) or "no fields")
        return note

    async def delete_note(self, store: NoteStore, note_id: int) -> Note:
        """Remove the note and return it as it was stored."""
        async with store.transaction() as notes:
            removed = notes.pop(_find_index(notes, note_id))

        logger.info("Deleted note %d", note_id)
        return removed


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
