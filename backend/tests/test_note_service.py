"""
Notes App Backend — Note Service Unit Tests
=============================================

What:  Tests for NoteService CRUD and shallow-merge semantics.
How:   Runs against a NoteStore on a temp file (no HTTP).

What we test:
    ✅ Create assigns a fresh positive id and stores title/content
    ✅ Id collisions within one millisecond are bumped
    ✅ Partial updates preserve unnamed fields; `id` cannot be overwritten
    ✅ Unknown ids raise NotFoundError and leave the store untouched
    ✅ N creates and M deletes leave N - M notes
"""

import pytest
from unittest.mock import patch

from notes_app.exceptions import NotFoundError, ValidationError
from notes_app.services.note_service import (
    NoteService,
    mergeable_fields,
    require_fields,
)


class TestNoteServiceCreate:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_create_then_get(self, note_store):
        note = await self.service.create_note(note_store, {"title": "T", "content": "C"})

        assert note.id > 0
        fetched = await self.service.get_note(note_store, note.id)
        assert (fetched.title, fetched.content) == ("T", "C")

    @pytest.mark.asyncio
    async def test_missing_fields_stored_as_null(self, note_store):
        note = await self.service.create_note(note_store, {})
        assert note.title is None
        assert note.content is None

    @pytest.mark.asyncio
    async def test_client_id_and_unknown_keys_ignored(self, note_store):
        note = await self.service.create_note(
            note_store, {"id": 7, "title": "T", "content": "C", "admin": True}
        )
        assert note.id != 7
        assert note.model_dump() == {"id": note.id, "title": "T", "content": "C"}

    @pytest.mark.asyncio
    async def test_same_millisecond_ids_do_not_collide(self, note_store):
        with patch("notes_app.services.note_service.time") as mock_time:
            mock_time.time.return_value = 1700000000.5
            first = await self.service.create_note(note_store, {"title": "a"})
            second = await self.service.create_note(note_store, {"title": "b"})

        assert first.id == 1700000000500
        assert second.id == 1700000000501

    @pytest.mark.asyncio
    async def test_non_string_title_rejected(self, note_store):
        with pytest.raises(ValidationError, match="title"):
            await self.service.create_note(note_store, {"title": 12})
        assert await note_store.read_all() == []


class TestNoteServiceUpdate:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_partial_update_preserves_other_fields(self, seeded_store):
        note = await self.service.update_note(seeded_store, 1700000000002, {"content": "New"})

        assert note.title == "Ideas"
        assert note.content == "New"
        stored = await self.service.get_note(seeded_store, 1700000000002)
        assert stored == note

    @pytest.mark.asyncio
    async def test_update_cannot_change_id(self, seeded_store):
        note = await self.service.update_note(
            seeded_store, 1700000000001, {"id": 99, "title": "Renamed"}
        )
        assert note.id == 1700000000001
        assert note.title == "Renamed"

    @pytest.mark.asyncio
    async def test_update_keeps_position(self, seeded_store):
        await self.service.update_note(seeded_store, 1700000000002, {"title": "x"})
        ids = [n.id for n in await seeded_store.read_all()]
        assert ids == [1700000000001, 1700000000002, 1700000000003]

    @pytest.mark.asyncio
    async def test_update_unknown_id(self, seeded_store, store_path):
        before = store_path.read_text(encoding="utf-8")
        with pytest.raises(NotFoundError):
            await self.service.update_note(seeded_store, 1, {"title": "x"})
        assert store_path.read_text(encoding="utf-8") == before


class TestNoteServiceDelete:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_delete_returns_removed_note(self, seeded_store, sample_notes):
        removed = await self.service.delete_note(seeded_store, 1700000000001)

        assert removed == sample_notes[0]
        with pytest.raises(NotFoundError):
            await self.service.get_note(seeded_store, 1700000000001)

    @pytest.mark.asyncio
    async def test_delete_unknown_id(self, note_store):
        with pytest.raises(NotFoundError, match="Note not found"):
            await self.service.delete_note(note_store, 123)

    @pytest.mark.asyncio
    async def test_creates_minus_deletes(self, note_store):
        created = [
            await self.service.create_note(note_store, {"title": str(i), "content": "c"})
            for i in range(5)
        ]
        for note in created[:2]:
            await self.service.delete_note(note_store, note.id)

        assert len(await self.service.list_notes(note_store)) == 3


class TestFieldHelpers:

    def test_mergeable_fields_picks_title_and_content(self):
        assert mergeable_fields({"id": 1, "title": "T", "x": "y"}) == {"title": "T"}

    def test_mergeable_fields_accepts_null(self):
        assert mergeable_fields({"content": None}) == {"content": None}

    def test_require_fields_passes(self):
        require_fields({"title": "T", "content": "C"}, ("title", "content"))

    def test_require_fields_blank(self):
        with pytest.raises(ValidationError, match="content"):
            require_fields({"title": "T", "content": "   "}, ("title", "content"))

    def test_require_fields_missing(self):
        with pytest.raises(ValidationError, match="title"):
            require_fields({"content": "C"}, ("title", "content"))
