"""
Notes App Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── store_path:    Path of a not-yet-existing JSON file in tmp_path
    ├── note_store:    NoteStore on store_path
    ├── sample_notes:  Three Note objects
    ├── seeded_store:  note_store with sample_notes already written
    └── test_client:   HTTPX AsyncClient on the app, store dependency overridden
"""

import os
import tempfile

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Override settings BEFORE any app imports so the default store never points
# at a notes.json in the working directory.
os.environ["DATA_FILE"] = os.path.join(
    tempfile.mkdtemp(prefix="notes_app_test_"), "notes.json"
)
os.environ["LOG_LEVEL"] = "WARNING"

from notes_app.schemas.note import Note  # noqa: E402
from notes_app.services.note_store import NoteStore, get_note_store  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "notes.json"


@pytest.fixture
def note_store(store_path):
    """A store on a fresh temp file that does not exist yet."""
    return NoteStore(store_path)


@pytest.fixture
def sample_notes():
    return [
        Note(id=1700000000001, title="Groceries", content="Milk, eggs"),
        Note(id=1700000000002, title="Ideas", content="Write more tests"),
        Note(id=1700000000003, title="Todo", content="Call the plumber"),
    ]


@pytest_asyncio.fixture
async def seeded_store(note_store, sample_notes):
    await note_store.write_all(sample_notes)
    return note_store


@pytest_asyncio.fixture
async def test_client(note_store):
    """
    Async HTTP client talking to the app in-process.

    The store dependency is overridden with the temp-file store, so tests can
    seed or inspect `note_store` directly.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/notes")
            assert response.status_code == 200
    """
    from notes_app.main import app

    app.dependency_overrides[get_note_store] = lambda: note_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
