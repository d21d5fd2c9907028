"""
Notes App Backend — Note Store (Flat JSON File)
=================================================

What:  Reads and writes the whole note collection to/from one JSON file.
How:   read_all() loads and validates the full file on every call; write_all()
       re-serializes the full list and overwrites the file in one write.
       transaction() wraps a read → mutate → write cycle behind a lock.
Who:   Injected into route handlers via the `get_note_store` dependency and
       driven by NoteService.
When:  Every request. Nothing is cached between requests.

File Format:
    [
      {
        "id": 1700000000000,
        "title": "Groceries",
        "content": "Milk, eggs"
      }
    ]

    A missing file is equivalent to `[]`. Indentation is 2 spaces.

Concurrency:
    Every mutation runs inside transaction(), which holds one asyncio.Lock
    per store for the full read-modify-write cycle. Two concurrent mutating
    requests therefore apply one after the other instead of the second
    overwriting the first. Plain reads do not take the lock.

    The write itself is a single truncate-and-write (no temp file + rename);
    a crash mid-write can still leave a truncated file, which the next
    read_all() reports as FileStorageError.
"""

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, List, Union

import aiofiles
from pydantic import ValidationError as PydanticValidationError

from notes_app.config import settings
from notes_app.exceptions import FileStorageError
from notes_app.schemas.note import Note

logger = logging.getLogger(__name__)


class NoteStore:
    """
    Persistence capability over a single JSON file.

    Args:
        path: Location of the backing file. Parent directories are created
              on first write.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = asyncio.Lock()

    async def read_all(self) -> List[Note]:
        """
        Load every note from the backing file.

        Returns:
            The notes in file order; [] when the file does not exist.

        Raises:
            FileStorageError: The file exists but cannot be read, is not valid
                JSON, is not a JSON array, or holds an item that is not a note.
        """
        try:
            async with aiofiles.open(self.path, mode="r", encoding="utf-8") as f:
                raw = await f.read()
        except FileNotFoundError:
            logger.debug("No store file at %s, treating as empty", self.path)
            return []
        except OSError as e:
            logger.error("Could not read store file %s: %s", self.path, e)
            raise FileStorageError(
                message="Could not read the note collection",
                context={"path": str(self.path), "os_error": str(e)},
            )

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("Store file %s is not valid JSON: %s", self.path, e)
            raise FileStorageError(
                message="The note collection is corrupt",
                context={"path": str(self.path), "json_error": str(e)},
            )

        if not isinstance(data, list):
            raise FileStorageError(
                message="The note collection is corrupt",
                context={"path": str(self.path), "found": type(data).__name__},
            )

        try:
            notes = [Note.model_validate(item) for item in data]
        except PydanticValidationError as e:
            logger.error("Store file %s holds an invalid note: %s", self.path, e)
            raise FileStorageError(
                message="The note collection is corrupt",
                context={"path": str(self.path), "error_count": e.error_count()},
            )

        logger.debug("Read %d notes from %s", len(notes), self.path)
        return notes

    async def write_all(self, notes: List[Note]) -> None:
        """
        Overwrite the backing file with the full note list.

        Raises:
            FileStorageError: Directory creation or the write failed.
        """
        payload = json.dumps(
            [note.model_dump(mode="json", exclude_unset=True) for note in notes],
            indent=2,
            ensure_ascii=False,
        )
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(self.path, mode="w", encoding="utf-8") as f:
                await f.write(payload)
        except OSError as e:
            logger.error("Could not write store file %s: %s", self.path, e)
            raise FileStorageError(
                message="Could not save the note collection",
                context={"path": str(self.path), "os_error": str(e)},
            )

        logger.debug("Wrote %d notes to %s", len(notes), self.path)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[List[Note]]:
        """
        Serialized read-modify-write over the whole collection.

        Usage:
            async with store.transaction() as notes:
                notes.append(note)

        The list is written back when the block exits normally. If the block
        raises (e.g. NotFoundError), nothing is written and the exception
        propagates.
        """
        async with self._lock:
            notes = await self.read_all()
            yield notes
            await self.write_all(notes)


# ── Default Store ─────────────────────────────────────────────────────────
# One instance per process so that every request shares the same lock.
note_store = NoteStore(settings.data_file)


def get_note_store() -> NoteStore:
    """FastAPI dependency returning the process-wide store (overridden in tests)."""
    return note_store
