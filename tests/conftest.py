"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

The FakeNotesStore stands in for the remote Notes Store: it keeps notes in
memory, records every call and can be told to fail any operation.
"""

import asyncio
from typing import Any

import pytest

from notekeeper.core.exceptions import StoreError
from notekeeper.schemas.note import Note, NoteId


# =============================================================================
# Fake Notes Store
# =============================================================================


class FakeNotesStore:
    """In-memory NotesStore with call recording and failure injection."""

    FAILURE_MESSAGES = {
        "list": "Failed to load notes.",
        "create": "Failed to create note.",
        "update": "Failed to update note.",
        "delete": "Failed to delete note.",
    }

    def __init__(self, notes: list[Note] | None = None) -> None:
        self.notes: list[Note] = list(notes or [])
        self.calls: list[tuple[Any, ...]] = []
        self.failing: set[str] = set()
        self.gates: dict[str, asyncio.Event] = {}
        self.queued_gates: dict[str, list[asyncio.Event]] = {}
        self.closed = False
        self._next_id = max((int(n.id) for n in self.notes), default=0) + 1

    def fail(self, *operations: str) -> None:
        self.failing.update(operations)

    def recover(self, *operations: str) -> None:
        self.failing.difference_update(operations or set(self.failing))

    def hold(self, operation: str) -> asyncio.Event:
        """Block the next calls of operation until the returned event is set."""
        gate = asyncio.Event()
        self.gates[operation] = gate
        return gate

    def hold_next(self, operation: str) -> asyncio.Event:
        """Block only the next unheld call of operation until the returned event is set."""
        gate = asyncio.Event()
        self.queued_gates.setdefault(operation, []).append(gate)
        return gate

    async def _enter(self, operation: str, *args: Any) -> None:
        self.calls.append((operation, *args))
        queued = self.queued_gates.get(operation)
        if queued:
            await queued.pop(0).wait()
        gate = self.gates.get(operation)
        if gate is not None:
            await gate.wait()
        if operation in self.failing:
            raise StoreError(self.FAILURE_MESSAGES[operation], status_code=500)

    def _index(self, note_id: NoteId) -> int:
        for index, note in enumerate(self.notes):
            if note.id == note_id:
                return index
        raise StoreError("Not found", status_code=404)

    async def list_notes(self) -> list[Note]:
        await self._enter("list")
        return list(self.notes)

    async def create_note(self, title: str, content: str) -> None:
        await self._enter("create", title, content)
        self.notes.append(Note(id=self._next_id, title=title, content=content))
        self._next_id += 1

    async def update_note(self, note_id: NoteId, title: str, content: str) -> None:
        await self._enter("update", note_id, title, content)
        index = self._index(note_id)
        self.notes[index] = Note(id=note_id, title=title, content=content)

    async def delete_note(self, note_id: NoteId) -> None:
        await self._enter("delete", note_id)
        del self.notes[self._index(note_id)]

    async def close(self) -> None:
        self.closed = True

    def count(self, operation: str) -> int:
        return sum(1 for call in self.calls if call[0] == operation)


# =============================================================================
# Note Fixtures
# =============================================================================


@pytest.fixture
def groceries() -> Note:
    return Note(id=1, title="Groceries", content="milk, eggs")


@pytest.fixture
def sample_notes(groceries: Note) -> list[Note]:
    return [
        groceries,
        Note(id=2, title="Todo", content="Call the plumber"),
        Note(id=3, title="Ideas", content="A MILKshake stand"),
    ]


@pytest.fixture
def fake_store(sample_notes: list[Note]) -> FakeNotesStore:
    return FakeNotesStore(sample_notes)


@pytest.fixture
def empty_store() -> FakeNotesStore:
    return FakeNotesStore()


@pytest.fixture
def make_store() -> type[FakeNotesStore]:
    """Provide FakeNotesStore for tests that need a custom collection."""
    return FakeNotesStore
