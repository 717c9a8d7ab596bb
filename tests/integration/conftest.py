"""
Integration Test Fixtures.

A small in-memory Notes Store served through httpx.MockTransport, so the full
path from session action to HTTP request and back is exercised without a
running server.
"""

import json
from collections.abc import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from notekeeper.client.store import NotesStoreClient
from notekeeper.session.session import NoteSession


# =============================================================================
# Notes Server
# =============================================================================


class InMemoryNotesServer:
    """Minimal REST notes server for MockTransport."""

    def __init__(self, notes=None):
        self.notes = list(notes or [])
        self.next_id = max((n["id"] for n in self.notes), default=0) + 1
        self.fail_methods: set[str] = set()
        self.requests: list[tuple[str, str]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.method, request.url.path))
        if request.method in self.fail_methods:
            return httpx.Response(500, json={"detail": "boom"})

        path = request.url.path.removeprefix("/api")
        if path == "/notes" and request.method == "GET":
            return httpx.Response(200, json=self.notes)
        if path == "/notes" and request.method == "POST":
            body = json.loads(request.content)
            note = {"id": self.next_id, **body}
            self.next_id += 1
            self.notes.append(note)
            return httpx.Response(201, json=note)

        note_id = int(path.rsplit("/", 1)[-1])
        index = next((i for i, n in enumerate(self.notes) if n["id"] == note_id), None)
        if index is None:
            return httpx.Response(404, json={"detail": "Not found"})
        if request.method == "PUT":
            self.notes[index] = {"id": note_id, **json.loads(request.content)}
            return httpx.Response(200, json=self.notes[index])
        if request.method == "DELETE":
            del self.notes[index]
            return httpx.Response(204)
        return httpx.Response(405)


# =============================================================================
# Session Fixtures
# =============================================================================


@pytest.fixture
def server() -> InMemoryNotesServer:
    return InMemoryNotesServer([{"id": 1, "title": "Groceries", "content": "milk, eggs"}])


@pytest_asyncio.fixture
async def session(server: InMemoryNotesServer) -> AsyncGenerator[NoteSession, None]:
    """NoteSession over NotesStoreClient wired to the in-memory server."""
    client = NotesStoreClient(
        base_url="http://notes.test/api",
        transport=httpx.MockTransport(server),
    )
    yield NoteSession(client)
    await client.close()
