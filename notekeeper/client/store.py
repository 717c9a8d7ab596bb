"""
Notes Store Client.

Async HTTP client for the remote Notes Store. Exposes the four store
operations and normalizes every failure (non-2xx response, transport error,
malformed body) into a single StoreError carrying a user-facing message.

Each operation is attempted exactly once. There are no retries and no
cancellation; the only timeout is the one configured in application.yaml
(none by default).

Usage:
    client = NotesStoreClient(base_url="http://localhost:8000/api")
    notes = await client.list_notes()
    await client.create_note("Groceries", "milk, eggs")
"""

from typing import Any, Protocol
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from notekeeper.core.config import get_store_base_url
from notekeeper.core.exceptions import StoreError
from notekeeper.core.logging import get_logger, log_with_source
from notekeeper.schemas.note import Note, NoteId, NoteWrite

logger = get_logger(__name__)

LIST_FAILED = "Failed to load notes."
CREATE_FAILED = "Failed to create note."
UPDATE_FAILED = "Failed to update note."
DELETE_FAILED = "Failed to delete note."

_notes_adapter = TypeAdapter(list[Note])


class NotesStore(Protocol):
    """The four remote operations the note session depends on, plus close()."""

    async def list_notes(self) -> list[Note]: ...

    async def create_note(self, title: str, content: str) -> None: ...

    async def update_note(self, note_id: NoteId, title: str, content: str) -> None: ...

    async def delete_note(self, note_id: NoteId) -> None: ...

    async def close(self) -> None: ...


def _note_path(note_id: NoteId) -> str:
    return f"/notes/{quote(str(note_id), safe='')}"


class NotesStoreClient:
    """
    HTTP implementation of NotesStore.

    Features:
    - Base URL and timeout from config/settings/application.yaml
    - X-Frontend-ID header for server-side log routing
    - Structured logging of requests/responses
    - Failures normalized to StoreError

    Usage:
        client = NotesStoreClient()
        notes = await client.list_notes()
        await client.close()
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        frontend_id: str = "tui",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the store client.

        Args:
            base_url: Store base URL including the API prefix. If None, reads from config.
            timeout: Request timeout in seconds. If None, reads from config
                (where null means no timeout).
            frontend_id: Value sent in the X-Frontend-ID header.
            transport: Optional httpx transport, used by tests.
        """
        try:
            config_base_url, config_timeout = get_store_base_url()
        except Exception as e:
            if base_url is None:
                raise RuntimeError(
                    "Could not determine Notes Store URL from config/settings/application.yaml"
                ) from e
            config_base_url = base_url
            config_timeout = None

        self.base_url = (base_url or config_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config_timeout
        self.frontend_id = frontend_id
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"X-Frontend-ID": self.frontend_id},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        failure_message: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Send one request and return a 2xx response.

        Raises:
            StoreError: On transport failure or any non-2xx status.
        """
        client = await self._get_client()

        log_with_source(logger, "client", "debug", "Store request", method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger,
                "client",
                "error",
                "Store request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise StoreError(failure_message) from e

        log_with_source(
            logger,
            "client",
            "debug",
            "Store response",
            method=method,
            path=path,
            status_code=response.status_code,
        )

        if not response.is_success:
            log_with_source(
                logger,
                "client",
                "warning",
                "Store rejected request",
                method=method,
                path=path,
                status_code=response.status_code,
            )
            raise StoreError(failure_message, status_code=response.status_code)

        return response

    async def list_notes(self) -> list[Note]:
        """
        Fetch the full collection in store order.

        A null body is an empty collection.

        Raises:
            StoreError: On failure or a body that is not a list of notes.
        """
        response = await self._request("GET", "/notes", LIST_FAILED)
        try:
            data = response.json()
            return _notes_adapter.validate_python(data or [])
        except (ValueError, PydanticValidationError) as e:
            log_with_source(
                logger,
                "client",
                "error",
                "Malformed notes payload",
                status_code=response.status_code,
                error=str(e),
            )
            raise StoreError(LIST_FAILED, status_code=response.status_code) from e

    async def create_note(self, title: str, content: str) -> None:
        """Create a note. The created note in the response body is not consumed."""
        body = NoteWrite(title=title, content=content)
        await self._request("POST", "/notes", CREATE_FAILED, json=body.model_dump())

    async def update_note(self, note_id: NoteId, title: str, content: str) -> None:
        """Replace a note's title and content."""
        body = NoteWrite(title=title, content=content)
        await self._request("PUT", _note_path(note_id), UPDATE_FAILED, json=body.model_dump())

    async def delete_note(self, note_id: NoteId) -> None:
        """Delete a note."""
        await self._request("DELETE", _note_path(note_id), DELETE_FAILED)

