"""
Note Session Runtime.

Owns the current SessionState, feeds events through the reducer, notifies
listeners, and performs the resulting effects against a NotesStore.

Store failures never escape the session: they end up in the error slot.
Within one sequence the refresh only starts after the mutation settles.
Overlapping sequences are last-refresh-wins unless serialize_mutations is
set, in which case sequences run one at a time through a single lock.

Usage:
    session = NoteSession(NotesStoreClient())
    await session.start()
    session.open_create()
    session.set_draft_title("Groceries")
    await session.submit_editor()
    session.view.notes
"""

import asyncio
import itertools
from collections.abc import Awaitable, Callable, Iterable

from notekeeper.client.store import NotesStore
from notekeeper.core.exceptions import StoreError, ValidationError
from notekeeper.core.logging import get_logger, log_with_source
from notekeeper.schemas.note import Note, NoteId
from notekeeper.session.filter import NotesView, build_view
from notekeeper.session.reducer import check_draft, reduce
from notekeeper.session.state import (
    CreateNote,
    DeleteCancelled,
    DeleteConfirmed,
    DeleteNote,
    DeleteRequested,
    DraftContentChanged,
    DraftTitleChanged,
    EditorCancelled,
    EditorSubmitted,
    Effect,
    Event,
    LoadNotes,
    MutationFailed,
    MutationSettled,
    MutationStarted,
    NewNoteRequested,
    NoteActivated,
    RefreshFailed,
    RefreshRequested,
    RefreshStarted,
    RefreshSucceeded,
    SearchChanged,
    SessionOptions,
    SessionStarted,
    SessionState,
    UpdateNote,
    ValidationFailed,
)

logger = get_logger(__name__)

Listener = Callable[[SessionState], None]


class NoteSession:
    """State container plus the async orchestration of store calls."""

    def __init__(self, store: NotesStore, options: SessionOptions | None = None) -> None:
        self.store = store
        self.options = options or SessionOptions()
        self._state = SessionState()
        self._listeners: list[Listener] = []
        self._sequence_lock = asyncio.Lock() if self.options.serialize_mutations else None
        self._submissions = itertools.count(1)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def view(self) -> NotesView:
        return build_view(self._state)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called after every state change. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, event: Event) -> tuple[Effect, ...]:
        """Apply an event and notify listeners. Returns effects for the caller to perform."""
        transition = reduce(self._state, event, self.options)
        changed = transition.state != self._state
        self._state = transition.state
        if changed:
            for listener in list(self._listeners):
                listener(self._state)
        return transition.effects

    async def perform(self, effect: Effect) -> None:
        """Run one effect against the store."""
        if isinstance(effect, LoadNotes):
            await self.refresh()
        elif isinstance(effect, CreateNote):
            await self.create_and_refresh(effect.title, effect.content)
        elif isinstance(effect, UpdateNote):
            await self.update_and_refresh(effect.note_id, effect.title, effect.content)
        elif isinstance(effect, DeleteNote):
            await self.delete_and_refresh(effect.note_id)
        else:
            raise TypeError(f"Unknown session effect: {type(effect).__name__}")

    async def _perform_all(self, effects: Iterable[Effect]) -> None:
        for effect in effects:
            await self.perform(effect)

    # -------------------------------------------------------------------------
    # Collection operations
    # -------------------------------------------------------------------------

    async def start(self) -> None:
        """Run the initial refresh. Loading stays true until it settles."""
        log_with_source(logger, "session", "info", "Session started")
        await self._perform_all(self.dispatch(SessionStarted()))

    async def refresh(self, clear_error: bool = True) -> None:
        """
        Replace the collection with the store's current list.

        On failure the previous collection is kept and the error slot is set.
        """
        self.dispatch(RefreshStarted(clear_error=clear_error))
        try:
            notes = await self.store.list_notes()
        except StoreError as e:
            log_with_source(
                logger, "session", "warning", "Refresh failed",
                error=e.message, status_code=e.status_code,
            )
            self.dispatch(RefreshFailed(e.message))
            return
        log_with_source(logger, "session", "debug", "Notes refreshed", count=len(notes))
        self.dispatch(RefreshSucceeded(tuple(notes)))

    async def create_and_refresh(self, title: str, content: str) -> None:
        """Create a note then refresh. A blank title is rejected without a store call."""
        try:
            check_draft(title, content)
        except ValidationError as e:
            self.dispatch(ValidationFailed(e.message))
            return
        await self._run_sequence(
            "create",
            lambda: self.store.create_note(title, content),
            submission=next(self._submissions),
        )

    async def update_and_refresh(self, note_id: NoteId, title: str, content: str) -> None:
        """Update a note then refresh. A blank title is rejected without a store call."""
        try:
            check_draft(title, content)
        except ValidationError as e:
            self.dispatch(ValidationFailed(e.message))
            return
        await self._run_sequence(
            "update",
            lambda: self.store.update_note(note_id, title, content),
            submission=next(self._submissions),
            note_id=note_id,
        )

    async def delete_and_refresh(self, note_id: NoteId) -> None:
        """Delete a note then refresh."""
        await self._run_sequence(
            "delete",
            lambda: self.store.delete_note(note_id),
            note_id=note_id,
        )

    async def _run_sequence(
        self,
        action: str,
        mutate: Callable[[], Awaitable[None]],
        submission: int | None = None,
        note_id: NoteId | None = None,
    ) -> None:
        self.dispatch(MutationStarted(submission=submission))
        if self._sequence_lock is None:
            failed = await self._mutate_then_refresh(action, mutate, note_id)
        else:
            async with self._sequence_lock:
                failed = await self._mutate_then_refresh(action, mutate, note_id)
        self.dispatch(MutationSettled(mutation_failed=failed, submission=submission))

    async def _mutate_then_refresh(
        self,
        action: str,
        mutate: Callable[[], Awaitable[None]],
        note_id: NoteId | None,
    ) -> bool:
        """Run one mutation then refresh. Returns True if the mutation failed."""
        failed = False
        try:
            await mutate()
        except StoreError as e:
            failed = True
            log_with_source(
                logger, "session", "warning", "Mutation failed",
                action=action, note_id=note_id, error=e.message, status_code=e.status_code,
            )
            self.dispatch(MutationFailed(e.message))
        else:
            log_with_source(logger, "session", "info", "Mutation applied", action=action, note_id=note_id)

        await self.refresh(clear_error=False)
        return failed

    # -------------------------------------------------------------------------
    # User actions
    # -------------------------------------------------------------------------

    def set_search(self, term: str) -> None:
        self.dispatch(SearchChanged(term))

    def open_create(self) -> None:
        self.dispatch(NewNoteRequested())

    def open_edit(self, note: Note) -> None:
        self.dispatch(NoteActivated(note))

    def set_draft_title(self, text: str) -> None:
        self.dispatch(DraftTitleChanged(text))

    def set_draft_content(self, text: str) -> None:
        self.dispatch(DraftContentChanged(text))

    def cancel_editor(self) -> None:
        self.dispatch(EditorCancelled())

    async def submit_editor(self) -> None:
        """Validate the draft and, if valid, run the create or update sequence."""
        await self._perform_all(self.dispatch(EditorSubmitted()))

    def request_delete(self, note_id: NoteId) -> None:
        self.dispatch(DeleteRequested(note_id))

    def cancel_delete(self) -> None:
        self.dispatch(DeleteCancelled())

    async def confirm_delete(self) -> None:
        """Close the confirmation immediately, then run the delete sequence."""
        await self._perform_all(self.dispatch(DeleteConfirmed()))

    async def request_refresh(self) -> None:
        await self._perform_all(self.dispatch(RefreshRequested()))
