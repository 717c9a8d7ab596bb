"""
Interaction Mode Controller.

Pure reducer over SessionState: reduce(state, event, options) returns the
next state and the effects the runtime must perform. Nothing here touches
the network, so every transition is testable on plain values.

Modes:
    Browsing          - default; edit and delete are reachable only from here
    Editing(target)   - target None creates, otherwise edits target
    ConfirmingDelete  - waiting for the user to confirm a delete

Events that do not apply to the current mode leave the state unchanged.
"""

from collections.abc import Callable
from dataclasses import replace

from notekeeper.core.exceptions import ValidationError
from notekeeper.schemas.note import MAX_CONTENT_LENGTH, MAX_TITLE_LENGTH
from notekeeper.session.state import (
    TITLE_REQUIRED,
    Browsing,
    ConfirmingDelete,
    CreateNote,
    DeleteCancelled,
    DeleteConfirmed,
    DeleteNote,
    DeleteRequested,
    DraftContentChanged,
    DraftTitleChanged,
    EditorCancelled,
    EditorSubmitted,
    Editing,
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
    Transition,
    UpdateNote,
    ValidationFailed,
)

DEFAULT_OPTIONS = SessionOptions()


def check_draft(title: str, content: str) -> None:
    """
    Validate a draft before it is sent to the store.

    Raises:
        ValidationError: If the title is blank or a field is over its limit.
    """
    if not title.strip():
        raise ValidationError(TITLE_REQUIRED, details={"field": "title"})
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(
            f"Title must be {MAX_TITLE_LENGTH} characters or fewer.",
            details={"field": "title"},
        )
    if len(content) > MAX_CONTENT_LENGTH:
        raise ValidationError(
            f"Content must be {MAX_CONTENT_LENGTH} characters or fewer.",
            details={"field": "content"},
        )


def validate_draft(title: str, content: str) -> str | None:
    """Return the validation message for a draft, or None if it may be sent."""
    try:
        check_draft(title, content)
    except ValidationError as e:
        return e.message
    return None


def _stay(state: SessionState) -> Transition:
    return Transition(state)


def _close_editor(state: SessionState) -> SessionState:
    return replace(state, mode=Browsing(), draft_title="", draft_content="")


# =============================================================================
# Handlers
# =============================================================================


def _on_session_started(state, event, options):
    return Transition(replace(state, loading=True, error=None), (LoadNotes(),))


def _on_refresh_requested(state, event, options):
    return Transition(state, (LoadNotes(),))


def _on_search_changed(state, event, options):
    return Transition(replace(state, search=event.term))


def _on_new_note(state, event, options):
    if not isinstance(state.mode, Browsing):
        return _stay(state)
    return Transition(replace(state, mode=Editing(None), draft_title="", draft_content=""))


def _on_note_activated(state, event, options):
    if not isinstance(state.mode, Browsing):
        return _stay(state)
    note = event.note
    return Transition(
        replace(
            state,
            mode=Editing(note),
            draft_title=note.title[:MAX_TITLE_LENGTH],
            draft_content=note.content[:MAX_CONTENT_LENGTH],
        )
    )


def _on_draft_title(state, event, options):
    if not isinstance(state.mode, Editing):
        return _stay(state)
    return Transition(replace(state, draft_title=event.text[:MAX_TITLE_LENGTH]))


def _on_draft_content(state, event, options):
    if not isinstance(state.mode, Editing):
        return _stay(state)
    return Transition(replace(state, draft_content=event.text[:MAX_CONTENT_LENGTH]))


def _on_editor_cancelled(state, event, options):
    if not isinstance(state.mode, Editing):
        return _stay(state)
    return Transition(replace(_close_editor(state), error=None))


def _on_editor_submitted(state, event, options):
    mode = state.mode
    if not isinstance(mode, Editing) or mode.pending:
        return _stay(state)
    message = validate_draft(state.draft_title, state.draft_content)
    if message is not None:
        return Transition(replace(state, error=message))
    if mode.is_create:
        effect = CreateNote(state.draft_title, state.draft_content)
    else:
        effect = UpdateNote(mode.target.id, state.draft_title, state.draft_content)
    return Transition(state, (effect,))


def _on_delete_requested(state, event, options):
    if not isinstance(state.mode, Browsing):
        return _stay(state)
    return Transition(replace(state, mode=ConfirmingDelete(event.note_id)))


def _on_delete_cancelled(state, event, options):
    if not isinstance(state.mode, ConfirmingDelete):
        return _stay(state)
    return Transition(replace(state, mode=Browsing()))


def _on_delete_confirmed(state, event, options):
    mode = state.mode
    if not isinstance(mode, ConfirmingDelete):
        return _stay(state)
    return Transition(replace(state, mode=Browsing()), (DeleteNote(mode.target_id),))


def _on_validation_failed(state, event, options):
    return Transition(replace(state, error=event.message))


def _on_refresh_started(state, event, options):
    if event.clear_error:
        return Transition(replace(state, loading=True, error=None))
    return Transition(replace(state, loading=True))


def _on_refresh_succeeded(state, event, options):
    return Transition(replace(state, notes=tuple(event.notes), loading=False))


def _on_refresh_failed(state, event, options):
    return Transition(replace(state, loading=False, error=event.message))


def _on_mutation_started(state, event, options):
    mode = state.mode
    if event.submission is not None and isinstance(mode, Editing) and not mode.pending:
        return Transition(replace(state, mode=replace(mode, submission=event.submission), error=None))
    return Transition(replace(state, error=None))


def _on_mutation_failed(state, event, options):
    return Transition(replace(state, error=event.message))


def _on_mutation_settled(state, event, options):
    mode = state.mode
    if event.submission is None or not isinstance(mode, Editing) or mode.submission != event.submission:
        return _stay(state)
    if event.mutation_failed and not options.close_on_mutation_failure:
        return Transition(replace(state, mode=replace(mode, submission=None)))
    return Transition(_close_editor(state))


Handler = Callable[[SessionState, Event, SessionOptions], Transition]

_HANDLERS: dict[type, Handler] = {
    SessionStarted: _on_session_started,
    RefreshRequested: _on_refresh_requested,
    SearchChanged: _on_search_changed,
    NewNoteRequested: _on_new_note,
    NoteActivated: _on_note_activated,
    DraftTitleChanged: _on_draft_title,
    DraftContentChanged: _on_draft_content,
    EditorCancelled: _on_editor_cancelled,
    EditorSubmitted: _on_editor_submitted,
    DeleteRequested: _on_delete_requested,
    DeleteCancelled: _on_delete_cancelled,
    DeleteConfirmed: _on_delete_confirmed,
    ValidationFailed: _on_validation_failed,
    RefreshStarted: _on_refresh_started,
    RefreshSucceeded: _on_refresh_succeeded,
    RefreshFailed: _on_refresh_failed,
    MutationStarted: _on_mutation_started,
    MutationFailed: _on_mutation_failed,
    MutationSettled: _on_mutation_settled,
}


def reduce(
    state: SessionState,
    event: Event,
    options: SessionOptions = DEFAULT_OPTIONS,
) -> Transition:
    """
    Apply one event to the session state.

    Args:
        state: Current state
        event: Event to apply
        options: Behaviour flags

    Returns:
        Transition with the next state and the effects to perform, in order.

    Raises:
        TypeError: If event is not a known session event.
    """
    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise TypeError(f"Unknown session event: {type(event).__name__}")
    return handler(state, event, options)
