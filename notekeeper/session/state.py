"""
Note-Session State.

Immutable state container for one note session, plus the events that drive
it and the effects it asks the runtime to perform. Every value here is a
frozen dataclass so transitions produce new states instead of mutating.

State:
    notes          - Collection as last fetched, in store order
    search         - Live search term
    loading        - True while a refresh is in flight (and at session start)
    mode           - Browsing | Editing | ConfirmingDelete
    draft_title    - Editor scratch text (meaningful only while Editing)
    draft_content  - Editor scratch text (meaningful only while Editing)
    error          - Most recent failure message, or None
"""

from dataclasses import dataclass, field

from notekeeper.schemas.note import Note, NoteId

TITLE_REQUIRED = "Title is required."


# =============================================================================
# Interaction modes
# =============================================================================


@dataclass(frozen=True)
class Browsing:
    """No modal surface visible."""


@dataclass(frozen=True)
class Editing:
    """
    Editor open. target=None creates a note, otherwise edits target.

    submission is the token of the sequence sent from this editor, or None
    while nothing is in flight. Only that sequence may close or unlock it.
    """

    target: Note | None = None
    submission: int | None = None

    @property
    def is_create(self) -> bool:
        return self.target is None

    @property
    def pending(self) -> bool:
        return self.submission is not None


@dataclass(frozen=True)
class ConfirmingDelete:
    """Delete confirmation open for one note."""

    target_id: NoteId


Mode = Browsing | Editing | ConfirmingDelete


@dataclass(frozen=True)
class SessionOptions:
    """Behaviour flags, usually built from application.yaml (session section)."""

    close_on_mutation_failure: bool = True
    serialize_mutations: bool = False


@dataclass(frozen=True)
class SessionState:
    notes: tuple[Note, ...] = ()
    search: str = ""
    loading: bool = True
    mode: Mode = field(default_factory=Browsing)
    draft_title: str = ""
    draft_content: str = ""
    error: str | None = None


# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True)
class SessionStarted:
    pass


@dataclass(frozen=True)
class RefreshRequested:
    pass


@dataclass(frozen=True)
class SearchChanged:
    term: str


@dataclass(frozen=True)
class NewNoteRequested:
    pass


@dataclass(frozen=True)
class NoteActivated:
    note: Note


@dataclass(frozen=True)
class DraftTitleChanged:
    text: str


@dataclass(frozen=True)
class DraftContentChanged:
    text: str


@dataclass(frozen=True)
class EditorCancelled:
    pass


@dataclass(frozen=True)
class EditorSubmitted:
    pass


@dataclass(frozen=True)
class DeleteRequested:
    note_id: NoteId


@dataclass(frozen=True)
class DeleteCancelled:
    pass


@dataclass(frozen=True)
class DeleteConfirmed:
    pass


@dataclass(frozen=True)
class ValidationFailed:
    message: str


@dataclass(frozen=True)
class RefreshStarted:
    clear_error: bool = True


@dataclass(frozen=True)
class RefreshSucceeded:
    notes: tuple[Note, ...]


@dataclass(frozen=True)
class RefreshFailed:
    message: str


@dataclass(frozen=True)
class MutationStarted:
    """A mutate-then-refresh sequence began. A submission token marks the open editor pending."""

    submission: int | None = None


@dataclass(frozen=True)
class MutationFailed:
    message: str


@dataclass(frozen=True)
class MutationSettled:
    """The sequence (mutation and its refresh) finished."""

    mutation_failed: bool = False
    submission: int | None = None


Event = (
    SessionStarted
    | RefreshRequested
    | SearchChanged
    | NewNoteRequested
    | NoteActivated
    | DraftTitleChanged
    | DraftContentChanged
    | EditorCancelled
    | EditorSubmitted
    | DeleteRequested
    | DeleteCancelled
    | DeleteConfirmed
    | ValidationFailed
    | RefreshStarted
    | RefreshSucceeded
    | RefreshFailed
    | MutationStarted
    | MutationFailed
    | MutationSettled
)


# =============================================================================
# Effects
# =============================================================================


@dataclass(frozen=True)
class LoadNotes:
    pass


@dataclass(frozen=True)
class CreateNote:
    title: str
    content: str


@dataclass(frozen=True)
class UpdateNote:
    note_id: NoteId
    title: str
    content: str


@dataclass(frozen=True)
class DeleteNote:
    note_id: NoteId


Effect = LoadNotes | CreateNote | UpdateNote | DeleteNote


@dataclass(frozen=True)
class Transition:
    state: SessionState
    effects: tuple[Effect, ...] = ()
