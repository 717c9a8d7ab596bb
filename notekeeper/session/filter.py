"""
Search Filter.

Pure derivation of the visible notes from the collection and the search term.
No side effects and no I/O; recomputed whenever either input changes.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from notekeeper.schemas.note import Note
from notekeeper.session.state import SessionState

NO_NOTES_MESSAGE = "No notes yet. Start by adding one!"
NO_MATCH_MESSAGE = "No notes found for search."
LOADING_MESSAGE = "Loading…"


def matches(note: Note, term: str) -> bool:
    """Case-insensitive substring match on title or content. term must be lowercased."""
    return term in note.title.lower() or term in note.content.lower()


def filter_notes(notes: Sequence[Note], term: str) -> tuple[Note, ...]:
    """
    Return the notes matching term, preserving collection order.

    A blank term returns the whole collection unchanged.
    """
    needle = term.strip().lower()
    if not needle:
        return tuple(notes)
    return tuple(note for note in notes if matches(note, needle))


def empty_message(notes: Sequence[Note], filtered: Sequence[Note]) -> str | None:
    """Pick the message shown when nothing is listed, or None when something is."""
    if not notes:
        return NO_NOTES_MESSAGE
    if not filtered:
        return NO_MATCH_MESSAGE
    return None


@dataclass(frozen=True)
class NotesView:
    """What the list surface renders."""

    notes: tuple[Note, ...]
    loading: bool
    message: str | None

    @property
    def is_empty(self) -> bool:
        return not self.notes


def build_view(state: SessionState) -> NotesView:
    """Derive the list view. Loading takes precedence over the empty messages."""
    filtered = filter_notes(state.notes, state.search)
    if state.loading:
        return NotesView(notes=filtered, loading=True, message=LOADING_MESSAGE)
    return NotesView(
        notes=filtered,
        loading=False,
        message=empty_message(state.notes, filtered),
    )


def preview(content: str, limit: int = 120) -> str:
    """Shorten content for a list row, marking the cut with an ellipsis."""
    if len(content) > limit:
        return content[:limit] + "…"
    return content
