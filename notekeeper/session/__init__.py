"""
Note Session.

The client-side note-session state machine:

- state.py: frozen state container, events and effects
- reducer.py: pure transitions (Interaction Mode Controller)
- filter.py: search filter and list view derivation
- session.py: NoteSession runtime performing effects against a NotesStore
"""

from notekeeper.session.filter import NotesView, build_view, empty_message, filter_notes
from notekeeper.session.reducer import check_draft, reduce, validate_draft
from notekeeper.session.session import NoteSession
from notekeeper.session.state import (
    Browsing,
    ConfirmingDelete,
    Editing,
    SessionOptions,
    SessionState,
)

__all__ = [
    "Browsing",
    "ConfirmingDelete",
    "Editing",
    "NoteSession",
    "NotesView",
    "SessionOptions",
    "SessionState",
    "build_view",
    "empty_message",
    "filter_notes",
    "check_draft",
    "reduce",
    "validate_draft",
]
