"""
Notekeeper TUI.

Terminal rendering of a NoteSession. The app holds no note state of its own:
it subscribes to the session, re-renders on every state change and opens or
closes the editor and delete-confirmation modals to match the session mode.

Usage:
    notekeeper --service tui
"""

from __future__ import annotations

from rich.text import Text
from textual import events, on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import (
    Button,
    Footer,
    Header,
    Input,
    Label,
    OptionList,
    Static,
    TextArea,
)
from textual.widgets.option_list import Option

from notekeeper.core.logging import get_logger, log_with_source
from notekeeper.schemas.note import MAX_CONTENT_LENGTH, MAX_TITLE_LENGTH
from notekeeper.session.filter import NotesView, build_view, preview
from notekeeper.session.session import NoteSession
from notekeeper.session.state import ConfirmingDelete, Editing, SessionState

logger = get_logger(__name__)


class EditorScreen(ModalScreen[None]):
    """Create/edit dialog bound to the session drafts."""

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, session: NoteSession, mode: Editing) -> None:
        super().__init__()
        self.session = session
        self.mode = mode
        self._error = Static(session.state.error or "", id="editor-error")

    def compose(self) -> ComposeResult:
        state = self.session.state
        with Vertical(id="editor-dialog"):
            yield Label("Create Note" if self.mode.is_create else "Edit Note", id="editor-heading")
            yield Input(
                value=state.draft_title,
                placeholder="Note title",
                max_length=MAX_TITLE_LENGTH,
                id="editor-title",
            )
            yield TextArea(state.draft_content, id="editor-content")
            with Horizontal(id="editor-buttons"):
                yield Button("Cancel", id="editor-cancel")
                yield Button(
                    "Create" if self.mode.is_create else "Save",
                    variant="primary",
                    id="editor-save",
                )
            yield self._error

    def show_error(self, message: str | None) -> None:
        self._error.update(message or "")

    @on(Input.Changed, "#editor-title")
    def on_title_changed(self, event: Input.Changed) -> None:
        self.session.set_draft_title(event.value)

    @on(TextArea.Changed, "#editor-content")
    def on_content_changed(self, event: TextArea.Changed) -> None:
        text_area = event.text_area
        # TextArea has no max_length; trim so the widget never shows unsaved text.
        if len(text_area.text) > MAX_CONTENT_LENGTH:
            text_area.load_text(text_area.text[:MAX_CONTENT_LENGTH])
            text_area.move_cursor(text_area.document.end)
        self.session.set_draft_content(text_area.text)

    @on(Input.Submitted, "#editor-title")
    @on(Button.Pressed, "#editor-save")
    def on_save(self) -> None:
        self.app.submit_editor()

    @on(Button.Pressed, "#editor-cancel")
    def on_cancel(self) -> None:
        self.action_cancel()

    def on_click(self, event: events.Click) -> None:
        if event.widget is self:
            self.action_cancel()

    def action_cancel(self) -> None:
        self.session.cancel_editor()


class ConfirmDeleteScreen(ModalScreen[None]):
    """Delete confirmation dialog."""

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, session: NoteSession) -> None:
        super().__init__()
        self.session = session

    def compose(self) -> ComposeResult:
        with Vertical(id="delete-dialog"):
            yield Label("Delete this note?")
            with Horizontal(id="delete-buttons"):
                yield Button("Cancel", id="delete-cancel")
                yield Button("Delete", variant="warning", id="delete-confirm")

    @on(Button.Pressed, "#delete-cancel")
    def on_cancel(self) -> None:
        self.action_cancel()

    @on(Button.Pressed, "#delete-confirm")
    def on_confirm(self) -> None:
        self.app.confirm_delete()

    def on_click(self, event: events.Click) -> None:
        if event.widget is self:
            self.action_cancel()

    def action_cancel(self) -> None:
        self.session.cancel_delete()


class NotekeeperApp(App):
    """Browse, search, create, edit and delete notes."""

    TITLE = "notekeeper"
    SUB_TITLE = "Minimal notes"

    CSS = """
    #search {
        dock: top;
        margin: 0 1;
    }

    #notes {
        height: 1fr;
        border: solid $primary;
    }

    #notes-message {
        padding: 1 2;
        color: $text-muted;
    }

    EditorScreen, ConfirmDeleteScreen {
        align: center middle;
    }

    #editor-dialog {
        width: 64;
        height: auto;
        padding: 1 2;
        border: thick $primary;
        background: $surface;
    }

    #editor-heading {
        text-style: bold;
        color: $primary;
    }

    #editor-content {
        height: 8;
    }

    #editor-buttons, #delete-buttons {
        height: auto;
        align-horizontal: right;
    }

    #editor-error {
        color: $error;
    }

    #delete-dialog {
        width: 40;
        height: auto;
        padding: 1 2;
        border: thick $warning;
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("f2", "new_note", "New"),
        Binding("f8", "delete_note", "Delete"),
        Binding("f5", "reload", "Refresh"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, session: NoteSession) -> None:
        super().__init__()
        self.session = session
        self._view: NotesView | None = None
        self._notes_list = OptionList(id="notes")
        self._message = Static("", id="notes-message")
        self._editor: EditorScreen | None = None
        self._confirm: ConfirmDeleteScreen | None = None
        self._unsubscribe = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(placeholder="Search notes…", id="search")
        yield self._notes_list
        yield self._message
        yield Footer()

    def on_mount(self) -> None:
        self._unsubscribe = self.session.subscribe(self._render_state)
        self._render_state(self.session.state)
        self.start_session()

    async def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
        # The HTTP client belongs to this event loop; close it before the loop ends.
        await self.session.store.close()

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _render_state(self, state: SessionState) -> None:
        view = build_view(state)
        if view != self._view:
            self._render_view(view)
            self._view = view
        self._sync_modals(state)

    def _render_view(self, view: NotesView) -> None:
        self._notes_list.clear_options()
        self._notes_list.add_options(
            Option(
                Text.assemble((note.title, "bold"), "\n", preview(note.content)),
                id=str(note.id),
            )
            for note in view.notes
        )
        self._message.update(view.message or "")

    def _sync_modals(self, state: SessionState) -> None:
        mode = state.mode
        if isinstance(mode, Editing):
            if self._editor is None:
                self._editor = EditorScreen(self.session, mode)
                self.push_screen(self._editor)
            else:
                self._editor.show_error(state.error)
        elif self._editor is not None:
            self._close(self._editor)
            self._editor = None

        if isinstance(mode, ConfirmingDelete):
            if self._confirm is None:
                self._confirm = ConfirmDeleteScreen(self.session)
                self.push_screen(self._confirm)
        elif self._confirm is not None:
            self._close(self._confirm)
            self._confirm = None

    def _close(self, screen: ModalScreen) -> None:
        if self.screen is screen:
            self.pop_screen()

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    @on(Input.Changed, "#search")
    def on_search_changed(self, event: Input.Changed) -> None:
        self.session.set_search(event.value)

    @on(OptionList.OptionSelected, "#notes")
    def on_note_selected(self, event: OptionList.OptionSelected) -> None:
        if self._view is None or event.option_index >= len(self._view.notes):
            return
        self.session.open_edit(self._view.notes[event.option_index])

    def action_new_note(self) -> None:
        self.session.open_create()

    def action_delete_note(self) -> None:
        highlighted = self._notes_list.highlighted
        if self._view is None or highlighted is None or highlighted >= len(self._view.notes):
            return
        self.session.request_delete(self._view.notes[highlighted].id)

    def action_reload(self) -> None:
        self.refresh_notes()

    @work(exclusive=False)
    async def start_session(self) -> None:
        await self.session.start()

    @work(exclusive=False)
    async def refresh_notes(self) -> None:
        await self.session.request_refresh()

    @work(exclusive=False)
    async def submit_editor(self) -> None:
        log_with_source(logger, "tui", "debug", "Editor submitted")
        await self.session.submit_editor()

    @work(exclusive=False)
    async def confirm_delete(self) -> None:
        log_with_source(logger, "tui", "debug", "Delete confirmed")
        await self.session.confirm_delete()
