"""
Unit Tests for Note Schemas.
"""

import pytest
from pydantic import ValidationError

from notekeeper.schemas.note import MAX_CONTENT_LENGTH, MAX_TITLE_LENGTH, Note, NoteWrite


class TestNote:
    """Tests for the Note response schema."""

    def test_id_kept_as_given(self):
        assert Note(id=7, title="t").id == 7
        assert Note(id="7", title="t").id == "7"

    def test_null_content_becomes_empty(self):
        note = Note.model_validate({"id": "a1", "title": "t", "content": None})
        assert note.content == ""

    def test_missing_content_defaults_to_empty(self):
        assert Note.model_validate({"id": 1, "title": "t"}).content == ""

    def test_unknown_fields_ignored(self):
        note = Note.model_validate({"id": 1, "title": "t", "content": "", "owner": "x"})
        assert not hasattr(note, "owner")

    def test_missing_title_rejected(self):
        with pytest.raises(ValidationError):
            Note.model_validate({"id": 1})

    def test_immutable(self, groceries):
        with pytest.raises(ValidationError):
            groceries.title = "Changed"

    def test_equality_by_value(self, groceries):
        assert groceries == Note(id=1, title="Groceries", content="milk, eggs")


class TestNoteWrite:
    """Tests for the create/update request body."""

    def test_dump(self):
        body = NoteWrite(title="Todo", content="buy milk")
        assert body.model_dump() == {"title": "Todo", "content": "buy milk"}

    def test_content_optional(self):
        assert NoteWrite(title="Todo").content == ""

    def test_title_not_trimmed(self):
        assert NoteWrite(title="  Todo ").title == "  Todo "

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            NoteWrite(title="")

    def test_length_limits(self):
        NoteWrite(title="t" * MAX_TITLE_LENGTH, content="c" * MAX_CONTENT_LENGTH)
        with pytest.raises(ValidationError):
            NoteWrite(title="t" * (MAX_TITLE_LENGTH + 1))
        with pytest.raises(ValidationError):
            NoteWrite(title="t", content="c" * (MAX_CONTENT_LENGTH + 1))
