# Pydantic schemas package
from notekeeper.schemas.note import (
    MAX_CONTENT_LENGTH,
    MAX_TITLE_LENGTH,
    Note,
    NoteId,
    NoteWrite,
)

__all__ = [
    "MAX_CONTENT_LENGTH",
    "MAX_TITLE_LENGTH",
    "Note",
    "NoteId",
    "NoteWrite",
]
