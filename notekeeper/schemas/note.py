"""
Note Schemas.

Pydantic schemas for Notes Store request/response validation.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_TITLE_LENGTH = 80
MAX_CONTENT_LENGTH = 800

NoteId = str | int
"""Server-assigned identifier. Opaque to the client; never generated locally."""


class Note(BaseModel):
    """A note as returned by the store. Immutable on the client."""

    id: NoteId = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(default="", description="Note content")

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("content", mode="before")
    @classmethod
    def _null_content(cls, value: object) -> object:
        return "" if value is None else value


class NoteWrite(BaseModel):
    """Request body for creating or updating a note."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=MAX_TITLE_LENGTH,
        description="Note title",
        examples=["Groceries"],
    )
    content: str = Field(
        default="",
        max_length=MAX_CONTENT_LENGTH,
        description="Note content",
        examples=["milk, eggs"],
    )
