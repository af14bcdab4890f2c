from typing import Optional

from pydantic import BaseModel, Field, field_validator

from pocketnotes.models.auth import UserOut
from pocketnotes.notifications import Notification


class NoteDraft(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1, max_length=50_000)

    @field_validator("title", "content", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        # whitespace-only input must fail min_length
        if isinstance(v, str):
            return v.strip()
        return v


class NoteSubmit(NoteDraft):
    editing_id: Optional[str] = None

    @field_validator("editing_id", mode="before")
    @classmethod
    def blank_editing_id_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class NoteOut(BaseModel):
    id: str
    title: str
    content: str
    user: str
    createdAt: str
    updatedAt: str


class NoteCardOut(BaseModel):
    id: str
    title: str
    content: str
    content_lines: list[str]
    meta_label: str
    when: str
    createdAt: str
    updatedAt: str


class NotesViewOut(BaseModel):
    authenticated: bool
    user: Optional[UserOut] = None
    count: int
    count_label: str
    empty: bool
    notes: list[NoteCardOut]


class NoteSavedOut(BaseModel):
    note: Optional[NoteOut] = None
    view: NotesViewOut
    notification: Notification


class NoteDeletedOut(BaseModel):
    deleted: bool
    view: NotesViewOut
    notification: Notification


class NoteEditOut(BaseModel):
    note: NoteOut
    notification: Notification
