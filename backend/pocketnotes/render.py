"""Pure projection from workspace state to the list UI's view model."""
from __future__ import annotations

import math
from datetime import datetime
from typing import Iterable, Optional

from pocketnotes.models.auth import UserOut
from pocketnotes.models.notes import NoteCardOut, NotesViewOut
from pocketnotes.storage.notes_store import Note
from pocketnotes.storage.session_store import User
from pocketnotes.utils.clock import parse_iso, utc_now

_DAY_SECONDS = 24 * 60 * 60


def format_relative_date(ts: str, now: Optional[datetime] = None) -> str:
    now = now or utc_now()
    dt = parse_iso(ts)
    days = math.ceil(abs((now - dt).total_seconds()) / _DAY_SECONDS)

    if days <= 1:
        return "Today at " + dt.strftime("%H:%M")
    if days == 2:
        return "Yesterday at " + dt.strftime("%H:%M")
    if days <= 7:
        return f"{days} days ago"
    return dt.date().isoformat()


def count_label(count: int) -> str:
    return f"{count} {'note' if count == 1 else 'notes'}"


def note_card(note: Note, now: Optional[datetime] = None) -> NoteCardOut:
    return NoteCardOut(
        id=note.id,
        title=note.title,
        content=note.content,
        content_lines=note.content.split("\n"),
        meta_label="Created" if note.created_at == note.updated_at else "Updated",
        when=format_relative_date(note.updated_at, now),
        createdAt=note.created_at,
        updatedAt=note.updated_at,
    )


def build_view_model(
    notes: Iterable[Note],
    user: Optional[User],
    now: Optional[datetime] = None,
) -> NotesViewOut:
    """Build the list view for ``notes``, already in display order.

    Logged out always renders as an empty, unauthenticated view.
    """
    if user is None:
        return NotesViewOut(
            authenticated=False,
            user=None,
            count=0,
            count_label=count_label(0),
            empty=True,
            notes=[],
        )

    cards = [note_card(n, now) for n in notes]
    return NotesViewOut(
        authenticated=True,
        user=UserOut(**user.to_dict()),
        count=len(cards),
        count_label=count_label(len(cards)),
        empty=not cards,
        notes=cards,
    )
