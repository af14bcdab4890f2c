from fastapi import APIRouter, Depends, HTTPException, Query, Response

from pocketnotes.api.deps import get_current_user, get_workspace
from pocketnotes.core.errors import NoteNotFoundError
from pocketnotes.models.notes import (
    NoteDeletedOut,
    NoteDraft,
    NoteEditOut,
    NoteOut,
    NoteSavedOut,
    NoteSubmit,
    NotesViewOut,
)
from pocketnotes.notifications import Severity, notify
from pocketnotes.render import build_view_model
from pocketnotes.storage.notes_store import Note
from pocketnotes.storage.session_store import User
from pocketnotes.workspace import Workspace

router = APIRouter(prefix="/notes", tags=["notes"])


def _note_out(note: Note) -> NoteOut:
    return NoteOut(**note.to_dict())


@router.get("", response_model=NotesViewOut)
def list_notes(
    ws: Workspace = Depends(get_workspace),
    user: User = Depends(get_current_user),
) -> NotesViewOut:
    return build_view_model(ws.visible_notes(), user)


@router.get("/{note_id}", response_model=NoteEditOut)
def edit_note(
    note_id: str,
    ws: Workspace = Depends(get_workspace),
    user: User = Depends(get_current_user),
) -> NoteEditOut:
    note = ws.find_note(note_id)
    if note is None:
        raise NoteNotFoundError(note_id)
    return NoteEditOut(
        note=_note_out(note),
        notification=notify("Edit mode activated. Make your changes and click Update.", Severity.INFO),
    )


@router.post("", response_model=NoteSavedOut)
def submit_note(
    payload: NoteSubmit,
    response: Response,
    ws: Workspace = Depends(get_workspace),
    user: User = Depends(get_current_user),
) -> NoteSavedOut:
    draft = NoteDraft(title=payload.title, content=payload.content)
    note = ws.save_note(draft, editing_id=payload.editing_id)

    if payload.editing_id is None:
        response.status_code = 201
        notification = notify("Note created successfully!", Severity.SUCCESS)
    elif note is None:
        # update miss: the note went away while it was being edited
        notification = notify("That note no longer exists; nothing was updated.", Severity.WARNING)
    else:
        notification = notify("Note updated successfully!", Severity.SUCCESS)

    return NoteSavedOut(
        note=_note_out(note) if note else None,
        view=build_view_model(ws.visible_notes(), user),
        notification=notification,
    )


@router.delete("/{note_id}", response_model=NoteDeletedOut)
def delete_note(
    note_id: str,
    confirm: bool = Query(default=False),
    ws: Workspace = Depends(get_workspace),
    user: User = Depends(get_current_user),
) -> NoteDeletedOut:
    if not confirm:
        raise HTTPException(status_code=400, detail="Please confirm that you want to delete this note.")

    deleted = ws.delete_note(note_id)
    if deleted:
        notification = notify("Note deleted successfully!", Severity.SUCCESS)
    else:
        notification = notify("Note not found.", Severity.INFO)

    return NoteDeletedOut(
        deleted=deleted,
        view=build_view_model(ws.visible_notes(), user),
        notification=notification,
    )
