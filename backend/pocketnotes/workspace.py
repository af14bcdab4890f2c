"""The single-user workspace: one session plus the notes it can see.

A ``Workspace`` is created once per process and handed to whatever layer
needs it. Logging in (or restoring a stored session) loads the user's
collection; logging out tears it down again.
"""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from pocketnotes import config
from pocketnotes.core.errors import NoActiveSessionError
from pocketnotes.models.notes import NoteDraft
from pocketnotes.storage.event_log import Event, EventLog
from pocketnotes.storage.kv_store import LocalStore
from pocketnotes.storage.notes_store import Note, NotesStore
from pocketnotes.storage.session_store import SessionStore, User

log = logging.getLogger("pocketnotes.workspace")


class Workspace:
    def __init__(
        self,
        base_dir: Path,
        purge_on_logout: bool = False,
        email: str = "user@example.com",
        name: str = "Demo User",
    ):
        self.kv = LocalStore(base_dir)
        self.session = SessionStore(self.kv, email=email, name=name)
        self.notes = NotesStore(self.kv)
        self.events = EventLog(base_dir)
        self.purge_on_logout = purge_on_logout
        # routes run in a threadpool; one request at a time touches state
        self._lock = threading.RLock()

    @classmethod
    def from_env(cls, base_dir: Optional[Path] = None) -> "Workspace":
        return cls(
            base_dir or config.data_dir(),
            purge_on_logout=config.purge_notes_on_logout(),
            email=config.mock_user_email(),
            name=config.mock_user_name(),
        )

    @property
    def user(self) -> Optional[User]:
        return self.session.current_user

    def require_user(self) -> User:
        user = self.session.current_user
        if user is None:
            raise NoActiveSessionError()
        return user

    def restore(self) -> Optional[User]:
        with self._lock:
            user = self.session.restore_session()
            if user is None:
                self.notes.clear()
                return None
            self.notes.load(user.id)
            return user

    def login(self) -> User:
        with self._lock:
            user = self.session.login()
            self.notes.load(user.id)
            self.events.emit(Event(event_type="LOGIN", user_id=user.id))
            return user

    def logout(self) -> Optional[User]:
        with self._lock:
            user = self.session.logout()
            self.notes.clear()
            if user is None:
                return None

            purged = False
            if self.purge_on_logout:
                purged = self.notes.purge(user.id)
            self.events.emit(Event(event_type="LOGOUT", user_id=user.id, meta={"purged": purged}))
            return user

    def save_note(
        self,
        draft: Union[NoteDraft, Mapping[str, Any]],
        editing_id: Optional[str] = None,
    ) -> Optional[Note]:
        with self._lock:
            user = self.require_user()
            note = self.notes.upsert(draft, editing_id=editing_id)
            if note is not None:
                self.events.emit(Event(
                    event_type="NOTE_UPDATED" if editing_id is not None else "NOTE_CREATED",
                    user_id=user.id,
                    note_id=note.id,
                ))
            return note

    def delete_note(self, note_id: str) -> bool:
        with self._lock:
            user = self.require_user()
            removed = self.notes.delete(note_id)
            if removed:
                self.events.emit(Event(event_type="NOTE_DELETED", user_id=user.id, note_id=note_id))
            return removed

    def visible_notes(self) -> list[Note]:
        with self._lock:
            if self.session.current_user is None:
                return []
            return self.notes.view()

    def find_note(self, note_id: str) -> Optional[Note]:
        with self._lock:
            self.require_user()
            return self.notes.get(note_id)
