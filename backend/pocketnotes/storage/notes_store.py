import json
import logging
import uuid
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional, Union

from pocketnotes.core.errors import NoActiveSessionError
from pocketnotes.models.notes import NoteDraft
from pocketnotes.storage.kv_store import LocalStore
from pocketnotes.utils.clock import parse_iso, to_iso, utc_now

log = logging.getLogger("pocketnotes.notes")


def notes_key(owner_id: str) -> str:
    return f"notes_{owner_id}"


@dataclass(frozen=True)
class Note:
    id: str
    title: str
    content: str
    owner: str
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        # stored field names are shared with existing data; keep them
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "user": self.owner,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Note":
        note = cls(
            id=str(raw["id"]),
            title=str(raw["title"]),
            content=str(raw["content"]),
            owner=str(raw["user"]),
            created_at=str(raw["createdAt"]),
            updated_at=str(raw["updatedAt"]),
        )
        # reject unparseable timestamps up front so view() can sort
        parse_iso(note.created_at)
        parse_iso(note.updated_at)
        return note


class NotesStore:
    """In-memory note collection for one owner, persisted wholesale.

    ``load`` binds the store to an owner; every mutation rewrites the
    owner's whole collection before returning.
    """

    def __init__(self, kv: LocalStore):
        self.kv = kv
        self.owner_id: Optional[str] = None
        self._notes: list[Note] = []

    def _require_owner(self) -> str:
        if self.owner_id is None:
            raise NoActiveSessionError()
        return self.owner_id

    def _persist(self, notes: list[Note]) -> None:
        # write first; callers swap in `notes` only once this succeeded
        owner_id = self._require_owner()
        payload = json.dumps([n.to_dict() for n in notes], ensure_ascii=False)
        self.kv.set_item(notes_key(owner_id), payload)

    def load(self, owner_id: str) -> list[Note]:
        self.owner_id = owner_id
        self._notes = []

        raw = self.kv.get_item(notes_key(owner_id))
        if raw is None:
            return []
        try:
            items = json.loads(raw)
        except ValueError as exc:
            log.warning("Stored notes for %s are not valid JSON: %s", owner_id, exc)
            return []
        if not isinstance(items, list):
            log.warning("Stored notes for %s are not a list; ignoring", owner_id)
            return []

        seen: set[str] = set()
        for item in items:
            try:
                note = Note.from_dict(item)
            except (KeyError, TypeError, ValueError):
                log.warning("Skipping malformed note record for %s", owner_id)
                continue
            if note.id in seen:
                continue
            seen.add(note.id)
            self._notes.append(note)

        log.info("Loaded %d notes for %s", len(self._notes), owner_id)
        return list(self._notes)

    def clear(self) -> None:
        self.owner_id = None
        self._notes = []

    def get(self, note_id: str) -> Optional[Note]:
        self._require_owner()
        for n in self._notes:
            if n.id == note_id:
                return n
        return None

    def _new_id(self) -> str:
        existing = {n.id for n in self._notes}
        while True:
            note_id = f"note_{uuid.uuid4().hex}"
            if note_id not in existing:
                return note_id

    def upsert(
        self,
        draft: Union[NoteDraft, Mapping[str, Any]],
        editing_id: Optional[str] = None,
    ) -> Optional[Note]:
        owner_id = self._require_owner()
        if not isinstance(draft, NoteDraft):
            # raises pydantic.ValidationError before anything changes
            draft = NoteDraft.model_validate(draft)

        now = utc_now()

        if editing_id is not None:
            for i, existing in enumerate(self._notes):
                if existing.id != editing_id:
                    continue
                updated_at = max(now, parse_iso(existing.updated_at))
                note = replace(
                    existing,
                    title=draft.title,
                    content=draft.content,
                    owner=owner_id,
                    updated_at=to_iso(updated_at),
                )
                notes = list(self._notes)
                notes[i] = note
                self._persist(notes)
                self._notes = notes
                log.info("Note updated: %s", note.id)
                return note

            log.info("Update miss for note %s", editing_id)
            return None

        stamp = to_iso(now)
        note = Note(
            id=self._new_id(),
            title=draft.title,
            content=draft.content,
            owner=owner_id,
            created_at=stamp,
            updated_at=stamp,
        )
        notes = self._notes + [note]
        self._persist(notes)
        self._notes = notes
        log.info("Note created: %s", note.id)
        return note

    def delete(self, note_id: str) -> bool:
        self._require_owner()
        remaining = [n for n in self._notes if n.id != note_id]
        if len(remaining) == len(self._notes):
            return False
        self._persist(remaining)
        self._notes = remaining
        log.info("Note deleted: %s", note_id)
        return True

    def view(self) -> list[Note]:
        self._require_owner()
        # sorted() is stable with reverse=True, so ties keep input order
        return sorted(self._notes, key=lambda n: parse_iso(n.updated_at), reverse=True)

    def purge(self, owner_id: str) -> bool:
        return self.kv.remove_item(notes_key(owner_id))
