from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Optional

from pocketnotes.storage.kv_store import LocalStore

log = logging.getLogger("pocketnotes.session")

SESSION_KEY = "currentUser"


@dataclass(frozen=True)
class User:
    id: str
    email: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "email": self.email, "name": self.name}


class SessionStore:
    def __init__(self, kv: LocalStore, email: str = "user@example.com", name: str = "Demo User"):
        self.kv = kv
        self.email = email
        self.name = name
        self._current: Optional[User] = None

    @property
    def current_user(self) -> Optional[User]:
        return self._current

    def login(self) -> User:
        # mock identity provider: a fresh id on every login
        user = User(id=f"user_{uuid.uuid4().hex}", email=self.email, name=self.name)
        self.kv.set_item(SESSION_KEY, json.dumps(user.to_dict(), ensure_ascii=False))
        self._current = user
        log.info("User logged in: %s", user.id)
        return user

    def logout(self) -> Optional[User]:
        user = self._current
        self._current = None
        self.kv.remove_item(SESSION_KEY)
        log.info("User logged out: %s", user.id if user else None)
        return user

    def restore_session(self) -> Optional[User]:
        raw = self.kv.get_item(SESSION_KEY)
        if raw is None:
            self._current = None
            return None
        try:
            data = json.loads(raw)
            user = User(id=str(data["id"]), email=str(data["email"]), name=str(data["name"]))
        except (ValueError, TypeError, KeyError) as exc:
            log.warning("Ignoring malformed session record: %s", exc)
            self._current = None
            return None
        if not user.id or any(ch in user.id for ch in ["/", "\\"]) or ".." in user.id:
            log.warning("Ignoring session record with invalid user id")
            self._current = None
            return None
        self._current = user
        log.info("Session restored for %s", user.id)
        return user
