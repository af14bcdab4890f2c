from typing import Optional

from pydantic import BaseModel

from pocketnotes.models.auth import UserOut
from pocketnotes.models.notes import NotesViewOut
from pocketnotes.notifications import Notification


class LoginOut(BaseModel):
    user: UserOut
    view: NotesViewOut
    notification: Notification


class LogoutOut(BaseModel):
    user: Optional[UserOut] = None
    view: NotesViewOut
    notification: Notification
