from fastapi import Request

from pocketnotes.storage.session_store import User
from pocketnotes.workspace import Workspace


def get_workspace(request: Request) -> Workspace:
    return request.app.state.workspace


def get_current_user(request: Request) -> User:
    # raises NoActiveSessionError -> 401
    return get_workspace(request).require_user()
