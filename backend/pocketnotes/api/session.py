from fastapi import APIRouter, Depends

from pocketnotes.api.deps import get_workspace
from pocketnotes.models.auth import UserOut
from pocketnotes.models.notes import NotesViewOut
from pocketnotes.models.session import LoginOut, LogoutOut
from pocketnotes.notifications import Severity, notify
from pocketnotes.render import build_view_model
from pocketnotes.workspace import Workspace

router = APIRouter(prefix="/session", tags=["session"])


@router.get("", response_model=NotesViewOut)
def current_session(ws: Workspace = Depends(get_workspace)) -> NotesViewOut:
    return build_view_model(ws.visible_notes(), ws.user)


@router.post("/login", response_model=LoginOut)
def login(ws: Workspace = Depends(get_workspace)) -> LoginOut:
    user = ws.login()
    return LoginOut(
        user=UserOut(**user.to_dict()),
        view=build_view_model(ws.visible_notes(), user),
        notification=notify("Welcome back! You are now logged in.", Severity.SUCCESS),
    )


@router.post("/logout", response_model=LogoutOut)
def logout(ws: Workspace = Depends(get_workspace)) -> LogoutOut:
    user = ws.logout()
    return LogoutOut(
        user=UserOut(**user.to_dict()) if user else None,
        view=build_view_model([], None),
        notification=notify("You have been logged out successfully.", Severity.SUCCESS),
    )
