from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from pocketnotes.config import notification_duration_ms


class Severity(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


_ICONS = {
    Severity.SUCCESS: "fa-check-circle",
    Severity.ERROR: "fa-exclamation-circle",
    Severity.WARNING: "fa-exclamation-triangle",
    Severity.INFO: "fa-info-circle",
}


class Notification(BaseModel):
    """A transient toast for the UI. Carries no state of its own."""

    message: str
    severity: Severity = Severity.INFO
    icon: str = _ICONS[Severity.INFO]
    duration_ms: int = 3000


def notify(message: str, severity: Severity | str = Severity.INFO) -> Notification:
    sev = Severity(severity)
    return Notification(
        message=message,
        severity=sev,
        icon=_ICONS[sev],
        duration_ms=notification_duration_ms(),
    )
