from __future__ import annotations

import os
from pathlib import Path

# repository_root/data (we are in backend/pocketnotes/)
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"

_TRUTHY = {"1", "true", "yes", "on"}


def data_dir() -> Path:
    return Path(os.getenv("APP_DATA_DIR", str(DEFAULT_DATA_DIR)))


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO")


def mock_user_email() -> str:
    return os.getenv("MOCK_USER_EMAIL", "user@example.com")


def mock_user_name() -> str:
    return os.getenv("MOCK_USER_NAME", "Demo User")


def purge_notes_on_logout() -> bool:
    return os.getenv("PURGE_NOTES_ON_LOGOUT", "").strip().lower() in _TRUTHY


def notification_duration_ms() -> int:
    try:
        return int(os.getenv("NOTIFICATION_DURATION_MS", "3000"))
    except ValueError:
        return 3000
