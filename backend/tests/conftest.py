import json

import pytest
from fastapi.testclient import TestClient

from pocketnotes.storage.kv_store import LocalStore
from pocketnotes.storage.notes_store import NotesStore
from pocketnotes.workspace import Workspace


@pytest.fixture()
def kv(tmp_path):
    return LocalStore(tmp_path)


@pytest.fixture()
def store(kv):
    s = NotesStore(kv)
    s.load("u1")
    return s


@pytest.fixture()
def workspace(tmp_path):
    return Workspace(tmp_path)


@pytest.fixture()
def client(tmp_path, monkeypatch):
    # isolate data dir per test
    monkeypatch.setenv("APP_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("PURGE_NOTES_ON_LOGOUT", raising=False)

    from pocketnotes.main import create_app
    return TestClient(create_app(tmp_path))


def write_notes(kv, owner_id, records):
    kv.set_item(f"notes_{owner_id}", json.dumps(records))


def record(note_id, updated_at, created_at="2024-01-01T00:00:00.000Z", owner="u1"):
    return {
        "id": note_id,
        "title": f"title {note_id}",
        "content": f"content {note_id}",
        "user": owner,
        "createdAt": created_at,
        "updatedAt": updated_at,
    }
