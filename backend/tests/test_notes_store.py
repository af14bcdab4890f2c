import json

import pytest
from pydantic import ValidationError

from conftest import record, write_notes
from pocketnotes.core.errors import NoActiveSessionError
from pocketnotes.models.notes import NoteDraft
from pocketnotes.storage.notes_store import Note, NotesStore


def test_load_without_stored_notes_is_empty(kv):
    s = NotesStore(kv)
    assert s.load("u1") == []
    assert s.view() == []


def test_create_gets_fresh_id_and_equal_timestamps(store):
    a = store.upsert({"title": "a", "content": "x"})
    b = store.upsert({"title": "b", "content": "y"})

    assert a.id != b.id
    assert a.id.startswith("note_")
    assert a.created_at == a.updated_at
    assert a.owner == "u1"


def test_draft_is_trimmed(store):
    note = store.upsert({"title": "  hello ", "content": "\n body \n"})
    assert note.title == "hello"
    assert note.content == "body"


def test_edit_preserves_created_at_and_id(store):
    original = store.upsert(NoteDraft(title="t1", content="c1"))
    edited = store.upsert(NoteDraft(title="t2", content="c2"), editing_id=original.id)

    assert edited.id == original.id
    assert edited.created_at == original.created_at
    assert edited.updated_at >= original.updated_at
    assert (edited.title, edited.content) == ("t2", "c2")
    assert len(store.view()) == 1


def test_edit_never_moves_updated_at_backwards(kv):
    # stored timestamp in the future, e.g. from a skewed clock
    write_notes(kv, "u1", [record("n1", "2999-01-01T00:00:00.000Z")])
    s = NotesStore(kv)
    s.load("u1")

    edited = s.upsert({"title": "t", "content": "c"}, editing_id="n1")
    assert edited.updated_at == "2999-01-01T00:00:00.000Z"


def test_edit_of_unknown_id_is_a_miss(store, kv):
    store.upsert({"title": "a", "content": "x"})
    before = kv.get_item("notes_u1")

    assert store.upsert({"title": "b", "content": "y"}, editing_id="note_missing") is None
    assert len(store.view()) == 1
    assert kv.get_item("notes_u1") == before


def test_whitespace_title_rejected_without_mutation(store, kv):
    store.upsert({"title": "a", "content": "x"})
    before = kv.get_item("notes_u1")

    with pytest.raises(ValidationError):
        store.upsert({"title": "   ", "content": "x"})
    with pytest.raises(ValidationError):
        store.upsert({"title": "t", "content": " \t "})

    assert len(store.view()) == 1
    assert kv.get_item("notes_u1") == before


def test_view_orders_by_updated_at_desc(kv):
    write_notes(kv, "u1", [
        record("t1", "2024-01-01T10:00:00.000Z"),
        record("t2", "2024-01-03T10:00:00.000Z"),
        record("t3", "2024-01-02T10:00:00.000Z"),
    ])
    s = NotesStore(kv)
    s.load("u1")

    assert [n.id for n in s.view()] == ["t2", "t3", "t1"]


def test_view_ties_keep_input_order(kv):
    same = "2024-01-01T10:00:00.000Z"
    write_notes(kv, "u1", [record("a", same), record("b", same), record("c", same)])
    s = NotesStore(kv)
    s.load("u1")

    assert [n.id for n in s.view()] == ["a", "b", "c"]


def test_view_is_idempotent(store):
    store.upsert({"title": "a", "content": "x"})
    store.upsert({"title": "b", "content": "y"})
    assert store.view() == store.view()


def test_delete_missing_returns_false_and_changes_nothing(store, kv):
    note = store.upsert({"title": "a", "content": "x"})
    before = kv.get_item("notes_u1")

    assert store.delete("note_nope") is False
    assert store.view() == [note]
    assert kv.get_item("notes_u1") == before


def test_delete_removes_and_persists(store, kv):
    keep = store.upsert({"title": "a", "content": "x"})
    drop = store.upsert({"title": "b", "content": "y"})

    assert store.delete(drop.id) is True
    assert store.get(drop.id) is None

    reloaded = NotesStore(kv)
    assert reloaded.load("u1") == [keep]


def test_round_trip_through_storage(store, kv):
    note = store.upsert({"title": "hello", "content": "line 1\nline 2"})

    reloaded = NotesStore(kv)
    assert reloaded.load("u1") == [note]


def test_stored_record_shape(store, kv):
    note = store.upsert({"title": "hello", "content": "world"})
    raw = json.loads(kv.get_item("notes_u1"))

    assert raw == [{
        "id": note.id,
        "title": "hello",
        "content": "world",
        "user": "u1",
        "createdAt": note.created_at,
        "updatedAt": note.updated_at,
    }]
    # 2024-05-01T09:30:00.000Z
    assert len(note.created_at) == 24 and note.created_at.endswith("Z")


def test_existing_records_round_trip_exactly(kv):
    rec = record("note_1700000000000", "2024-02-02T08:15:30.123Z")
    write_notes(kv, "u1", [rec])
    s = NotesStore(kv)
    s.load("u1")

    assert s.view()[0].to_dict() == rec
    assert Note.from_dict(rec).to_dict() == rec


@pytest.mark.parametrize("payload", ["not json", "{}", "42", '"text"'])
def test_malformed_blob_loads_empty(kv, payload):
    kv.set_item("notes_u1", payload)
    s = NotesStore(kv)
    assert s.load("u1") == []


def test_malformed_records_are_skipped(kv):
    write_notes(kv, "u1", [
        record("ok", "2024-01-01T10:00:00.000Z"),
        {"id": "broken"},
        record("bad-ts", "yesterday"),
        "nope",
    ])
    s = NotesStore(kv)
    assert [n.id for n in s.load("u1")] == ["ok"]


def test_collections_are_partitioned_by_owner(kv):
    a = NotesStore(kv)
    a.load("alice")
    a.upsert({"title": "a", "content": "x"})

    b = NotesStore(kv)
    assert b.load("bob") == []


def test_operations_require_a_loaded_owner(kv):
    s = NotesStore(kv)
    with pytest.raises(NoActiveSessionError):
        s.upsert({"title": "a", "content": "x"})
    with pytest.raises(NoActiveSessionError):
        s.delete("x")
    with pytest.raises(NoActiveSessionError):
        s.view()


def test_clear_forgets_owner_but_keeps_storage(store, kv):
    store.upsert({"title": "a", "content": "x"})
    store.clear()

    assert store.owner_id is None
    assert kv.get_item("notes_u1") is not None


def test_edit_rewrites_owner_to_current_user(kv):
    write_notes(kv, "u1", [record("n1", "2024-01-01T10:00:00.000Z", owner="someone_else")])
    s = NotesStore(kv)
    s.load("u1")

    edited = s.upsert({"title": "t", "content": "c"}, editing_id="n1")
    assert edited.owner == "u1"
    assert json.loads(kv.get_item("notes_u1"))[0]["user"] == "u1"


def test_failed_write_leaves_collection_untouched(store, kv, monkeypatch):
    kept = store.upsert({"title": "a", "content": "x"})

    def broken_write(key, value):
        raise OSError("disk full")

    monkeypatch.setattr(kv, "set_item", broken_write)

    with pytest.raises(OSError):
        store.upsert({"title": "b", "content": "y"})
    with pytest.raises(OSError):
        store.upsert({"title": "b", "content": "y"}, editing_id=kept.id)
    with pytest.raises(OSError):
        store.delete(kept.id)

    assert store.view() == [kept]
