import pytest

from pocketnotes.storage.event_log import Event, EventLog


def test_events_are_appended_per_user(tmp_path):
    log = EventLog(tmp_path)
    log.emit(Event(event_type="NOTE_CREATED", user_id="userA", note_id="n1"))
    log.emit(Event(event_type="NOTE_DELETED", user_id="userA", note_id="n1"))
    log.emit(Event(event_type="LOGIN", user_id="userB"))

    events = log.read("userA")
    assert [e["event_type"] for e in events] == ["NOTE_CREATED", "NOTE_DELETED"]
    assert events[0]["note_id"] == "n1"
    assert events[0]["event_id"] != events[1]["event_id"]
    assert (tmp_path / "activity" / "userA.log").exists()


def test_unreadable_lines_are_skipped(tmp_path):
    log = EventLog(tmp_path)
    log.emit(Event(event_type="LOGIN", user_id="userA"))
    with (tmp_path / "activity" / "userA.log").open("a", encoding="utf-8") as f:
        f.write("garbage\n\n")

    assert len(log.read("userA")) == 1


def test_path_like_user_id_is_rejected(tmp_path):
    with pytest.raises(ValueError):
        EventLog(tmp_path).emit(Event(event_type="LOGIN", user_id="../x"))
