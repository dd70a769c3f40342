"""Tests for session record persistence."""

import os
import shutil
from pathlib import Path

import orjson
import pytest

from ptystore.core.errors import (
    InvalidSessionIdError,
    SaveSessionFailedError,
    SessionDirDeletedError,
    SessionNotFoundError,
)
from ptystore.core.state import SessionStore
from tests.helpers import T0, make_record, save_record


def test_store_creates_control_root(control_root):
    assert not control_root.exists()

    store = SessionStore(control_root)

    assert control_root.is_dir()
    assert store.control_root == control_root


def test_store_creation_idempotent(control_root):
    SessionStore(control_root)
    SessionStore(control_root)

    assert control_root.is_dir()


def test_save_then_load_round_trip(store):
    record = make_record(
        status="running",
        pid=1234,
        name="build",
        command=["make", "-j4"],
        working_dir="/src",
        extra={"term": "xterm"},
    )
    store.create_session_directory("abc-123")

    store.save("abc-123", record)

    assert store.load("abc-123") == record


def test_save_writes_pretty_json(store, control_root):
    save_record(store, "abc-123")

    content = (control_root / "abc-123" / "session.json").read_bytes()

    assert b"\n  " in content
    assert orjson.loads(content) == {"status": "starting", "startedAt": T0}


def test_save_leaves_no_temp_file(store, control_root):
    save_record(store, "abc-123")

    assert not (control_root / "abc-123" / "session.json.tmp").exists()


def test_save_recreates_missing_directory(store, control_root):
    store.save("abc-123", make_record())

    assert (control_root / "abc-123" / "session.json").exists()
    assert store.load("abc-123") is not None


def test_save_replaces_previous_content(store):
    save_record(store, "abc-123")
    store.save("abc-123", make_record(status="running", pid=99))

    loaded = store.load("abc-123")

    assert loaded.status == "running"
    assert loaded.pid == 99


def test_save_directory_deleted_before_rename(store, control_root, monkeypatch):
    """Deleting the directory between temp write and rename fails cleanly."""
    save_record(store, "abc-123")
    session_dir = control_root / "abc-123"
    real_replace = os.replace

    def delete_then_replace(src, dst):
        shutil.rmtree(session_dir)
        return real_replace(src, dst)

    monkeypatch.setattr("ptystore.core.state.os.replace", delete_then_replace)

    with pytest.raises(SessionDirDeletedError) as exc_info:
        store.save("abc-123", make_record(status="running", pid=1))

    assert exc_info.value.kind == "SESSION_DIR_DELETED"
    assert exc_info.value.session_id == "abc-123"
    assert not session_dir.exists()
    assert not (session_dir / "session.json.tmp").exists()


def test_save_race_does_not_resurrect_directory(store, control_root, monkeypatch):
    """A save racing a cleanup must not bring the directory back."""
    save_record(store, "abc-123")
    session_dir = control_root / "abc-123"
    real_write_bytes = Path.write_bytes

    def write_then_delete(path, data):
        written = real_write_bytes(path, data)
        if path.name == "session.json.tmp":
            shutil.rmtree(session_dir)
        return written

    monkeypatch.setattr(Path, "write_bytes", write_then_delete)

    with pytest.raises(SessionDirDeletedError):
        store.save("abc-123", make_record())

    assert list(control_root.iterdir()) == []


def test_save_without_recreate_keeps_directory_deleted(store, control_root):
    save_record(store, "abc-123")
    shutil.rmtree(control_root / "abc-123")

    with pytest.raises(SessionDirDeletedError) as exc_info:
        store.save("abc-123", make_record(status="exited", exit_code=0), recreate=False)

    assert exc_info.value.session_id == "abc-123"
    assert list(control_root.iterdir()) == []


def test_save_unserializable_extra_fails(store):
    store.create_session_directory("abc-123")
    record = make_record(extra={"bad": object()})

    with pytest.raises(SaveSessionFailedError) as exc_info:
        store.save("abc-123", record)

    assert exc_info.value.kind == "SAVE_SESSION_FAILED"


def test_load_missing_returns_none(store):
    assert store.load("nope") is None


def test_load_directory_without_record_returns_none(store, control_root):
    (control_root / "empty").mkdir()

    assert store.load("empty") is None
    assert not store.session_exists("empty")


def test_load_corrupt_record_returns_none(store, control_root, caplog):
    session_dir = control_root / "abc-123"
    session_dir.mkdir()
    (session_dir / "session.json").write_text("{not json")

    with caplog.at_level("WARNING", logger="ptystore"):
        assert store.load("abc-123") is None

    assert "corrupt session info for abc-123" in caplog.text



def test_load_boolean_pid_returns_none(store, control_root):
    session_dir = control_root / "abc-123"
    session_dir.mkdir()
    (session_dir / "session.json").write_bytes(
        orjson.dumps({"status": "running", "startedAt": T0, "pid": True})
    )

    assert store.load("abc-123") is None

def test_load_invalid_status_returns_none(store, control_root):
    session_dir = control_root / "abc-123"
    session_dir.mkdir()
    (session_dir / "session.json").write_bytes(orjson.dumps({"status": "weird"}))

    assert store.load("abc-123") is None


def test_update_status(store):
    save_record(store, "abc-123")

    store.update_status("abc-123", "running", pid=4242)

    loaded = store.load("abc-123")
    assert loaded.status == "running"
    assert loaded.pid == 4242
    assert loaded.exit_code is None
    assert loaded.started_at == T0


def test_update_status_keeps_pid_when_omitted(store):
    save_record(store, "abc-123", status="running", pid=4242)

    store.update_status("abc-123", "exited", exit_code=0)

    loaded = store.load("abc-123")
    assert loaded.status == "exited"
    assert loaded.pid == 4242
    assert loaded.exit_code == 0


def test_update_status_not_found(store):
    with pytest.raises(SessionNotFoundError) as exc_info:
        store.update_status("missing", "running", pid=1)

    assert exc_info.value.kind == "SESSION_NOT_FOUND"
    assert exc_info.value.session_id == "missing"


def test_update_status_rejects_invalid_status(store):
    save_record(store, "abc-123")

    with pytest.raises(ValueError):
        store.update_status("abc-123", "done")


def test_update_name(store):
    save_record(store, "abc-123", status="running", pid=1)

    store.update_name("abc-123", "my shell")

    loaded = store.load("abc-123")
    assert loaded.name == "my shell"
    assert loaded.status == "running"


def test_update_name_not_found(store):
    with pytest.raises(SessionNotFoundError):
        store.update_name("missing", "x")


def test_create_session(store, control_root):
    session_id, paths = store.create_session(
        session_id="abc-123", command=["bash", "-l"], working_dir="/home", name="shell"
    )

    assert session_id == "abc-123"
    assert paths.control_dir == control_root / "abc-123"
    assert paths.stdin_path.exists()
    record = store.load("abc-123")
    assert record.status == "starting"
    assert record.command == ["bash", "-l"]
    assert record.working_dir == "/home"
    assert record.name == "shell"
    assert record.started_at.endswith("Z")


def test_create_session_generates_id(store):
    session_id, _ = store.create_session(command=["sh"])

    assert store.session_exists(session_id)


def test_session_exists(store):
    assert not store.session_exists("abc-123")
    save_record(store, "abc-123")
    assert store.session_exists("abc-123")


def test_get_session_paths_check_exists(store, control_root):
    assert store.get_session_paths("abc-123", check_exists=True) is None

    paths = store.get_session_paths("abc-123")
    assert paths.session_json_path == control_root / "abc-123" / "session.json"

    store.create_session_directory("abc-123")
    assert store.get_session_paths("abc-123", check_exists=True) == paths


@pytest.mark.parametrize(
    "operation",
    [
        lambda s, i: s.save(i, make_record()),
        lambda s, i: s.load(i),
        lambda s, i: s.update_status(i, "running", pid=1),
        lambda s, i: s.update_name(i, "x"),
        lambda s, i: s.create_session(session_id=i),
        lambda s, i: s.create_session_directory(i),
        lambda s, i: s.session_exists(i),
        lambda s, i: s.get_session_paths(i),
        lambda s, i: s.write_to_stdin(i, "ls\n"),
        lambda s, i: s.cleanup_session(i),
    ],
)
@pytest.mark.parametrize("bad_id", ["../escape", "a/b", "..", ""])
def test_invalid_id_rejected_before_filesystem(store, control_root, operation, bad_id):
    before = sorted(p.name for p in control_root.parent.rglob("*"))

    with pytest.raises(InvalidSessionIdError):
        operation(store, bad_id)

    assert sorted(p.name for p in control_root.parent.rglob("*")) == before
