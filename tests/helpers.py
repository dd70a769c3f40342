"""Shared test helpers for building session records."""

from ptystore.core.session import SessionRecord

T0 = "2024-01-01T12:00:00.000Z"


def make_record(status="starting", started_at=T0, **kwargs):
    """Build a SessionRecord with sensible defaults."""
    return SessionRecord(status=status, started_at=started_at, **kwargs)


def save_record(store, session_id, status="starting", started_at=T0, **kwargs):
    """Create the session directory and save a record into it."""
    store.create_session_directory(session_id)
    record = make_record(status=status, started_at=started_at, **kwargs)
    store.save(session_id, record)
    return record
