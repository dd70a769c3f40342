"""Zombie reaping: reconcile "running" records whose process is gone.

A PTY process that crashes, or is killed from outside, never gets to record
its own exit. The reaper notices the missing process and advances the record
to "exited". It only ever moves status forward; it never resurrects a
session and never removes a directory.
"""

import time
from dataclasses import replace
from typing import TYPE_CHECKING

from ptystore.core.errors import PtyError, SessionDirDeletedError
from ptystore.core.logging_config import get_logger
from ptystore.core.paths import is_valid_session_id
from ptystore.core.process import is_process_running
from ptystore.core.session import SessionRecord

if TYPE_CHECKING:
    from ptystore.core.state import SessionStore

logger = get_logger(__name__)

DEFAULT_EXIT_CODE = 1


def is_zombie(record: SessionRecord) -> bool:
    """True if the record claims a running process that no longer exists."""
    return (
        record.status == "running"
        and record.pid is not None
        and not is_process_running(record.pid)
    )


def reconcile_record(store: "SessionStore", session_id: str, record: SessionRecord) -> bool:
    """Mark a zombie session as exited and persist it.

    Mutates `record` in place once the exited record is on disk. A session
    whose directory disappears first (a concurrent cleanup) is left deleted.

    Returns:
        True if the record was transitioned, False if it was left alone.
    """
    if not is_zombie(record):
        return False

    logger.warning(
        "process %s no longer running for session %s, marking exited",
        record.pid,
        session_id,
    )
    exited = replace(
        record,
        status="exited",
        exit_code=DEFAULT_EXIT_CODE if record.exit_code is None else record.exit_code,
    )
    try:
        store.save(session_id, exited, recreate=False)
    except SessionDirDeletedError:
        logger.debug("session %s was removed before it could be reconciled", session_id)
        return False

    record.status = exited.status
    record.exit_code = exited.exit_code
    return True


def update_zombie_sessions(store: "SessionStore") -> list[str]:
    """Reconcile every session under the control root.

    Never raises: failures are logged so a supervising process keeps running.

    Returns:
        IDs of sessions transitioned to exited.
    """
    updated: list[str] = []
    try:
        session_dirs = list(store.control.iter_session_dirs())
    except OSError as e:
        logger.warning("failed to update zombie sessions: %s", e)
        return []

    for session_dir in session_dirs:
        session_id = session_dir.name
        if not is_valid_session_id(session_id):
            continue
        try:
            record = store.load(session_id)
            if record is not None and reconcile_record(store, session_id, record):
                updated.append(session_id)
        except PtyError as e:
            logger.warning("failed to reconcile session %s: %s", session_id, e)

    return updated


def run_reaper(
    store: "SessionStore",
    interval: float,
    iterations: int | None = None,
    sleep=time.sleep,
) -> list[str]:
    """Run reconciliation passes on a fixed interval.

    Each pass re-reads everything from disk, so concurrent reapers are safe.

    Args:
        store: The session store.
        interval: Seconds between passes.
        iterations: Number of passes, or None to run until interrupted.
        sleep: Sleep function (replaceable in tests).

    Returns:
        All session IDs transitioned across the passes run.
    """
    reaped: list[str] = []
    count = 0
    while iterations is None or count < iterations:
        updated = update_zombie_sessions(store)
        if updated:
            logger.info("reaped %d zombie sessions: %s", len(updated), ", ".join(updated))
        reaped.extend(updated)
        count += 1
        if iterations is not None and count >= iterations:
            break
        sleep(interval)
    return reaped
