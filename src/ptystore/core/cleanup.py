"""Removal of session directories."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ptystore.core.errors import CleanupFailedError
from ptystore.core.listing import list_sessions
from ptystore.core.logging_config import get_logger
from ptystore.core.paths import validate_session_id

if TYPE_CHECKING:
    from ptystore.core.state import SessionStore

logger = get_logger(__name__)


@dataclass
class CleanupResult:
    """Outcome of a batch cleanup."""

    removed: list[str] = field(default_factory=list)
    failures: dict[str, CleanupFailedError] = field(default_factory=dict)


def cleanup_session(store: "SessionStore", session_id: str) -> bool:
    """Remove a session's directory and everything in it.

    Cleaning up a session that doesn't exist is not an error.

    Returns:
        True if a directory was removed.

    Raises:
        InvalidSessionIdError: If the ID is invalid.
        CleanupFailedError: If removal fails; retrying should finish the job.
    """
    validate_session_id(session_id)
    if not store.control.session_dir_exists(session_id):
        logger.debug("session %s does not exist, nothing to clean up", session_id)
        return False

    record = store.load(session_id)
    if record is not None:
        logger.debug("cleaning up session %s with status: %s", session_id, record.status)

    try:
        removed = store.control.delete_session_dir(session_id)
    except OSError as e:
        raise CleanupFailedError(
            f"Failed to cleanup session {session_id}: {e}", session_id=session_id
        ) from e

    if removed:
        logger.info("session %s cleaned up", session_id)
    return removed


def cleanup_exited(store: "SessionStore") -> CleanupResult:
    """Remove every exited session.

    A failure on one session does not stop the others from being attempted.

    Returns:
        CleanupResult with the IDs actually removed and per-session failures.

    Raises:
        ListSessionsFailedError: If the control root can't be enumerated.
    """
    result = CleanupResult()
    for session in list_sessions(store):
        if session.status != "exited":
            continue
        try:
            if cleanup_session(store, session.id):
                result.removed.append(session.id)
        except CleanupFailedError as e:
            logger.warning("%s", e)
            result.failures[session.id] = e

    if result.removed:
        logger.info("cleaned up %d exited sessions", len(result.removed))
    return result
