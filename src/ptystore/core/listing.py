"""Session enumeration for discovery."""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from ptystore.core.errors import ListSessionsFailedError, PtyError
from ptystore.core.logging_config import get_logger
from ptystore.core.paths import STDOUT_FILE, is_valid_session_id
from ptystore.core.reaper import reconcile_record
from ptystore.core.session import Session, format_timestamp

if TYPE_CHECKING:
    from ptystore.core.state import SessionStore

logger = get_logger(__name__)


def list_sessions(store: "SessionStore") -> list[Session]:
    """List all valid sessions, newest first.

    Directories without a loadable record are skipped, as are entries that
    vanish or fail mid-read. Running sessions whose process is gone are
    reconciled before being returned.

    Returns:
        Sessions sorted by startedAt, most recent first. Sessions with a
        missing or unparseable startedAt sort last.

    Raises:
        ListSessionsFailedError: If the control root itself can't be read.
    """
    root = store.control_root
    if not root.exists():
        return []

    try:
        session_dirs = list(store.control.iter_session_dirs())
    except OSError as e:
        raise ListSessionsFailedError(f"Failed to list sessions: {e}") from e

    sessions: list[Session] = []
    for session_dir in session_dirs:
        session_id = session_dir.name
        if not is_valid_session_id(session_id):
            continue
        try:
            record = store.load(session_id)
            if record is None:
                continue
            if not reconcile_record(store, session_id, record) and not session_dir.is_dir():
                # Removed by a concurrent cleanup
                continue
            last_modified = _last_modified(session_dir / STDOUT_FILE, record.started_at)
        except (OSError, PtyError) as e:
            logger.debug("skipping session %s: %s", session_id, e)
            continue
        sessions.append(Session(id=session_id, record=record, last_modified=last_modified))

    sessions.sort(key=lambda s: s.record.started_at_datetime, reverse=True)
    logger.debug("found %d sessions", len(sessions))
    return sessions


def _last_modified(stdout_path, started_at: str) -> str:
    try:
        mtime = stdout_path.stat().st_mtime
    except FileNotFoundError:
        return started_at
    return format_timestamp(datetime.fromtimestamp(mtime, tz=timezone.utc))
