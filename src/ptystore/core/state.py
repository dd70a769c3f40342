"""Durable session records.

All session data lives under a control root, one directory per session:
- session.json: the SessionRecord, pretty-printed JSON
- stdin: named pipe (or plain file) carrying input to the PTY process
- stdout: output capture, appended by the PTY host process

Records are replaced with write-to-temp-then-rename so that any concurrent
reader sees either the old or the new file, never a partial write. There is
no locking: other processes may create, mutate or delete session
directories at any time.
"""

import os
from pathlib import Path

import orjson

from ptystore.core.control import ControlDirectory
from ptystore.core.errors import (
    PtyError,
    SaveSessionFailedError,
    SessionDirDeletedError,
    SessionNotFoundError,
)
from ptystore.core.logging_config import get_logger
from ptystore.core.paths import (
    SESSION_JSON,
    SessionPaths,
    generate_session_id,
    session_paths,
    validate_session_id,
)
from ptystore.core.session import VALID_STATUSES, SessionRecord, now_iso
from ptystore.core.stdin import create_channel, write_channel

logger = get_logger(__name__)

TEMP_SUFFIX = ".tmp"


class SessionStore:
    """Session records under one control root.

    Every method taking a session ID validates it before touching the
    filesystem.
    """

    def __init__(self, control_root: str | Path) -> None:
        self.control = ControlDirectory(control_root)

    @property
    def control_root(self) -> Path:
        return self.control.root

    def get_session_paths(
        self, session_id: str, check_exists: bool = False
    ) -> SessionPaths | None:
        """Get the paths for a session.

        Args:
            session_id: The session ID.
            check_exists: Return None if the session directory is missing.
        """
        validate_session_id(session_id)
        if check_exists and not self.control.session_dir_exists(session_id):
            logger.debug("session directory does not exist: %s", session_id)
            return None
        return session_paths(self.control_root, session_id)

    def session_exists(self, session_id: str) -> bool:
        """A session exists iff its session.json exists."""
        validate_session_id(session_id)
        return session_paths(self.control_root, session_id).session_json_path.exists()

    def create_session_directory(self, session_id: str) -> SessionPaths:
        """Create the session directory and its stdin channel."""
        validate_session_id(session_id)
        self.control.ensure_session_dir(session_id)
        paths = session_paths(self.control_root, session_id)
        create_channel(paths.stdin_path)
        logger.info("session directory created for %s", session_id)
        return paths

    def create_session(
        self,
        session_id: str | None = None,
        command: list[str] | tuple[str, ...] = (),
        working_dir: str | None = None,
        name: str | None = None,
    ) -> tuple[str, SessionPaths]:
        """Create a session: directory, stdin channel and a "starting" record.

        Args:
            session_id: ID to use; a UUID is generated if omitted.
            command: Command line the PTY host will run.
            working_dir: Working directory for the command.
            name: Display label.

        Returns:
            (session_id, paths)
        """
        if session_id is None:
            session_id = generate_session_id()
        paths = self.create_session_directory(session_id)
        record = SessionRecord(
            status="starting",
            started_at=now_iso(),
            name=name,
            command=list(command),
            working_dir=working_dir,
        )
        self.save(session_id, record)
        return session_id, paths

    def save(
        self, session_id: str, record: SessionRecord, recreate: bool = True
    ) -> None:
        """Atomically replace a session's record.

        Args:
            session_id: The session ID.
            record: The record to write.
            recreate: Recreate a missing session directory. With False a
                missing directory fails the save instead, so a session that
                was cleaned up stays deleted.

        Raises:
            SessionDirDeletedError: If the session directory is missing
                (and `recreate` is False) or was deleted while saving. No
                temp file is left behind.
            SaveSessionFailedError: On any other I/O failure.
        """
        validate_session_id(session_id)
        paths = session_paths(self.control_root, session_id)
        session_dir = paths.control_dir
        temp_path = session_dir / (SESSION_JSON + TEMP_SUFFIX)

        try:
            if not session_dir.exists():
                if not recreate:
                    raise SessionDirDeletedError(
                        "Session directory no longer exists", session_id=session_id
                    )
                logger.warning(
                    "session directory %s does not exist, creating it", session_dir
                )
                session_dir.mkdir(parents=True, exist_ok=True)

            content = orjson.dumps(record.to_dict(), option=orjson.OPT_INDENT_2)
            temp_path.write_bytes(content)

            if not session_dir.exists():
                logger.error(
                    "session directory %s was deleted during save operation",
                    session_dir,
                )
                temp_path.unlink(missing_ok=True)
                raise SessionDirDeletedError(
                    "Session directory was deleted during save operation",
                    session_id=session_id,
                )

            os.replace(temp_path, paths.session_json_path)
        except PtyError:
            raise
        except orjson.JSONEncodeError as e:
            raise SaveSessionFailedError(
                f"Failed to save session info: {e}", session_id=session_id
            ) from e
        except OSError as e:
            _discard(temp_path)
            if not session_dir.exists():
                logger.error(
                    "session directory %s was deleted during save operation",
                    session_dir,
                )
                raise SessionDirDeletedError(
                    "Session directory was deleted during save operation",
                    session_id=session_id,
                ) from e
            raise SaveSessionFailedError(
                f"Failed to save session info: {e}", session_id=session_id
            ) from e

        logger.debug("session info saved for %s", session_id)

    def load(self, session_id: str) -> SessionRecord | None:
        """Load a session's record.

        Returns:
            The record, or None if session.json is missing or unreadable.
            Corrupt records are logged and read as missing.
        """
        validate_session_id(session_id)
        path = session_paths(self.control_root, session_id).session_json_path
        try:
            content = path.read_bytes()
        except (FileNotFoundError, NotADirectoryError):
            return None
        except OSError as e:
            logger.warning("failed to read session info for %s: %s", session_id, e)
            return None

        try:
            return SessionRecord.from_dict(orjson.loads(content))
        except (ValueError, TypeError) as e:
            logger.warning("corrupt session info for %s: %s", session_id, e)
            return None

    def update_status(
        self,
        session_id: str,
        status: str,
        pid: int | None = None,
        exit_code: int | None = None,
    ) -> SessionRecord:
        """Update a session's status, and optionally its pid and exit code.

        Raises:
            SessionNotFoundError: If the session has no record.
            ValueError: If status is not a valid status.
        """
        if status not in VALID_STATUSES:
            raise ValueError(
                f"Invalid status: {status}. Must be one of {VALID_STATUSES}"
            )
        record = self.load(session_id)
        if record is None:
            raise SessionNotFoundError("Session info not found", session_id=session_id)

        if pid is not None:
            record.pid = pid
        record.status = status
        if exit_code is not None:
            record.exit_code = exit_code

        self.save(session_id, record)

        details = ""
        if pid is not None:
            details += f" (pid: {pid})"
        if exit_code is not None:
            details += f" (exit code: {exit_code})"
        logger.info("session %s status updated to %s%s", session_id, status, details)
        return record

    def update_name(self, session_id: str, name: str) -> SessionRecord:
        """Update a session's display name.

        Raises:
            SessionNotFoundError: If the session has no record.
        """
        record = self.load(session_id)
        if record is None:
            logger.error("session info not found for %s", session_id)
            raise SessionNotFoundError("Session info not found", session_id=session_id)

        record.name = name
        self.save(session_id, record)
        logger.info("session %s name updated to: %s", session_id, name)
        return record

    def write_to_stdin(self, session_id: str, data: str | bytes) -> int:
        """Append input to a session's stdin channel.

        Raises:
            StdinWriteFailedError: If the session or its channel doesn't exist,
                or the write fails.
        """
        validate_session_id(session_id)
        paths = session_paths(self.control_root, session_id)
        return write_channel(paths.stdin_path, data, session_id)

    def list_sessions(self):
        from ptystore.core.listing import list_sessions

        return list_sessions(self)

    def update_zombie_sessions(self) -> list[str]:
        from ptystore.core.reaper import update_zombie_sessions

        return update_zombie_sessions(self)

    def cleanup_session(self, session_id: str) -> None:
        from ptystore.core.cleanup import cleanup_session

        cleanup_session(self, session_id)

    def cleanup_exited_sessions(self) -> list[str]:
        from ptystore.core.cleanup import cleanup_exited

        return cleanup_exited(self).removed


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError:
        logger.debug("could not remove temp file %s", path)
