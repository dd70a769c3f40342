"""Error taxonomy for ptystore.

Every failure surfaced to callers is a PtyError with a stable `kind` code,
a human-readable message and, where it applies, the offending session ID.
"""


class PtyError(Exception):
    """Base error for session store failures.

    Attributes:
        kind: Stable machine-readable error code (e.g. "SESSION_NOT_FOUND").
        message: Human-readable description.
        session_id: The session the error refers to, if any.
    """

    kind = "PTY_ERROR"

    def __init__(self, message: str, session_id: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.session_id = session_id

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict:
        """Machine-readable form for JSON output."""
        data = {"kind": self.kind, "message": self.message}
        if self.session_id is not None:
            data["sessionId"] = self.session_id
        return data


class InvalidSessionIdError(PtyError):
    """Raised when a session ID contains characters outside [A-Za-z0-9_-]."""

    kind = "INVALID_SESSION_ID"


class SessionNotFoundError(PtyError):
    """Raised when a mutator is called for a session with no record."""

    kind = "SESSION_NOT_FOUND"


class SessionDirDeletedError(PtyError):
    """Raised when the session directory vanishes during a save."""

    kind = "SESSION_DIR_DELETED"


class SaveSessionFailedError(PtyError):
    kind = "SAVE_SESSION_FAILED"


class StdinWriteFailedError(PtyError):
    kind = "STDIN_WRITE_FAILED"


class CleanupFailedError(PtyError):
    kind = "CLEANUP_FAILED"


class ListSessionsFailedError(PtyError):
    kind = "LIST_SESSIONS_FAILED"
