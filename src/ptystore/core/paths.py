"""Session ID validation and per-session path derivation.

Session IDs are used directly as directory names under the control root,
so validation here is the only thing standing between a caller-supplied ID
and path traversal.
"""

import re
import uuid
from dataclasses import dataclass
from pathlib import Path

from ptystore.core.errors import InvalidSessionIdError

SESSION_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

SESSION_JSON = "session.json"
STDIN_FILE = "stdin"
STDOUT_FILE = "stdout"


def is_valid_session_id(session_id: object) -> bool:
    return isinstance(session_id, str) and SESSION_ID_PATTERN.fullmatch(session_id) is not None


def validate_session_id(session_id: object) -> str:
    """Validate a session ID.

    Args:
        session_id: Candidate ID.

    Returns:
        The ID, unchanged.

    Raises:
        InvalidSessionIdError: If the ID is empty or contains anything other
            than letters, digits, hyphens and underscores.
    """
    if not is_valid_session_id(session_id):
        raise InvalidSessionIdError(
            f'Invalid session ID format: "{session_id}". Session IDs must only '
            "contain letters, numbers, hyphens (-), and underscores (_).",
            session_id=session_id if isinstance(session_id, str) else None,
        )
    return session_id


def generate_session_id() -> str:
    """Generate a fresh session ID (a UUID4 string)."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class SessionPaths:
    """Filesystem locations for one session."""

    control_dir: Path
    stdout_path: Path
    stdin_path: Path
    session_json_path: Path

    def to_dict(self) -> dict[str, str]:
        return {
            "controlDir": str(self.control_dir),
            "stdoutPath": str(self.stdout_path),
            "stdinPath": str(self.stdin_path),
            "sessionJsonPath": str(self.session_json_path),
        }


def session_paths(root: Path, session_id: str) -> SessionPaths:
    """Derive the paths for a session under a control root.

    The ID must already be validated.
    """
    control_dir = root / session_id
    return SessionPaths(
        control_dir=control_dir,
        stdout_path=control_dir / STDOUT_FILE,
        stdin_path=control_dir / STDIN_FILE,
        session_json_path=control_dir / SESSION_JSON,
    )
