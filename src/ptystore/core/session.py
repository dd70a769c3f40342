"""Session record and listing view for ptystore."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

VALID_STATUSES = {"starting", "running", "exited"}
TERMINAL_STATUSES = {"exited"}

# Keys this package understands; anything else in session.json is passed through.
_KNOWN_KEYS = {"status", "pid", "exitCode", "name", "startedAt", "command", "workingDir"}

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return format_timestamp(datetime.now(timezone.utc))


def format_timestamp(value: datetime) -> str:
    """Format a datetime as e.g. 2024-01-01T12:00:00.000Z."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp, returning None if it can't be parsed.

    Naive timestamps are taken as UTC.
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class SessionRecord:
    """Contents of a session's session.json.

    Attributes:
        status: One of "starting", "running", "exited".
        started_at: ISO timestamp set once at creation.
        pid: OS process ID of the PTY-hosted process, once launched.
        exit_code: Exit code, set once status is "exited".
        name: Optional display label.
        command: Command line the session runs (opaque).
        working_dir: Working directory of the command (opaque).
        extra: Unrecognised keys, preserved across load/save.
    """

    status: str
    started_at: str
    pid: int | None = None
    exit_code: int | None = None
    name: str | None = None
    command: list[str] = field(default_factory=list)
    working_dir: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate status."""
        if self.status not in VALID_STATUSES:
            raise ValueError(
                f"Invalid status: {self.status}. Must be one of {VALID_STATUSES}"
            )

    @property
    def started_at_datetime(self) -> datetime:
        """startedAt as a datetime; unparseable values sort as the epoch."""
        return parse_timestamp(self.started_at) or EPOCH

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the on-disk camelCase form, omitting unset fields."""
        data: dict[str, Any] = dict(self.extra)
        if self.command:
            data["command"] = list(self.command)
        if self.name is not None:
            data["name"] = self.name
        if self.working_dir is not None:
            data["workingDir"] = self.working_dir
        data["status"] = self.status
        if self.pid is not None:
            data["pid"] = self.pid
        if self.exit_code is not None:
            data["exitCode"] = self.exit_code
        data["startedAt"] = self.started_at
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionRecord":
        """Build a record from decoded session.json content.

        Raises:
            ValueError: If the content is not a valid record.
        """
        if not isinstance(data, dict):
            raise ValueError("session record must be a JSON object")

        pid = data.get("pid")
        exit_code = data.get("exitCode")
        if pid is not None and (isinstance(pid, bool) or not isinstance(pid, int)):
            raise ValueError(f"pid must be an integer, got {pid!r}")
        if exit_code is not None and (
            isinstance(exit_code, bool) or not isinstance(exit_code, int)
        ):
            raise ValueError(f"exitCode must be an integer, got {exit_code!r}")

        command = data.get("command") or []
        if isinstance(command, str):
            command = [command]

        return cls(
            status=data.get("status", ""),
            started_at=data.get("startedAt", ""),
            pid=pid,
            exit_code=exit_code,
            name=data.get("name"),
            command=[str(part) for part in command],
            working_dir=data.get("workingDir"),
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )


@dataclass
class Session:
    """A session as returned by listing: record plus ID and last activity.

    Attributes:
        id: The session ID (directory name).
        record: The loaded session record.
        last_modified: mtime of the stdout capture file, else startedAt.
    """

    id: str
    record: SessionRecord
    last_modified: str

    @property
    def status(self) -> str:
        return self.record.status

    @property
    def pid(self) -> int | None:
        return self.record.pid

    @property
    def started_at(self) -> str:
        return self.record.started_at

    def to_dict(self) -> dict[str, Any]:
        data = self.record.to_dict()
        data["id"] = self.id
        data["lastModified"] = self.last_modified
        return data
