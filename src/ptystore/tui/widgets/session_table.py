"""Session list widget for the ptystore TUI."""

from textual.widgets import DataTable

from ptystore.core.session import Session


def _visible_sessions(sessions: list[Session], hide_exited: bool = False) -> list[Session]:
    """Filter sessions for display, keeping the listing order."""
    if not hide_exited:
        return list(sessions)
    return [s for s in sessions if s.status != "exited"]


def _truncate(text: str, width: int) -> str:
    if len(text) > width:
        return text[: width - 3] + "..."
    return text


class SessionTable(DataTable):
    """DataTable widget displaying sessions.

    Columns: ID, Name, Status, PID, Command, Last Modified
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._sessions: list[Session] = []
        self._row_ids: list[str] = []
        self._hide_exited: bool = False

    def on_mount(self) -> None:
        """Set up the table columns on mount."""
        self.add_columns("ID", "Name", "Status", "PID", "Command", "Last Modified")
        self.cursor_type = "row"

    def update_sessions(self, sessions: list[Session], hide_exited: bool = False) -> None:
        """Update the table with the given sessions.

        Args:
            sessions: Sessions in listing order.
            hide_exited: Whether to hide exited sessions.
        """
        self._sessions = sessions
        self._hide_exited = hide_exited
        self._render_sessions()

    def selected_session_id(self) -> str | None:
        """ID of the session under the cursor, if any."""
        row = self.cursor_row
        if row is None or not 0 <= row < len(self._row_ids):
            return None
        return self._row_ids[row]

    def _render_sessions(self) -> None:
        self.clear()
        self._row_ids = []

        for session in _visible_sessions(self._sessions, self._hide_exited):
            status = session.status
            if status == "exited" and session.record.exit_code is not None:
                status = f"exited ({session.record.exit_code})"

            self.add_row(
                _truncate(session.id, 36),
                _truncate(session.record.name or "-", 24),
                status,
                str(session.pid) if session.pid is not None else "-",
                _truncate(" ".join(session.record.command) or "-", 40),
                session.last_modified,
                key=session.id,
            )
            self._row_ids.append(session.id)
