"""Main Textual app for the ptystore TUI."""

import asyncio

from textual.app import App, ComposeResult
from textual.widgets import Footer, Header, Static

from ptystore.core.cleanup import cleanup_exited, cleanup_session
from ptystore.core.errors import PtyError
from ptystore.core.logging_config import get_logger
from ptystore.core.reaper import update_zombie_sessions
from ptystore.core.session import Session
from ptystore.core.state import SessionStore
from ptystore.tui.widgets.session_table import SessionTable

logger = get_logger(__name__)


class PtyStoreApp(App):
    """ptystore TUI application.

    Displays all sessions, refreshes on file changes and reaps zombie
    sessions on a fixed interval.
    """

    TITLE = "ptystore"
    BINDINGS = [
        ("c", "cleanup_session", "Clean"),
        ("C", "cleanup_exited", "Clean Exited"),
        ("j", "cursor_down", "Down"),
        ("k", "cursor_up", "Up"),
        ("h", "toggle_hide_exited", "Hide Exited"),
        ("r", "refresh", "Refresh"),
        ("q", "quit", "Quit"),
    ]

    _hide_exited: bool = False
    CSS = """
    SessionTable {
        height: 1fr;
    }

    #empty-message {
        width: 100%;
        height: 100%;
        content-align: center middle;
        color: $text-muted;
    }
    """

    def __init__(self, store: SessionStore, reap_interval: float = 1.0) -> None:
        super().__init__()
        self._store = store
        self._reap_interval = reap_interval
        self._watcher_task: asyncio.Task | None = None
        self.sessions: list[Session] = []

    def compose(self) -> ComposeResult:
        """Compose the app layout."""
        yield Header()
        yield SessionTable()
        yield Static("No sessions", id="empty-message")
        yield Footer()

    def on_mount(self) -> None:
        """Called when the app is mounted."""
        self.refresh_sessions()
        self.set_interval(self._reap_interval, self._reap)
        self._watcher_task = asyncio.create_task(self._watch_sessions())

    async def on_unmount(self) -> None:
        """Called when the app is unmounted."""
        if self._watcher_task:
            self._watcher_task.cancel()
            try:
                await self._watcher_task
            except asyncio.CancelledError:
                pass

    def refresh_sessions(self) -> None:
        """Reload and display all sessions."""
        try:
            self.sessions = self._store.list_sessions()
        except PtyError as e:
            logger.warning("%s", e)
            self.notify(str(e), severity="error")
            return

        table = self.query_one(SessionTable)
        empty_msg = self.query_one("#empty-message", Static)

        if self.sessions:
            table.update_sessions(self.sessions, hide_exited=self._hide_exited)
            table.display = True
            empty_msg.display = False
            running = sum(1 for s in self.sessions if s.status == "running")
            filter_text = " [filtered]" if self._hide_exited else ""
            self.sub_title = f"{running} running{filter_text}"
        else:
            table.display = False
            empty_msg.display = True
            self.sub_title = "0 sessions"

    def action_refresh(self) -> None:
        self.refresh_sessions()

    def action_cursor_down(self) -> None:
        self.query_one(SessionTable).action_cursor_down()

    def action_cursor_up(self) -> None:
        self.query_one(SessionTable).action_cursor_up()

    def action_cleanup_session(self) -> None:
        """Remove the selected session if it has exited."""
        session_id = self.query_one(SessionTable).selected_session_id()
        if session_id is None:
            self.notify("No session selected", severity="warning")
            return

        session = next((s for s in self.sessions if s.id == session_id), None)
        if session is not None and session.status != "exited":
            self.notify(f"Session {session_id} is still {session.status}", severity="warning")
            return

        try:
            cleanup_session(self._store, session_id)
        except PtyError as e:
            self.notify(f"Cleanup failed: {e}", severity="error")
        self.refresh_sessions()

    def action_cleanup_exited(self) -> None:
        """Remove every exited session."""
        try:
            result = cleanup_exited(self._store)
        except PtyError as e:
            self.notify(str(e), severity="error")
            return

        if result.failures:
            self.notify(
                f"Failed to clean {len(result.failures)} sessions", severity="warning"
            )
        if result.removed:
            self.notify(f"Cleaned up {len(result.removed)} sessions")
        self.refresh_sessions()

    def action_toggle_hide_exited(self) -> None:
        """Toggle hiding of exited sessions."""
        self._hide_exited = not self._hide_exited
        self.refresh_sessions()

    def _reap(self) -> None:
        if update_zombie_sessions(self._store):
            self.refresh_sessions()

    async def _watch_sessions(self) -> None:
        """Watch the control directory for changes and refresh."""
        from watchfiles import awatch

        control_root = self._store.control_root
        control_root.mkdir(parents=True, exist_ok=True)

        try:
            async for _changes in awatch(control_root):
                if not control_root.exists():
                    control_root.mkdir(parents=True, exist_ok=True)
                self.refresh_sessions()
        except asyncio.CancelledError:
            pass
        except FileNotFoundError:
            # Control root was deleted, recreate and restart watching
            control_root.mkdir(parents=True, exist_ok=True)
            self.refresh_sessions()
            self._watcher_task = asyncio.create_task(self._watch_sessions())
