"""Wait command for ptystore.

Blocks until a session exits.
"""

from pathlib import Path

import click
import orjson
from watchfiles import watch

from ptystore.commands.common import fail, get_store
from ptystore.core.config import get_reap_interval
from ptystore.core.errors import PtyError, SessionNotFoundError
from ptystore.core.reaper import reconcile_record
from ptystore.core.session import TERMINAL_STATUSES, SessionRecord
from ptystore.core.state import SessionStore


@click.command()
@click.argument("session_id")
@click.pass_context
def wait(ctx: click.Context, session_id: str) -> None:
    """Wait for a session to exit.

    Watches the session directory for record changes, and checks the
    process directly on an interval in case it died without recording its
    exit. Prints the final record as JSON.

    Exit code: the session's exit code when it is 0-255, 1 on error.

    Examples:

        ptystore wait abc-123
    """
    store = get_store(ctx)
    try:
        session_paths = store.get_session_paths(session_id)
        record = _exited_record(store, session_id)
        if record is None:
            record = _wait_for_exit(store, session_id, session_paths.control_dir)
    except PtyError as e:
        fail(e)

    data = {"id": session_id, **record.to_dict()}
    click.echo(orjson.dumps(data, option=orjson.OPT_INDENT_2).decode())

    exit_code = record.exit_code or 0
    if exit_code == 0:
        return
    # Killed by a signal, or out of range for a process exit status
    raise SystemExit(exit_code if 0 < exit_code < 256 else 1)


def _wait_for_exit(store: SessionStore, session_id: str, session_dir: Path) -> SessionRecord:
    interval_ms = int(get_reap_interval() * 1000)
    try:
        # Timeouts yield an empty change set so the process is re-checked
        for _ in watch(session_dir, rust_timeout=interval_ms, yield_on_timeout=True):
            record = _exited_record(store, session_id)
            if record is not None:
                return record
    except FileNotFoundError:
        raise SessionNotFoundError(
            f"Session {session_id} was deleted", session_id=session_id
        )

    record = _exited_record(store, session_id)
    if record is None:
        raise SessionNotFoundError(
            f"Session {session_id} did not exit", session_id=session_id
        )
    return record


def _exited_record(store: SessionStore, session_id: str) -> SessionRecord | None:
    """Return the record if the session has exited, None if still live.

    Raises:
        SessionNotFoundError: If the session record is gone.
    """
    record = store.load(session_id)
    if record is None:
        raise SessionNotFoundError(f"Session {session_id} not found", session_id=session_id)
    reconcile_record(store, session_id, record)
    if record.status in TERMINAL_STATUSES:
        return record
    return None
