"""Show command for ptystore.

Prints a session's record as JSON.
"""

import click
import orjson

from ptystore.commands.common import fail, get_store
from ptystore.core.errors import PtyError, SessionNotFoundError


@click.command()
@click.argument("session_id")
@click.pass_context
def show(ctx: click.Context, session_id: str) -> None:
    """Show a session's record.

    SESSION_ID is the ID of the session to show.
    """
    store = get_store(ctx)
    try:
        record = store.load(session_id)
    except PtyError as e:
        fail(e)

    if record is None:
        fail(SessionNotFoundError(f"Session {session_id} not found", session_id=session_id))

    data = {"id": session_id, **record.to_dict()}
    click.echo(orjson.dumps(data, option=orjson.OPT_INDENT_2).decode())
