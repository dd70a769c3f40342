"""Paths command for ptystore."""

import click
import orjson

from ptystore.commands.common import fail, get_store
from ptystore.core.errors import PtyError


@click.command()
@click.argument("session_id")
@click.pass_context
def paths(ctx: click.Context, session_id: str) -> None:
    """Print the filesystem paths of a session as JSON."""
    store = get_store(ctx)
    try:
        session_paths = store.get_session_paths(session_id)
    except PtyError as e:
        fail(e)
    click.echo(orjson.dumps(session_paths.to_dict(), option=orjson.OPT_INDENT_2).decode())
