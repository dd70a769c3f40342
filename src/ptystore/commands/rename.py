"""Rename command for ptystore."""

import click

from ptystore.commands.common import fail, get_store
from ptystore.core.errors import PtyError


@click.command()
@click.argument("session_id")
@click.argument("name")
@click.pass_context
def rename(ctx: click.Context, session_id: str, name: str) -> None:
    """Set a session's display name."""
    store = get_store(ctx)
    try:
        store.update_name(session_id, name)
    except PtyError as e:
        fail(e)
