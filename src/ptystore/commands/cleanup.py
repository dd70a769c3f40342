"""Cleanup command for ptystore."""

import click

from ptystore.commands.common import fail, get_store
from ptystore.core.cleanup import cleanup_exited, cleanup_session
from ptystore.core.errors import PtyError


@click.command()
@click.argument("session_id", required=False)
@click.option("--exited", is_flag=True, help="Remove every exited session")
@click.pass_context
def cleanup(ctx: click.Context, session_id: str | None, exited: bool) -> None:
    """Remove a session's directory, or all exited sessions.

    Removing a session that doesn't exist is not an error. With --exited,
    every exited session is attempted even if some fail; the command exits
    with status 1 if any did.

    Examples:

        ptystore cleanup abc-123

        ptystore cleanup --exited
    """
    if bool(session_id) == exited:
        raise click.UsageError("Give either SESSION_ID or --exited")

    store = get_store(ctx)

    if session_id:
        try:
            cleanup_session(store, session_id)
        except PtyError as e:
            fail(e)
        return

    try:
        result = cleanup_exited(store)
    except PtyError as e:
        fail(e)

    for removed_id in result.removed:
        click.echo(removed_id)
    for error in result.failures.values():
        click.echo(f"Error [{error.kind}]: {error.message}", err=True)
    if result.failures:
        raise SystemExit(1)
