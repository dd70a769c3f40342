"""Status command for ptystore."""

import click

from ptystore.commands.common import fail, get_store
from ptystore.core.errors import PtyError
from ptystore.core.session import VALID_STATUSES


@click.command()
@click.argument("session_id")
@click.argument("new_status", metavar="STATUS", type=click.Choice(sorted(VALID_STATUSES)))
@click.option("--pid", type=int, default=None, help="PID of the PTY-hosted process")
@click.option("--exit-code", type=int, default=None, help="Exit code of the process")
@click.pass_context
def status(
    ctx: click.Context,
    session_id: str,
    new_status: str,
    pid: int | None,
    exit_code: int | None,
) -> None:
    """Update a session's status.

    Examples:

        ptystore status abc-123 running --pid 4242

        ptystore status abc-123 exited --exit-code 0
    """
    store = get_store(ctx)
    try:
        store.update_status(session_id, new_status, pid=pid, exit_code=exit_code)
    except PtyError as e:
        fail(e)
