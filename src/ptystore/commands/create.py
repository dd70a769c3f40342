"""Create command for ptystore."""

import click
import orjson

from ptystore.commands.common import fail, get_store
from ptystore.core.errors import PtyError


@click.command()
@click.option("--id", "session_id", default=None, help="Session ID (default: new UUID)")
@click.option("--name", default=None, help="Display name for the session")
@click.option("--cwd", "working_dir", default=None, help="Working directory of the command")
@click.option("--json", "as_json", is_flag=True, help="Print the session paths as JSON")
@click.argument("command", nargs=-1)
@click.pass_context
def create(
    ctx: click.Context,
    session_id: str | None,
    name: str | None,
    working_dir: str | None,
    as_json: bool,
    command: tuple[str, ...],
) -> None:
    """Create a session directory, stdin channel and "starting" record.

    COMMAND is recorded for the PTY host process; it is not run here.

    Examples:

        ptystore create -- bash -l

        ptystore create --id build-1 --name build -- make
    """
    store = get_store(ctx)
    try:
        session_id, session_paths = store.create_session(
            session_id=session_id,
            command=list(command),
            working_dir=working_dir,
            name=name,
        )
    except PtyError as e:
        fail(e)

    if as_json:
        data = {"id": session_id, **session_paths.to_dict()}
        click.echo(orjson.dumps(data, option=orjson.OPT_INDENT_2).decode())
    else:
        click.echo(session_id)
