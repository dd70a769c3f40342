"""CLI entry point for ptystore.

Usage:
    ptystore list                   # List sessions
    ptystore create -- bash -l      # Create a session record
    ptystore write <id> 'ls\\n'      # Send input to a session
    ptystore cleanup --exited       # Remove exited sessions
    ptystore top                    # Launch the TUI
"""

import click

from ptystore.commands.cleanup import cleanup
from ptystore.commands.config import config
from ptystore.commands.create import create
from ptystore.commands.list import list_command
from ptystore.commands.paths import paths
from ptystore.commands.reap import reap
from ptystore.commands.rename import rename
from ptystore.commands.show import show
from ptystore.commands.status import status
from ptystore.commands.top import top
from ptystore.commands.wait import wait
from ptystore.commands.write import write
from ptystore.core.logging_config import setup_logging


@click.group()
@click.option(
    "--control-dir",
    type=click.Path(file_okay=False),
    envvar="PTYSTORE_CONTROL_DIR",
    help="Control directory holding one subdirectory per session",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.version_option(package_name="ptystore")
@click.pass_context
def main(ctx: click.Context, control_dir: str | None, verbose: bool) -> None:
    """ptystore - durable PTY session records on the filesystem.

    Sessions live in a shared control directory so that servers, CLI
    invocations and host applications can discover them without a broker.
    """
    setup_logging(verbose=verbose)
    ctx.ensure_object(dict)
    ctx.obj["control_dir"] = control_dir


# Register commands
main.add_command(create)
main.add_command(list_command)
main.add_command(show)
main.add_command(status)
main.add_command(rename)
main.add_command(write)
main.add_command(cleanup)
main.add_command(reap)
main.add_command(wait)
main.add_command(paths)
main.add_command(config)
main.add_command(top)
