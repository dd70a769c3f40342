"""Reap command for ptystore.

Marks running sessions whose process has died as exited.
"""

import click

from ptystore.commands.common import get_store
from ptystore.core.config import get_reap_interval
from ptystore.core.reaper import run_reaper, update_zombie_sessions


@click.command()
@click.option("--watch", is_flag=True, help="Keep reaping on a fixed interval")
@click.option(
    "--interval",
    type=float,
    default=None,
    help="Seconds between passes with --watch (default: from config, 1.0)",
)
@click.pass_context
def reap(ctx: click.Context, watch: bool, interval: float | None) -> None:
    """Reconcile zombie sessions.

    Prints the ID of each session transitioned to exited.
    """
    store = get_store(ctx)

    if not watch:
        for session_id in update_zombie_sessions(store):
            click.echo(session_id)
        return

    if interval is None:
        interval = get_reap_interval()
    if interval <= 0:
        raise click.BadParameter("must be > 0", param_hint="--interval")

    try:
        run_reaper(store, interval)
    except KeyboardInterrupt:
        pass
