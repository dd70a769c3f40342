"""Top command - launch the ptystore TUI."""

import click

from ptystore.commands.common import get_store


@click.command()
@click.pass_context
def top(ctx: click.Context) -> None:
    """Launch the session browser TUI.

    Shows all sessions, refreshes on changes and reaps zombies periodically.
    """
    from ptystore.core.config import get_reap_interval
    from ptystore.tui.app import PtyStoreApp

    app = PtyStoreApp(get_store(ctx), reap_interval=get_reap_interval())
    app.run()
