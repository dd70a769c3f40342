"""Config command for ptystore."""

import click
import orjson

from ptystore.core.config import (
    get_control_root,
    get_reap_interval,
    set_control_root,
    set_reap_interval,
)


@click.command()
@click.option("--control-root", default=None, help="Set the default control directory")
@click.option("--reap-interval", type=float, default=None, help="Set the reaper interval in seconds")
def config(control_root: str | None, reap_interval: float | None) -> None:
    """Show or change ptystore settings.

    With no options, prints the effective settings as JSON.
    """
    if control_root is not None:
        set_control_root(control_root)
    if reap_interval is not None:
        try:
            set_reap_interval(reap_interval)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--reap-interval")

    settings = {
        "control_root": str(get_control_root()),
        "reap_interval": get_reap_interval(),
    }
    click.echo(orjson.dumps(settings, option=orjson.OPT_INDENT_2).decode())
