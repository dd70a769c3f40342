"""Helpers shared by CLI commands."""

import click

from ptystore.core.config import get_control_root
from ptystore.core.errors import PtyError
from ptystore.core.state import SessionStore


def get_store(ctx: click.Context) -> SessionStore:
    """Build the session store for the control root chosen on the command line."""
    obj = ctx.find_object(dict) or {}
    if "store" not in obj:
        obj["store"] = SessionStore(get_control_root(obj.get("control_dir")))
    return obj["store"]


def fail(error: PtyError) -> None:
    """Report a store error verbatim and exit with status 1."""
    click.echo(f"Error [{error.kind}]: {error.message}", err=True)
    raise SystemExit(1)
