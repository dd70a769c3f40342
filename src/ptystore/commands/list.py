"""List command for ptystore."""

import click
import orjson

from ptystore.commands.common import fail, get_store
from ptystore.core.errors import PtyError
from ptystore.core.session import Session


@click.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as a JSON array")
@click.option("--status", "status_filter", default=None, help="Only show sessions with this status")
@click.pass_context
def list_command(ctx: click.Context, as_json: bool, status_filter: str | None) -> None:
    """List sessions, most recently started first.

    Running sessions whose process has died are marked exited as a side effect.
    """
    store = get_store(ctx)
    try:
        sessions = store.list_sessions()
    except PtyError as e:
        fail(e)

    if status_filter:
        sessions = [s for s in sessions if s.status == status_filter]

    if as_json:
        click.echo(
            orjson.dumps([s.to_dict() for s in sessions], option=orjson.OPT_INDENT_2).decode()
        )
        return

    if not sessions:
        click.echo("No sessions")
        return

    for line in format_table(sessions):
        click.echo(line)


def format_status(session: Session) -> str:
    if session.status == "exited" and session.record.exit_code is not None:
        return f"exited ({session.record.exit_code})"
    return session.status


def format_table(sessions: list[Session]) -> list[str]:
    """Render sessions as aligned text columns."""
    rows = [("ID", "NAME", "STATUS", "PID", "COMMAND")]
    for s in sessions:
        rows.append(
            (
                s.id,
                s.record.name or "",
                format_status(s),
                str(s.pid) if s.pid is not None else "",
                " ".join(s.record.command),
            )
        )
    widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]) - 1)]
    lines = []
    for row in rows:
        cells = [cell.ljust(width) for cell, width in zip(row, widths)]
        lines.append("  ".join(cells + [row[-1]]).rstrip())
    return lines
