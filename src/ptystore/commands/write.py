"""Write command for ptystore.

Sends input to a session's stdin channel.
"""

import re
import sys

import click

from ptystore.commands.common import fail, get_store
from ptystore.core.errors import PtyError

_ESCAPES = {"n": b"\n", "r": b"\r", "t": b"\t", "e": b"\x1b", "0": b"\x00", "\\": b"\\"}
_ESCAPE_RE = re.compile(rb"\\(x[0-9a-fA-F]{2}|[nrte0\\])")


def unescape(data: str) -> bytes:
    """Interpret \\n, \\r, \\t, \\e, \\0, \\\\ and \\xNN escapes."""

    def replace(match: re.Match) -> bytes:
        token = match.group(1).decode()
        if token.startswith("x"):
            return bytes([int(token[1:], 16)])
        return _ESCAPES[token]

    return _ESCAPE_RE.sub(replace, data.encode("utf-8"))


@click.command()
@click.argument("session_id")
@click.argument("data")
@click.option("--raw", is_flag=True, help="Send DATA as-is, without interpreting escapes")
@click.pass_context
def write(ctx: click.Context, session_id: str, data: str, raw: bool) -> None:
    """Append DATA to a session's stdin.

    Use "-" as DATA to forward this command's own stdin.

    Examples:

        ptystore write abc-123 'ls\\n'

        echo 'ls' | ptystore write abc-123 -
    """
    if data == "-":
        payload = sys.stdin.buffer.read()
    elif raw:
        payload = data.encode("utf-8")
    else:
        payload = unescape(data)

    store = get_store(ctx)
    try:
        store.write_to_stdin(session_id, payload)
    except PtyError as e:
        fail(e)
