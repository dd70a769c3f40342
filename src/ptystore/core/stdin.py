"""Stdin channel: a per-session named pipe, or a plain file where pipes are unavailable.

The PTY host process reads the channel (or polls it, when it is a file) and
forwards the bytes to the controlled process. Writers only ever append.
"""

import errno
import os
import stat
from pathlib import Path

from ptystore.core.errors import StdinWriteFailedError
from ptystore.core.logging_config import get_logger

logger = get_logger(__name__)


def create_channel(path: Path) -> None:
    """Create the stdin channel at `path`.

    Tries a FIFO first and falls back to an empty regular file. An existing
    object at `path` is left alone.
    """
    if path.exists():
        return
    try:
        os.mkfifo(path, 0o600)
        logger.debug("FIFO pipe created: %s", path)
        return
    except AttributeError:
        logger.debug("mkfifo unsupported, creating regular file: %s", path)
    except FileExistsError:
        return
    except OSError as e:
        logger.debug("mkfifo failed (%s), creating regular file: %s", e, path)

    if not path.exists():
        path.touch()


def is_fifo(path: Path) -> bool:
    try:
        return stat.S_ISFIFO(path.stat().st_mode)
    except OSError:
        return False


def write_channel(path: Path, data: str | bytes, session_id: str) -> int:
    """Append `data` to the stdin channel.

    FIFOs are opened O_WRONLY | O_NONBLOCK: the open fails with ENXIO when
    no process is reading the pipe, and a full pipe buffer fails with EAGAIN
    instead of hanging the caller. A missing channel is never created here.

    Args:
        path: The channel path.
        data: Text (encoded as UTF-8) or raw bytes.
        session_id: Session the channel belongs to, for error reporting.

    Returns:
        Number of bytes written.

    Raises:
        StdinWriteFailedError: If the channel is missing, has no reader, or
            the write fails. The message reports how many bytes were already
            written when a write fails part-way.
    """
    payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)

    if is_fifo(path):
        flags = os.O_WRONLY | os.O_NONBLOCK
    else:
        flags = os.O_WRONLY | os.O_APPEND

    try:
        fd = os.open(path, flags)
    except OSError as e:
        if e.errno == errno.ENXIO:
            reason = "no process is reading the stdin pipe"
        else:
            reason = e.strerror or str(e)
        raise StdinWriteFailedError(
            f"Failed to write to stdin for session {session_id}: {reason}",
            session_id=session_id,
        ) from e

    written = 0
    try:
        view = memoryview(payload)
        while written < len(payload):
            written += os.write(fd, view[written:])
    except OSError as e:
        if e.errno == errno.EAGAIN:
            reason = "stdin pipe is full"
        else:
            reason = e.strerror or str(e)
        raise StdinWriteFailedError(
            f"Failed to write to stdin for session {session_id}: {reason} "
            f"({written} of {len(payload)} bytes written)",
            session_id=session_id,
        ) from e
    finally:
        os.close(fd)

    logger.debug("wrote %d bytes to stdin for session %s", written, session_id)
    return written
