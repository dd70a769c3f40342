"""Host OS process liveness checks."""

import os


def is_process_running(pid: int | None) -> bool:
    """Check whether a process with this PID exists.

    Uses signal 0, which performs permission and existence checks without
    delivering a signal. A process owned by another user still counts as
    running.
    """
    if not pid or pid <= 0:
        return False
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    except (OSError, OverflowError):
        return False
    return True
