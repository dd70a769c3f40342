"""ptystore configuration management.

Handles ~/.ptystore/config.json and resolution of the control root.
"""

import os
from pathlib import Path

import orjson

CONTROL_DIR_ENV = "PTYSTORE_CONTROL_DIR"
DEFAULT_REAP_INTERVAL = 1.0


def get_config_path() -> Path:
    """Get the path to ptystore's config file."""
    return Path.home() / ".ptystore" / "config.json"


def default_control_root() -> Path:
    """Control root shared with other tooling reading the same tree."""
    return Path.home() / ".vibetunnel" / "control"


def read_config() -> dict:
    """Read config, returning empty dict if not found."""
    config_path = get_config_path()
    if not config_path.exists():
        return {}
    try:
        content = config_path.read_bytes()
        return orjson.loads(content) if content else {}
    except (orjson.JSONDecodeError, OSError):
        return {}


def write_config(config: dict) -> None:
    """Write config."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_bytes(orjson.dumps(config, option=orjson.OPT_INDENT_2))


def get_control_root(override: str | Path | None = None) -> Path:
    """Resolve the control root for an entry point.

    Order: explicit override, $PTYSTORE_CONTROL_DIR, `control_root` in the
    config file, then the default under the home directory.
    """
    if override:
        return Path(override).expanduser()
    if env_root := os.environ.get(CONTROL_DIR_ENV):
        return Path(env_root).expanduser()
    configured = read_config().get("control_root")
    if configured:
        return Path(configured).expanduser()
    return default_control_root()


def set_control_root(path: str | Path) -> None:
    config = read_config()
    config["control_root"] = str(path)
    write_config(config)


def get_reap_interval() -> float:
    """Seconds between liveness passes of the periodic reaper.

    Returns:
        The configured interval (default: 1.0).
    """
    value = read_config().get("reap_interval", DEFAULT_REAP_INTERVAL)
    try:
        interval = float(value)
    except (TypeError, ValueError):
        return DEFAULT_REAP_INTERVAL
    return interval if interval > 0 else DEFAULT_REAP_INTERVAL


def set_reap_interval(seconds: float) -> None:
    """Set the reaper interval.

    Args:
        seconds: The new interval (must be > 0).
    """
    if seconds <= 0:
        raise ValueError("reap_interval must be > 0")
    config = read_config()
    config["reap_interval"] = seconds
    write_config(config)
