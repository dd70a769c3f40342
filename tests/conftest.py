"""Shared pytest fixtures for ptystore tests."""

import logging
import os
import subprocess

import pytest

from ptystore.core.state import SessionStore


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point HOME at a temp dir so tests never touch ~/.ptystore or ~/.vibetunnel.

    Also clears PTYSTORE_CONTROL_DIR to prevent pollution from the environment.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("PTYSTORE_CONTROL_DIR", raising=False)
    return home


@pytest.fixture
def control_root(tmp_path):
    """Control root for a test (not created; the store creates it)."""
    return tmp_path / "control"


@pytest.fixture
def store(control_root):
    return SessionStore(control_root)


@pytest.fixture
def dead_pid():
    """PID of a process that has exited and been reaped."""
    proc = subprocess.Popen(["true"])
    proc.wait()
    return proc.pid


@pytest.fixture
def live_pid():
    """PID of a process guaranteed to be alive for the test (this one)."""
    return os.getpid()


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by CLI invocations (they point at CliRunner streams)."""
    yield
    logging.getLogger("ptystore").handlers.clear()
