"""Tests for configuration."""

import pytest

from ptystore.core.config import (
    DEFAULT_REAP_INTERVAL,
    get_config_path,
    get_control_root,
    get_reap_interval,
    read_config,
    set_control_root,
    set_reap_interval,
    write_config,
)


def test_read_config_missing(isolated_home):
    assert read_config() == {}


def test_read_config_corrupt(isolated_home):
    path = get_config_path()
    path.parent.mkdir(parents=True)
    path.write_text("{nope")

    assert read_config() == {}


def test_write_then_read(isolated_home):
    write_config({"reap_interval": 2.5})

    assert read_config() == {"reap_interval": 2.5}
    assert get_config_path() == isolated_home / ".ptystore" / "config.json"


def test_control_root_default(isolated_home):
    assert get_control_root() == isolated_home / ".vibetunnel" / "control"


def test_control_root_resolution_order(isolated_home, tmp_path, monkeypatch):
    set_control_root(tmp_path / "from-config")
    assert get_control_root() == tmp_path / "from-config"

    monkeypatch.setenv("PTYSTORE_CONTROL_DIR", str(tmp_path / "from-env"))
    assert get_control_root() == tmp_path / "from-env"

    assert get_control_root(tmp_path / "explicit") == tmp_path / "explicit"


def test_reap_interval(isolated_home):
    assert get_reap_interval() == DEFAULT_REAP_INTERVAL

    set_reap_interval(0.25)
    assert get_reap_interval() == 0.25


def test_reap_interval_invalid(isolated_home):
    with pytest.raises(ValueError):
        set_reap_interval(0)

    write_config({"reap_interval": "soon"})
    assert get_reap_interval() == DEFAULT_REAP_INTERVAL
