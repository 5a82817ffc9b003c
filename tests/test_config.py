from __future__ import annotations

from pathlib import Path

import pytest

from snapshot_manager.config import ConfigError, ServerConfig, load_config


def test_defaults_match_original_tool() -> None:
    config = load_config({}, whitelist_path="/etc/whitelist")

    assert config == ServerConfig(whitelist_path=Path("/etc/whitelist"))
    assert config.host == "localhost"
    assert config.port == 7877
    assert config.zfs_binary == "zfs"
    assert config.metrics_port is None
    assert config.address == "localhost:7877"


def test_environment_supplies_values() -> None:
    environ = {
        "SNAPSHOT_MANAGER_WHITELIST": "/srv/whitelist",
        "SNAPSHOT_MANAGER_HOST": "0.0.0.0",
        "SNAPSHOT_MANAGER_PORT": "9000",
        "SNAPSHOT_MANAGER_ZFS_BINARY": "/usr/sbin/zfs",
        "SNAPSHOT_MANAGER_METRICS_PORT": "9100",
        "SNAPSHOT_MANAGER_LOG_LEVEL": "DEBUG",
    }

    config = load_config(environ)

    assert config.whitelist_path == Path("/srv/whitelist")
    assert config.host == "0.0.0.0"
    assert config.port == 9000
    assert config.zfs_binary == "/usr/sbin/zfs"
    assert config.metrics_port == 9100
    assert config.log_level == "DEBUG"


def test_overrides_win_over_environment() -> None:
    environ = {"SNAPSHOT_MANAGER_WHITELIST": "/srv/whitelist", "SNAPSHOT_MANAGER_PORT": "9000"}

    config = load_config(environ, whitelist_path="/tmp/other", port=8000, host=None)

    assert config.whitelist_path == Path("/tmp/other")
    assert config.port == 8000
    assert config.host == "localhost"


def test_whitelist_is_required() -> None:
    with pytest.raises(ConfigError):
        load_config({})


@pytest.mark.parametrize("port", ["abc", "7877.5"])
def test_bad_port_in_environment(port: str) -> None:
    with pytest.raises(ConfigError):
        load_config({"SNAPSHOT_MANAGER_PORT": port}, whitelist_path="/w")


@pytest.mark.parametrize("port", [0, 70000])
def test_port_out_of_range(port: int) -> None:
    with pytest.raises(ConfigError):
        load_config({}, whitelist_path="/w", port=port)


def test_config_is_frozen() -> None:
    config = load_config({}, whitelist_path="/w")

    with pytest.raises(AttributeError):
        config.port = 1  # type: ignore[misc]


def test_log_level_is_normalized() -> None:
    config = load_config({"SNAPSHOT_MANAGER_LOG_LEVEL": "warning"}, whitelist_path="/w")

    assert config.log_level == "WARNING"


def test_unknown_log_level_flag_is_rejected() -> None:
    with pytest.raises(ConfigError):
        load_config({}, whitelist_path="/w", log_level="bogus")


def test_unknown_log_level_in_environment_is_rejected() -> None:
    with pytest.raises(ConfigError):
        load_config({"SNAPSHOT_MANAGER_LOG_LEVEL": "bogus"}, whitelist_path="/w")
