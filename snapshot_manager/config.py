from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 7877

ENV_PREFIX = "SNAPSHOT_MANAGER_"


class ConfigError(ValueError):
    """Raised when the server configuration is incomplete or malformed."""


@dataclass(frozen=True)
class ServerConfig:
    whitelist_path: Path
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    zfs_binary: str = "zfs"
    metrics_port: int | None = None
    log_level: str = "INFO"

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    def with_overrides(self, **overrides: Any) -> ServerConfig:
        """Returns a copy with every override that is not None applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        if "whitelist_path" in values:
            values["whitelist_path"] = Path(values["whitelist_path"])
        return replace(self, **values)


def _int_from_env(environ: Mapping[str, str], name: str) -> int | None:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc


def _check_log_level(level: str) -> str:
    level = level.upper()
    # getLevelName maps known names to ints and anything else to "Level X".
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"Unknown log level {level!r}")
    return level


def load_config(environ: Mapping[str, str] | None = None, **overrides: Any) -> ServerConfig:
    """Builds the config from the environment, then applies explicit overrides."""
    if environ is None:
        environ = os.environ

    whitelist = overrides.pop("whitelist_path", None) or environ.get(ENV_PREFIX + "WHITELIST")
    if not whitelist:
        raise ConfigError(f"A whitelist path is required (--whitelist or {ENV_PREFIX}WHITELIST)")

    config = ServerConfig(whitelist_path=Path(whitelist))
    config = config.with_overrides(
        host=environ.get(ENV_PREFIX + "HOST"),
        port=_int_from_env(environ, "PORT"),
        zfs_binary=environ.get(ENV_PREFIX + "ZFS_BINARY"),
        metrics_port=_int_from_env(environ, "METRICS_PORT"),
        log_level=environ.get(ENV_PREFIX + "LOG_LEVEL"),
    )
    config = config.with_overrides(**overrides)
    config = replace(config, log_level=_check_log_level(config.log_level))

    if not 0 < config.port < 65536:
        raise ConfigError(f"Port {config.port} is out of range")
    return config
