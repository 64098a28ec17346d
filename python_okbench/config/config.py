"""Configuration management for the okbench server."""

import os
from pathlib import Path
from typing import Optional, Tuple
import yaml
from uvicorn.config import LOG_LEVELS


DEFAULT_PORT = 4500
ALL_INTERFACES = "0.0.0.0"

_TRUE_VALUES = ("1", "true", "yes", "on")


class Config:
    """Configuration for the constant-response server.

    The defaults reproduce the reference behavior: listen on every interface
    at port 4500 and print nothing while serving.
    """

    def __init__(self):
        self.server_addr: str = f":{DEFAULT_PORT}"
        self.access_log: bool = False
        self.log_level: str = "warning"
        self.backlog: int = 2048

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from an optional YAML file and environment variables."""
        config = cls()

        # Only read a file when one is named explicitly
        config_path = os.getenv("OKB_CONFIG")
        if config_path:
            with open(Path(config_path), 'r') as f:
                yaml_config = yaml.safe_load(f)
                if yaml_config:
                    config._load_from_dict(yaml_config)

        # Override with environment variables
        config._load_from_env()
        config._validate()

        return config

    def _load_from_dict(self, data: dict):
        """Load configuration from dictionary."""
        server_config = data.get("server", {}) or {}
        self.server_addr = str(server_config.get("addr", self.server_addr))
        self.access_log = as_flag(server_config.get("access_log", self.access_log))
        self.log_level = str(server_config.get("log_level", self.log_level))
        self.backlog = int(server_config.get("backlog", self.backlog))

    def _load_from_env(self):
        """Load configuration from environment variables."""
        self.server_addr = os.getenv("OKB_SERVER_ADDR", self.server_addr)

        self.access_log = env_flag("OKB_ACCESS_LOG", self.access_log)
        self.log_level = os.getenv("OKB_LOG_LEVEL", self.log_level)

        backlog = os.getenv("OKB_BACKLOG")
        if backlog:
            self.backlog = int(backlog)

    def _validate(self):
        """Reject values uvicorn would fail on at startup."""
        self.log_level = self.log_level.strip().lower()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"invalid log level: {self.log_level!r} "
                             f"(expected one of {', '.join(LOG_LEVELS)})")

    def listen_address(self) -> Tuple[str, int]:
        """Split ``server_addr`` into a (host, port) pair.

        ``":4500"`` and ``"4500"`` both mean every IPv4 interface; IPv6 hosts
        are written in brackets, as in ``"[::]:4500"``.
        """
        addr = self.server_addr.strip()
        host, sep, port = addr.rpartition(':')
        if not sep:
            host, port = "", addr

        try:
            port_number = int(port)
        except ValueError:
            raise ValueError(f"invalid server address: {self.server_addr!r}")
        if not 0 <= port_number <= 65535:
            raise ValueError(f"invalid server address: {self.server_addr!r}")

        if host.startswith('[') and host.endswith(']'):
            host = host[1:-1]

        return host or ALL_INTERFACES, port_number


def env_flag(key: str, default: Optional[bool] = None) -> Optional[bool]:
    """Read a boolean environment variable, ``default`` when unset."""
    value = os.getenv(key)
    if value is None:
        return default
    return as_flag(value)


def as_flag(value) -> bool:
    """Interpret a config value as a boolean; strings use the env flag spelling."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_VALUES
    return bool(value)
