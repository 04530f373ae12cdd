"""Session configuration for a BeeClear device.

This module provides the SessionConfig dataclass describing how to reach
and authenticate with a device, supporting serialization to/from
dictionaries and parsing of ``key=value`` command line options.

Example:
    config = SessionConfig(host="192.168.1.50", port=443)
    config.validate()

    # Serialize to dict for storage
    data = config.to_dict()

    # Restore from dict
    restored = SessionConfig.from_dict(data)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pybeeclear.constants import (
    DEFAULT_HOST,
    DEFAULT_PASSWORD,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_USERNAME,
    TLS_PORT,
)

# Option names accepted by from_options(), mapped to dataclass fields
_OPTION_ALIASES: dict[str, str] = {
    "host": "host",
    "port": "port",
    "useTLS": "use_tls",
    "use_tls": "use_tls",
    "timeout": "timeout",
    "username": "username",
    "password": "password",
}


def _parse_bool(value: str) -> bool:
    return value.strip().lower() == "true"


@dataclass
class SessionConfig:
    """Connection parameters and credentials for one device session.

    Attributes:
        host: IP address or hostname of the device
        port: TCP port (80 for HTTP, 443 for HTTPS)
        use_tls: Use HTTPS. Defaults to True when port is 443.
        timeout: Request timeout in milliseconds (default 4000)
        username: Device user name (factory default "beeclear")
        password: Device password (factory default "energie")
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    use_tls: bool | None = None
    timeout: int = DEFAULT_TIMEOUT_MS
    username: str = DEFAULT_USERNAME
    password: str = field(default=DEFAULT_PASSWORD, repr=False)

    def __post_init__(self) -> None:
        if self.use_tls is None:
            self.use_tls = self.port == TLS_PORT

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If configuration is invalid
        """
        if not self.host:
            raise ValueError("host must not be empty")
        if not 0 < self.port < 65536:
            raise ValueError(f"port must be between 1 and 65535, got {self.port}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a JSON serializable dictionary."""
        return {
            "host": self.host,
            "port": self.port,
            "use_tls": self.use_tls,
            "timeout": self.timeout,
            "username": self.username,
            "password": self.password,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SessionConfig:
        """Create configuration from dictionary.

        Args:
            data: Dictionary with configuration values (from to_dict())

        Returns:
            SessionConfig instance with values from dictionary
        """
        return cls(
            host=data.get("host", DEFAULT_HOST),
            port=data.get("port", DEFAULT_PORT),
            use_tls=data.get("use_tls"),
            timeout=data.get("timeout", DEFAULT_TIMEOUT_MS),
            username=data.get("username", DEFAULT_USERNAME),
            password=data.get("password", DEFAULT_PASSWORD),
        )

    @classmethod
    def from_options(cls, options: Mapping[str, str]) -> SessionConfig:
        """Create configuration from string options, e.g. parsed ``key=value`` pairs.

        Surrounding quotes are stripped, ``port`` and ``timeout`` are converted
        to int and ``useTLS`` to bool. Unknown keys are ignored.

        Raises:
            ValueError: If port or timeout is not a number
        """
        values: dict[str, Any] = {}
        for key, raw in options.items():
            name = _OPTION_ALIASES.get(key)
            if name is None:
                continue
            value = raw.strip("'\"")
            if name in ("port", "timeout"):
                values[name] = int(value)
            elif name == "use_tls":
                values[name] = _parse_bool(value)
            else:
                values[name] = value
        return cls.from_dict(values)


__all__ = [
    "SessionConfig",
]
