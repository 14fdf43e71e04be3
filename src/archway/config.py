"""Server configuration.

``ServerConfig`` holds what the HTTP adapter needs to listen, and can be
read from prefixed environment variables (``API_PORT``, ``JSONSTORE_HOST``).
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from archway.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Configuration for serving a container over HTTP.

    All fields have sensible defaults. Override what you need::

        config = ServerConfig(host="0.0.0.0", port=3001)
    """

    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "info"

    # Refuse to start while placeholder functions lack an overload
    check_placeholders: bool = True

    @classmethod
    def from_env(
        cls,
        prefix: str = "ARCHWAY",
        environ: Mapping[str, str] | None = None,
    ) -> "ServerConfig":
        """Build a config from ``<PREFIX>_HOST``, ``<PREFIX>_PORT``, ``<PREFIX>_LOG_LEVEL``.

        Unset variables keep their defaults. A non-integer port raises
        ``ConfigurationError``.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            host=env.get(f"{prefix}_HOST", defaults.host),
            port=parse_port(env.get(f"{prefix}_PORT"), f"{prefix}_PORT", defaults.port),
            log_level=env.get(f"{prefix}_LOG_LEVEL", defaults.log_level).lower(),
        )


def parse_port(value: str | None, name: str, default: int | None = None) -> int:
    """Parse a port number from an environment value."""
    if value is None or value == "":
        if default is None:
            msg = f"{name} is not set"
            raise ConfigurationError(msg)
        return default
    try:
        port = int(value)
    except ValueError:
        msg = f"{name} must be an integer port number, got {value!r}"
        raise ConfigurationError(msg) from None
    if not 0 <= port <= 65535:
        msg = f"{name} must be between 0 and 65535, got {port}"
        raise ConfigurationError(msg)
    return port
