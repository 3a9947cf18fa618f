"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

from tollgate.errors import ConfigurationError

DEFAULT_TOKEN = "mysecrettoken"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=8080, token="s3cr3t")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False
    workers: int = 1

    # Auth: the single valid bearer credential
    token: str = DEFAULT_TOKEN

    # Logging
    log_level: str = "info"
    log_format: str = "text"

    # Routing
    case_sensitive: bool = False
    strict_slashes: bool = False

    # Startup endpoint listing
    banner: bool = True

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: object,
    ) -> AppConfig:
        """Build a config from environment variables.

        Reads ``PORT``, ``HOST``, ``AUTH_TOKEN``, ``DEBUG`` and
        ``LOG_LEVEL``. Missing variables keep the defaults. Keyword
        *overrides* win over both.

        Raises:
            ConfigurationError: If ``PORT`` is not an integer.
        """
        env = os.environ if environ is None else environ
        config = cls()

        if "PORT" in env:
            try:
                config = replace(config, port=int(env["PORT"]))
            except ValueError:
                msg = f"PORT must be an integer, got {env['PORT']!r}"
                raise ConfigurationError(msg) from None
        if "HOST" in env:
            config = replace(config, host=env["HOST"])
        if "AUTH_TOKEN" in env:
            config = replace(config, token=env["AUTH_TOKEN"])
        if "DEBUG" in env:
            config = replace(config, debug=env["DEBUG"].strip().lower() in _TRUTHY)
        if "LOG_LEVEL" in env:
            config = replace(config, log_level=env["LOG_LEVEL"].strip().lower())

        if overrides:
            config = replace(config, **overrides)
        return config
