"""
Startup configuration for the Todo API, read from environment variables.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigError

ENV_PREFIX = "TODO_API_"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    log_file: Optional[str] = None
    rewrite_redirect_status: Optional[int] = None

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Settings:
        """
        Build settings from ``TODO_API_*`` variables.

        Raises:
            ConfigError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            value = env.get(ENV_PREFIX + name)
            if value is None or not value.strip():
                return None
            return value.strip()

        port = _parse_int(get("PORT"), "PORT", default=cls.port)
        if not 1 <= port <= 65535:
            raise ConfigError(f"{ENV_PREFIX}PORT must be between 1 and 65535, got {port}")

        log_level = (get("LOG_LEVEL") or cls.log_level).upper()
        if log_level not in _LOG_LEVELS:
            raise ConfigError(
                f"{ENV_PREFIX}LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got '{log_level}'"
            )
        if get("DEBUG") == "1":
            log_level = "DEBUG"

        redirect_status = get("REWRITE_REDIRECT")
        if redirect_status is not None:
            redirect_status = _parse_int(redirect_status, "REWRITE_REDIRECT")
            if not 300 <= redirect_status <= 399:
                raise ConfigError(
                    f"{ENV_PREFIX}REWRITE_REDIRECT must be a 3xx status, got {redirect_status}"
                )

        return cls(
            host=get("HOST") or cls.host,
            port=port,
            log_level=log_level,
            log_file=get("LOG_FILE"),
            rewrite_redirect_status=redirect_status,
        )


def _parse_int(value: Optional[str], name: str, default: Optional[int] = None) -> int:
    if value is None:
        if default is None:
            raise ConfigError(f"{ENV_PREFIX}{name} is required")
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{ENV_PREFIX}{name} must be an integer, got '{value}'") from None
