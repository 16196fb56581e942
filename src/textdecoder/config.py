"""
Environment-driven defaults for textdecoder.

The stream helpers and :func:`~textdecoder.utils.logging.configure_logging`
read their defaults from here when the caller does not pass them.
"""

import os
from dataclasses import dataclass

DEFAULT_ENCODING = "utf-8"
DEFAULT_LOG_LEVEL = "WARNING"

_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


@dataclass(frozen=True)
class DecoderConfig:
    """Default settings for decoding sessions created by the helpers.

    Attributes:
        encoding: Encoding label used when none is given.
        fatal: Whether helper-created sessions raise on malformed input.
        log_level: Minimum loguru level for ``configure_logging``.
    """

    encoding: str = DEFAULT_ENCODING
    fatal: bool = False
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "DecoderConfig":
        """Build a config from ``TEXTDECODER_*`` environment variables.

        Unknown log levels fall back to the default.
        """
        log_level = _env_str("TEXTDECODER_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        if log_level not in _LOG_LEVELS:
            log_level = DEFAULT_LOG_LEVEL

        return cls(
            encoding=_env_str("TEXTDECODER_ENCODING", DEFAULT_ENCODING),
            fatal=_env_bool("TEXTDECODER_FATAL", False),
            log_level=log_level,
        )


def get_config() -> DecoderConfig:
    """Return the current configuration, read fresh from the environment."""
    return DecoderConfig.from_env()
