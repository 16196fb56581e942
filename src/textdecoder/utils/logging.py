"""
Logging utilities for textdecoder.

This module wraps loguru so every record carries a short context tag naming
the part of the package it came from. The package is silent by default;
call :func:`configure_logging` (or ``logger.enable("textdecoder")``) to see
its records.
"""

import sys
from typing import Any, Optional

from loguru import logger

PACKAGE = "textdecoder"


def _tag(message: str, context: Optional[str]) -> str:
    if context:
        return f"[{context}] {message}"
    return message


def log_debug(message: str, context: Optional[str] = None) -> None:
    """Log a debug message tagged with ``context``."""
    logger.opt(depth=1).debug(_tag(message, context))


def log_warning(message: str, context: Optional[str] = None) -> None:
    """Log a warning tagged with ``context``."""
    logger.opt(depth=1).warning(_tag(message, context))


def preview_bytes(data: bytes, max_length: int = 16) -> str:
    """
    Render a compact hex preview of a byte string for logging.

    Args:
        data: The bytes to render.
        max_length: Maximum number of bytes shown before truncation.

    Returns:
        Hex string with the remaining byte count when truncated.

    Example:
        >>> preview_bytes(b"\\xe4\\xb8\\xad")
        'e4 b8 ad'
    """
    shown = bytes(data[:max_length]).hex(" ")
    if len(data) <= max_length:
        return shown
    remaining = len(data) - max_length
    return f"{shown} ...[{remaining} more bytes]"


def configure_logging(level: Optional[str] = None, sink: Any = None) -> int:
    """
    Enable textdecoder records and route them to a sink.

    Args:
        level: Minimum level to emit. Defaults to the configured log level
            (``TEXTDECODER_LOG_LEVEL``).
        sink: Any loguru sink. Defaults to ``sys.stderr``.

    Returns:
        The loguru handler id, usable with ``logger.remove``.
    """
    if level is None:
        from ..config import get_config

        level = get_config().log_level

    logger.enable(PACKAGE)
    return logger.add(
        sink if sink is not None else sys.stderr,
        level=level.upper(),
        filter=PACKAGE,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}",
    )
