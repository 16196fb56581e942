"""
Tests for the logging helpers.
"""

from loguru import logger

from textdecoder import TextDecoder
from textdecoder.utils.logging import configure_logging, preview_bytes


def test_preview_bytes() -> None:
    """Short inputs are shown whole, long ones truncated with a count."""
    assert preview_bytes(b"\xe4\xb8\xad") == "e4 b8 ad"
    assert preview_bytes(b"\x00" * 20, max_length=4) == "00 00 00 00 ...[16 more bytes]"


def test_configure_logging_routes_package_records() -> None:
    """Records from the package reach the sink once logging is configured."""
    messages = []
    handler_id = configure_logging("DEBUG", sink=messages.append)
    try:
        TextDecoder("utf-8").decode(b"\xe4", stream=True)
    finally:
        logger.remove(handler_id)
        logger.disable("textdecoder")

    assert any("[TextDecoder] Carrying 1 byte(s): e4" in str(m) for m in messages)


def test_silent_by_default() -> None:
    """Without configuration the package emits nothing."""
    messages = []
    handler_id = logger.add(messages.append, level="DEBUG")
    try:
        TextDecoder("utf-8").decode(b"\xe4", stream=True)
    finally:
        logger.remove(handler_id)

    assert messages == []
