"""
Tests for the valid-prefix scanners.
"""

from textdecoder.prefix import (
    ascii_valid_prefix,
    iso_2022_jp_ascii_valid_prefix,
    utf8_valid_prefix,
)


def test_utf8_whole_input_valid() -> None:
    """Well-formed input is valid up to its end."""
    data = "abc 中文 😀".encode("utf-8")
    assert utf8_valid_prefix(data) == len(data)
    assert utf8_valid_prefix(b"") == 0


def test_utf8_stops_before_incomplete_tail() -> None:
    """A truncated trailing sequence is not part of the prefix."""
    assert utf8_valid_prefix(b"ab\xe4\xb8") == 2
    assert utf8_valid_prefix(b"\xf0\x9f\x98") == 0


def test_utf8_stops_at_malformed_byte() -> None:
    """The prefix ends right before the first malformed byte."""
    assert utf8_valid_prefix(b"a\xffb") == 1
    assert utf8_valid_prefix(b"\xed\xa0\x80") == 0


def test_ascii_prefix() -> None:
    """Only bytes below 0x80 belong to the ASCII prefix."""
    assert ascii_valid_prefix(b"plain text") == 10
    assert ascii_valid_prefix(b"abc\x80d") == 3
    assert ascii_valid_prefix(b"\x1b\x0e\x0f") == 3
    assert ascii_valid_prefix(b"\xc3\xa9") == 0


def test_iso_2022_jp_prefix_stops_at_escape() -> None:
    """ESC, SO and SI end the ISO-2022-JP ASCII prefix."""
    assert iso_2022_jp_ascii_valid_prefix(b"plain") == 5
    assert iso_2022_jp_ascii_valid_prefix(b"ab\x1b$B") == 2
    assert iso_2022_jp_ascii_valid_prefix(b"a\x0eb") == 1
    assert iso_2022_jp_ascii_valid_prefix(b"a\x0fb") == 1
    assert iso_2022_jp_ascii_valid_prefix(b"a\x80") == 1
