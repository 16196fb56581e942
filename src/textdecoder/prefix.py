"""
Valid-prefix scanners for the replacement-mode fast path.

Each scanner returns the length of the longest prefix of its input that can
be turned into text without substitution and without cutting through an
incomplete trailing sequence.
"""

import re

_NON_ASCII = re.compile(rb"[\x80-\xff]")

# SO, SI and ESC switch ISO-2022-JP out of its ASCII state.
_ISO_2022_JP_NON_ASCII = re.compile(rb"[\x0e\x0f\x1b\x80-\xff]")


def utf8_valid_prefix(data: bytes) -> int:
    """Length of the longest well-formed UTF-8 prefix of ``data``."""
    try:
        bytes(data).decode("utf-8")
    except UnicodeDecodeError as err:
        return err.start
    return len(data)


def ascii_valid_prefix(data: bytes) -> int:
    """Length of the longest prefix of ``data`` made of ASCII bytes."""
    if data.isascii():
        return len(data)
    match = _NON_ASCII.search(data)
    return match.start() if match else len(data)


def iso_2022_jp_ascii_valid_prefix(data: bytes) -> int:
    """
    Length of the longest prefix that ISO-2022-JP decodes as plain ASCII.

    Stops at the first non-ASCII byte and at the first ESC, SO or SI, since
    those start escape sequences or shifts that leave the ASCII state.
    """
    match = _ISO_2022_JP_NON_ASCII.search(data)
    return match.start() if match else len(data)
