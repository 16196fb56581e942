"""
Codec primitives behind the decoding session.

The session never talks to :mod:`codecs` directly. It goes through an object
with the methods of :class:`StdlibCodec`, which resolves WHATWG labels with
``webencodings`` and decodes with the standard library's incremental
decoders. Any object offering the same methods can be passed to
:class:`~textdecoder.decoder.TextDecoder` instead.
"""

import codecs
import enum
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import webencodings

from .utils.logging import log_debug

# Labels of these encodings must not produce a decoder.
REPLACEMENT_ENCODINGS = frozenset(
    {"replacement", "hz-gb-2312", "iso-2022-cn", "iso-2022-cn-ext", "iso-2022-kr"}
)

_ASCII_PROBE = bytes(range(0x80))


class DecodeOutcome(enum.Enum):
    """How a decode primitive finished."""

    COMPLETE = "complete"
    INPUT_EXHAUSTED = "input-exhausted"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class Encoding:
    """A resolved encoding.

    Attributes:
        name: Canonical lowercase WHATWG name, e.g. ``"utf-8"``.
        codec_info: The :class:`codecs.CodecInfo` that implements it.
        ascii_compatible: True if bytes 0x00-0x7F decode to the same code
            points from a fresh decoder.
    """

    name: str
    codec_info: codecs.CodecInfo
    ascii_compatible: bool


@dataclass
class DecodeResult:
    """Outcome of one strict or lossy decode call.

    Attributes:
        outcome: Whether the input was fully consumed, ended inside an
            incomplete sequence, or held a malformed sequence.
        text: Text produced by the call.
        read: Number of input bytes consumed.
        error: The codec error behind a ``MALFORMED`` outcome.
    """

    outcome: DecodeOutcome
    text: str = ""
    read: int = 0
    error: Optional[UnicodeDecodeError] = None


def _decodes_ascii_unchanged(codec_info: codecs.CodecInfo) -> bool:
    decoder = codec_info.incrementaldecoder("strict")
    try:
        return decoder.decode(_ASCII_PROBE, True) == _ASCII_PROBE.decode("ascii")
    except UnicodeDecodeError:
        return False


@lru_cache(maxsize=None)
def resolve(label: str) -> Optional[Encoding]:
    """
    Map an encoding label to an :class:`Encoding`.

    Matching follows the WHATWG "get an encoding" algorithm: surrounding
    ASCII whitespace is ignored and letters are compared case-insensitively.

    Args:
        label: A label such as ``"utf-8"``, ``"latin1"`` or ``"sjis"``.

    Returns:
        The resolved encoding, or None for unknown labels, labels of the
        replacement encoding, and encodings Python has no codec for.
    """
    try:
        found = webencodings.lookup(label)
    except LookupError:
        log_debug(f"No Python codec for label {label!r}", context="codec")
        return None

    if found is None or found.name in REPLACEMENT_ENCODINGS:
        return None

    return Encoding(
        name=found.name,
        codec_info=found.codec_info,
        ascii_compatible=_decodes_ascii_unchanged(found.codec_info),
    )


class StdlibCodec:
    """
    Decode primitives built on :mod:`codecs` incremental decoders.

    The incremental decoders keep partial sequences in an internal buffer.
    After every call the adapter moves that buffer out again and reports it
    as unread, so the only thing a decoder carries between calls is its
    non-byte state (for example the ISO-2022-JP character set in use).
    """

    def resolve(self, label: str) -> Optional[Encoding]:
        return resolve(label)

    def fresh_decoder(
        self, encoding: Encoding, fatal: bool
    ) -> codecs.IncrementalDecoder:
        """Create a decoder without BOM handling for ``encoding``."""
        errors = "strict" if fatal else "replace"
        return encoding.codec_info.incrementaldecoder(errors)

    def decode_strict(
        self, decoder: codecs.IncrementalDecoder, data: bytes, last: bool
    ) -> DecodeResult:
        """Decode without substitution; malformed input is reported, not raised."""
        try:
            text = decoder.decode(data, last)
        except UnicodeDecodeError as err:
            return DecodeResult(DecodeOutcome.MALFORMED, error=err)
        return self._settle(decoder, text, len(data))

    def decode_lossy(
        self, decoder: codecs.IncrementalDecoder, data: bytes, last: bool
    ) -> DecodeResult:
        """Decode, replacing malformed sequences with U+FFFD."""
        return self._settle(decoder, decoder.decode(data, last), len(data))

    @staticmethod
    def _settle(
        decoder: codecs.IncrementalDecoder, text: str, length: int
    ) -> DecodeResult:
        buffered, flag = decoder.getstate()
        if not buffered:
            return DecodeResult(DecodeOutcome.COMPLETE, text, length)

        decoder.setstate((b"", flag))
        return DecodeResult(DecodeOutcome.INPUT_EXHAUSTED, text, length - len(buffered))
