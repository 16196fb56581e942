"""
Streaming text decoding session.

:class:`TextDecoder` turns byte chunks into text under one encoding,
following the WHATWG ``TextDecoder.decode()`` contract: state carries over
between calls only while the caller keeps passing ``stream=True``.

Example:
    >>> decoder = TextDecoder("utf-8")
    >>> decoder.decode(b"Hello \\xe4\\xb8", stream=True)
    'Hello '
    >>> decoder.decode(b"\\xad")
    '中'
"""

import re
from typing import Any, Optional, Tuple

from .codec import DecodeOutcome, Encoding, StdlibCodec
from .errors import EncodingError, UnsupportedEncodingError
from .prefix import (
    ascii_valid_prefix,
    iso_2022_jp_ascii_valid_prefix,
    utf8_valid_prefix,
)
from .utils.logging import log_debug, preview_bytes

_SURROGATE = re.compile("[\ud800-\udfff]")


def to_scalar_values(text: str) -> str:
    """Replace any lone surrogate in ``text`` with U+FFFD."""
    return _SURROGATE.sub("\ufffd", text)


class TextDecoder:
    """
    A decoding session bound to one encoding and one error policy.

    Sessions are not thread-safe; use one per logical stream.

    Args:
        label: Encoding label, resolved with the WHATWG label table.
        fatal: Raise :class:`EncodingError` on malformed input instead of
            substituting U+FFFD.
        codec: Codec primitives to decode with. Defaults to
            :class:`~textdecoder.codec.StdlibCodec`.

    Raises:
        UnsupportedEncodingError: If ``label`` names no supported encoding.
    """

    def __init__(
        self, label: str = "utf-8", fatal: bool = False, *, codec: Any = None
    ):
        if not isinstance(label, str):
            raise TypeError(
                f"Encoding label must be a string, not {type(label).__name__}"
            )

        self._codec = codec if codec is not None else StdlibCodec()
        encoding: Optional[Encoding] = self._codec.resolve(label)
        if encoding is None:
            raise UnsupportedEncodingError(label)

        self._encoding = encoding
        self._fatal = bool(fatal)
        self._decoder = self._codec.fresh_decoder(encoding, self._fatal)
        self._initial_state = self._decoder.getstate()
        self._pending = bytearray()
        self._continuing_stream = False

        log_debug(
            f"Created {'fatal' if self._fatal else 'replacement'} decoder "
            f"for {encoding.name} (label {label!r})",
            context="TextDecoder",
        )

    @property
    def encoding(self) -> str:
        """Lowercase canonical name of the session's encoding."""
        return self._encoding.name.lower()

    @property
    def fatal(self) -> bool:
        """Whether malformed input raises instead of being replaced."""
        return self._fatal

    @property
    def pending_bytes(self) -> bytes:
        """Bytes carried over from the previous call, not yet decoded."""
        return bytes(self._pending)

    def __repr__(self) -> str:
        return f"TextDecoder(encoding={self.encoding!r}, fatal={self._fatal})"

    def decode(self, data: Optional[Any] = None, *, stream: bool = False) -> str:
        """
        Decode ``data`` together with any bytes carried from the last call.

        Args:
            data: A bytes-like object, or None for no new input.
            stream: True if more input will follow in a later call. Trailing
                incomplete sequences are then kept for that call instead of
                being flushed.

        Returns:
            The decoded text. It never contains lone surrogates.

        Raises:
            EncodingError: In fatal mode, if the input is malformed. Carried
                bytes and decoder state are restored to what they were
                before the call, but a failed ``stream=False`` call still
                ends the stream.
            TypeError: If ``data`` is not bytes-like.
        """
        chunk = b"" if data is None else self._as_bytes(data)
        checkpoint = self._checkpoint() if self._fatal else None

        if not self._continuing_stream:
            self._reset()
        self._continuing_stream = stream
        self._pending += chunk

        if self._fatal:
            text = self._decode_fatal(checkpoint, last=not stream)
        else:
            text = self._decode_replacing(last=not stream)

        if self._pending:
            log_debug(
                f"Carrying {len(self._pending)} byte(s): "
                f"{preview_bytes(self._pending)}",
                context="TextDecoder",
            )
        return to_scalar_values(text)

    @staticmethod
    def _as_bytes(data: Any) -> bytes:
        try:
            return bytes(memoryview(data).cast("B"))
        except TypeError:
            raise TypeError(
                f"Expected a bytes-like object, not {type(data).__name__}"
            ) from None

    def _reset(self) -> None:
        self._decoder = self._codec.fresh_decoder(self._encoding, self._fatal)
        self._initial_state = self._decoder.getstate()
        self._pending.clear()

    def _checkpoint(self) -> Tuple[Any, Any, Any, bytes]:
        return (
            self._decoder,
            self._decoder.getstate(),
            self._initial_state,
            bytes(self._pending),
        )

    def _rollback(self, checkpoint: Tuple[Any, Any, Any, bytes]) -> None:
        # The stream flag is not restored: a failed stream=False call still
        # ends the stream.
        decoder, state, initial_state, pending = checkpoint
        decoder.setstate(state)
        self._decoder = decoder
        self._initial_state = initial_state
        self._pending = bytearray(pending)

    def _decode_fatal(self, checkpoint, last: bool) -> str:
        result = self._codec.decode_strict(self._decoder, bytes(self._pending), last)

        if result.outcome is DecodeOutcome.MALFORMED:
            self._rollback(checkpoint)
            position = result.error.start if result.error is not None else None
            log_debug(
                f"Malformed {self._encoding.name} input at byte {position}",
                context="TextDecoder",
            )
            raise EncodingError(
                "Decoding failed", encoding=self.encoding, position=position
            ) from result.error

        if result.outcome is DecodeOutcome.COMPLETE:
            self._pending.clear()
        else:
            del self._pending[: result.read]
        return result.text

    def _decode_replacing(self, last: bool) -> str:
        buffered = bytes(self._pending)
        valid, fast_codec = self._valid_prefix(buffered)
        prefix = buffered[:valid].decode(fast_codec) if valid else ""

        result = self._codec.decode_lossy(self._decoder, buffered[valid:], last)
        del self._pending[: valid + result.read]
        return prefix + result.text

    def _valid_prefix(self, data: bytes) -> Tuple[int, str]:
        """Length of the prefix that can skip the substituting decoder.

        The prefix is only safe to decode on its own when the decoder holds
        no state of its own.
        """
        if not data or self._decoder.getstate() != self._initial_state:
            return 0, "ascii"

        name = self._encoding.name
        if name == "utf-8":
            return utf8_valid_prefix(data), "utf-8"
        if name == "iso-2022-jp":
            return iso_2022_jp_ascii_valid_prefix(data), "ascii"
        if self._encoding.ascii_compatible:
            return ascii_valid_prefix(data), "ascii"
        return 0, "ascii"
