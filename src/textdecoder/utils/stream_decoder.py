"""
Stream decoder helpers for chunked byte sources.

This module provides utilities for decoding byte streams where chunks may
split multi-byte characters across packet boundaries. They all drive a single
:class:`~textdecoder.decoder.TextDecoder` with ``stream=True`` and flush it
once the source is exhausted.
"""

from typing import AsyncIterator, Iterable, Iterator, Optional, Tuple

from ..config import get_config
from ..decoder import TextDecoder


def _session(encoding: Optional[str], fatal: Optional[bool]) -> TextDecoder:
    if encoding is None or fatal is None:
        config = get_config()
        encoding = config.encoding if encoding is None else encoding
        fatal = config.fatal if fatal is None else fatal
    return TextDecoder(encoding, fatal)


class StreamDecoder:
    """
    A stateful stream decoder that handles incomplete multi-byte sequences.

    When network data is chunked, multi-byte characters may be split across
    chunks. This decoder carries incomplete sequences over and combines them
    with the next chunk.

    Args:
        encoding: Encoding label. Defaults to the configured encoding.
        fatal: Raise on malformed input. Defaults to the configured policy.

    Example:
        >>> decoder = StreamDecoder("utf-8")
        >>> decoder.decode(b"Hello \\xe4\\xb8")  # Incomplete Chinese char
        ('Hello ', False)
        >>> decoder.decode(b"\\x96\\xe7\\x95\\x8c")  # Rest of "世界"
        ('世界', True)
    """

    def __init__(self, encoding: Optional[str] = None, fatal: Optional[bool] = None):
        self._decoder = _session(encoding, fatal)

    @property
    def encoding(self) -> str:
        return self._decoder.encoding

    def decode(self, chunk_bytes: bytes) -> Tuple[str, bool]:
        """
        Decode a chunk of bytes, carrying incomplete sequences to the next call.

        Args:
            chunk_bytes: The bytes to decode.

        Returns:
            A tuple of (decoded_text, is_complete) where:
            - decoded_text: The text decoded so far
            - is_complete: True if no bytes are waiting for the next chunk
        """
        text = self._decoder.decode(chunk_bytes, stream=True)
        return text, not self.has_pending

    def flush(self) -> str:
        """
        Flush any remaining pending bytes and end the stream.

        In replacement mode an incomplete trailing sequence becomes U+FFFD;
        in fatal mode it raises :class:`~textdecoder.errors.EncodingError`.

        Returns:
            The decoded text from remaining bytes, or empty string if none.
        """
        return self._decoder.decode(stream=False)

    @property
    def has_pending(self) -> bool:
        """Check if there are pending bytes waiting to be decoded."""
        return len(self._decoder.pending_bytes) > 0


def iter_decode(
    chunks: Iterable[bytes],
    encoding: Optional[str] = None,
    fatal: Optional[bool] = None,
) -> Iterator[str]:
    """
    Generator that decodes an iterable of byte chunks.

    Args:
        chunks: Byte chunks in stream order.
        encoding: Encoding label. Defaults to the configured encoding.
        fatal: Raise on malformed input. Defaults to the configured policy.

    Yields:
        Non-empty decoded text pieces.

    Example:
        >>> list(iter_decode([b"caf", b"\\xc3", b"\\xa9"]))
        ['caf', 'é']
    """
    decoder = _session(encoding, fatal)

    for chunk_bytes in chunks:
        if chunk_bytes:
            text = decoder.decode(chunk_bytes, stream=True)
            if text:
                yield text

    remaining = decoder.decode(stream=False)
    if remaining:
        yield remaining


async def decode_stream_chunks(
    chunk_iterator: AsyncIterator[bytes],
    encoding: Optional[str] = None,
    fatal: Optional[bool] = None,
) -> AsyncIterator[str]:
    """
    Async generator that safely decodes byte chunks.

    Args:
        chunk_iterator: An async iterator yielding byte chunks.
        encoding: Encoding label. Defaults to the configured encoding.
        fatal: Raise on malformed input. Defaults to the configured policy.

    Yields:
        Decoded text strings.

    Example:
        >>> async for text in decode_stream_chunks(response.content.iter_any()):
        ...     print(text)
    """
    decoder = _session(encoding, fatal)

    async for chunk_bytes in chunk_iterator:
        if chunk_bytes:
            text = decoder.decode(chunk_bytes, stream=True)
            if text:
                yield text

    # Flush any remaining bytes
    remaining = decoder.decode(stream=False)
    if remaining:
        yield remaining
