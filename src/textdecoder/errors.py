"""
Exceptions raised by textdecoder.
"""

from typing import Optional


class TextDecoderError(Exception):
    """Base class for every error raised by textdecoder."""


class UnsupportedEncodingError(TextDecoderError, LookupError):
    """Raised when a label does not name a supported encoding.

    Attributes:
        label: The label as given by the caller.
    """

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"The given encoding is not supported: {label!r}")


class EncodingError(TextDecoderError, ValueError):
    """Raised in fatal mode when the input holds a malformed byte sequence.

    Attributes:
        encoding: Canonical name of the encoding that rejected the input.
        position: Offset of the malformed sequence within the buffered bytes,
            when the codec reported one.
    """

    def __init__(
        self,
        message: str = "Decoding failed",
        *,
        encoding: str = "",
        position: Optional[int] = None,
    ):
        self.encoding = encoding
        self.position = position
        super().__init__(message)
