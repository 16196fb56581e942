"""
textdecoder

Incremental decoding of byte streams into text under WHATWG encoding labels.

Main components:
- TextDecoder: the streaming decode session
- StreamDecoder, iter_decode, decode_stream_chunks: helpers for chunked sources
- iter_response_text: decode an aiohttp response body as it arrives
"""

from loguru import logger

from .decoder import TextDecoder
from .errors import EncodingError, TextDecoderError, UnsupportedEncodingError
from .utils.stream_decoder import StreamDecoder, decode_stream_chunks, iter_decode
from .utils.transports import iter_response_text

logger.disable(__name__)

__version__ = "0.1.0"

__all__ = [
    "TextDecoder",
    "TextDecoderError",
    "EncodingError",
    "UnsupportedEncodingError",
    "StreamDecoder",
    "decode_stream_chunks",
    "iter_decode",
    "iter_response_text",
]
