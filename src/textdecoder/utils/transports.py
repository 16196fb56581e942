from typing import AsyncIterator, Optional

import aiohttp

from ..codec import resolve
from ..config import get_config
from .logging import log_debug, log_warning
from .stream_decoder import decode_stream_chunks


def response_encoding(response: aiohttp.ClientResponse, fallback_encoding: str) -> str:
    """Pick the label to decode a response body with.

    Args:
        response: The client response.
        fallback_encoding: Label used when the response declares no charset
            or one that does not resolve.

    Returns:
        The response's charset if it resolves, else ``fallback_encoding``.
    """
    charset = response.charset
    if not charset:
        return fallback_encoding
    if resolve(charset) is None:
        log_warning(
            f"Unsupported charset {charset!r} from {response.url}, "
            f"falling back to {fallback_encoding}",
            context="transports",
        )
        return fallback_encoding
    return charset


async def iter_response_text(
    response: aiohttp.ClientResponse,
    fallback_encoding: Optional[str] = None,
    fatal: Optional[bool] = None,
) -> AsyncIterator[str]:
    """Decode an aiohttp response body incrementally as it arrives.

    Args:
        response: An open client response whose body has not been read.
        fallback_encoding: Label used when the response declares no supported
            charset. Defaults to the configured encoding.
        fatal: Raise on malformed input. Defaults to the configured policy.

    Yields:
        str: Non-empty pieces of decoded text.

    Raises:
        UnsupportedEncodingError: If the fallback label itself is unknown.
        EncodingError: In fatal mode, if the body is malformed.

    Example:
        >>> async with session.get(url) as response:
        ...     async for text in iter_response_text(response):
        ...         print(text, end="")
    """
    config = get_config()
    if fallback_encoding is None:
        fallback_encoding = config.encoding
    if fatal is None:
        fatal = config.fatal

    encoding = response_encoding(response, fallback_encoding)
    log_debug(f"Decoding {response.url} as {encoding}", context="transports")

    async for text in decode_stream_chunks(
        response.content.iter_any(), encoding, fatal
    ):
        yield text
