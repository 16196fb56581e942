"""
Tests for decoding aiohttp response bodies.
"""

import asyncio
from types import SimpleNamespace

import aiohttp
from aiohttp import test_utils, web

from textdecoder.utils.transports import iter_response_text, response_encoding


def _chunked_handler(body: bytes, content_type: str, chunk_size: int = 3):
    async def handler(request: web.Request) -> web.StreamResponse:
        response = web.StreamResponse(headers={"Content-Type": content_type})
        await response.prepare(request)
        for i in range(0, len(body), chunk_size):
            await response.write(body[i : i + chunk_size])
        await response.write_eof()
        return response

    return handler


def _fetch_text(body: bytes, content_type: str, **kwargs) -> str:
    async def run() -> str:
        app = web.Application()
        app.router.add_get("/", _chunked_handler(body, content_type))
        async with test_utils.TestServer(app) as server:
            async with aiohttp.ClientSession() as session:
                async with session.get(server.make_url("/")) as response:
                    pieces = [
                        text async for text in iter_response_text(response, **kwargs)
                    ]
        return "".join(pieces)

    return asyncio.run(run())


def test_declared_charset_is_used() -> None:
    """The body is decoded with the charset from Content-Type."""
    body = "日本語のテキスト".encode("shift_jis")
    text = _fetch_text(body, "text/plain; charset=Shift_JIS")
    assert text == "日本語のテキスト"


def test_utf8_split_across_chunks() -> None:
    """Multi-byte characters split by the transport are reassembled."""
    body = "Grüße, 世界 😀".encode("utf-8")
    assert _fetch_text(body, "text/plain; charset=utf-8") == "Grüße, 世界 😀"


def test_missing_charset_uses_fallback() -> None:
    """Without a charset the fallback encoding applies."""
    body = "café".encode("windows-1252")
    text = _fetch_text(body, "application/octet-stream", fallback_encoding="latin1")
    assert text == "café"


def test_unknown_charset_uses_fallback() -> None:
    """An unsupported charset falls back instead of failing."""
    body = "naïve".encode("utf-8")
    text = _fetch_text(
        body, "text/plain; charset=x-bogus", fallback_encoding="utf-8"
    )
    assert text == "naïve"


def test_response_encoding_selection() -> None:
    """The declared charset wins only when it resolves."""
    url = "http://example.invalid/"
    sjis = SimpleNamespace(charset="sjis", url=url)
    assert response_encoding(sjis, "utf-8") == "sjis"
    assert response_encoding(SimpleNamespace(charset=None, url=url), "utf-8") == "utf-8"
    assert (
        response_encoding(SimpleNamespace(charset="x-bogus", url=url), "latin1")
        == "latin1"
    )
