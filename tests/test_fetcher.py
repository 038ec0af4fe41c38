"""Tests for the shared HTTP primitive.

Contract
--------
- A response of any status is returned, never raised.
- A transport failure raises `FetchError` carrying the URL.
- Bodies can be decoded under an explicit legacy encoding.
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest

from etymol.core.errors import FetchError
from etymol.sources.fetcher import FetchResult, SourceFetcher, build_url


def test_build_url_percent_encodes_term() -> None:
    assert build_url("https://dle.rae.es/{term}", "pingüino") == "https://dle.rae.es/ping%C3%BCino"
    assert build_url("https://x.test/?{term}", "a b/c") == "https://x.test/?a%20b%2Fc"


def test_fetch_returns_status_and_body(fetcher_for: Any) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        headers = {"content-type": "text/plain; charset=utf-8"}
        return httpx.Response(200, text="hola", headers=headers)

    fetcher = fetcher_for(handler)
    result = asyncio.run(fetcher.fetch("https://example.test/casa"))

    assert result.status == 200
    assert result.ok
    assert result.body == b"hola"
    assert result.encoding == "utf-8"
    assert result.text() == "hola"


@pytest.mark.parametrize("status", [301, 404, 500, 503])  # type: ignore[misc]
def test_non_2xx_is_a_result_not_an_error(fetcher_for: Any, status: int) -> None:
    fetcher = fetcher_for(lambda request: httpx.Response(status, text="nope"))
    result = asyncio.run(fetcher.fetch("https://example.test/casa"))

    assert result.status == status
    assert not result.ok


def test_transport_failure_raises_fetch_error(fetcher_for: Any, unreachable_handler: Any) -> None:
    fetcher = fetcher_for(unreachable_handler)
    with pytest.raises(FetchError) as excinfo:
        asyncio.run(fetcher.fetch("https://example.test/casa"))

    assert excinfo.value.url == "https://example.test/casa"
    assert "Name or service not known" in excinfo.value.reason


def test_timeout_is_a_transport_failure(fetcher_for: Any) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(FetchError):
        asyncio.run(fetcher_for(handler).fetch("https://example.test/slow"))


def test_text_uses_explicit_encoding_over_announced() -> None:
    body = "cabaña".encode("cp1252")
    result = FetchResult(url="u", status=200, body=body, encoding="utf-8")

    assert result.text("windows-1252") == "cabaña"
    # Decoding under the wrong charset replaces instead of raising.
    assert "�" in result.text()


def test_text_defaults_to_utf8() -> None:
    result = FetchResult(url="u", status=200, body="étymologie".encode())
    assert result.text() == "étymologie"


def test_injected_client_is_not_closed() -> None:
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(204)))

    async def scenario() -> None:
        async with SourceFetcher(client) as fetcher:
            await fetcher.fetch("https://example.test/")
        assert not client.is_closed
        await client.aclose()

    asyncio.run(scenario())


def test_owned_client_carries_settings(monkeypatch: Any) -> None:
    monkeypatch.setenv("ETYMOL_USER_AGENT", "etymol-tests/1.0")

    async def scenario() -> None:
        async with SourceFetcher(timeout=2.5) as fetcher:
            assert fetcher.client.headers["User-Agent"] == "etymol-tests/1.0"
            assert fetcher.client.timeout.read == 2.5
            assert fetcher.client.follow_redirects is True
        assert fetcher.client.is_closed

    asyncio.run(scenario())


def test_redirect_loop_raises_fetch_error(fetcher_for: Any) -> None:
    """Too many redirects is a request failure like any other."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(302, headers={"location": str(request.url)})

    fetcher = fetcher_for(handler, follow_redirects=True)
    with pytest.raises(FetchError) as excinfo:
        asyncio.run(fetcher.fetch("https://example.test/loop"))

    assert excinfo.value.url == "https://example.test/loop"


def test_decoding_error_raises_fetch_error(fetcher_for: Any) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.DecodingError("invalid gzip stream", request=request)

    with pytest.raises(FetchError):
        asyncio.run(fetcher_for(handler).fetch("https://example.test/gz"))


def test_text_with_unknown_charset_falls_back_to_utf8() -> None:
    result = FetchResult(url="u", status=200, body="étymologie".encode(), encoding="utf8mb4")
    assert result.text() == "étymologie"
    assert result.text("no-such-codec") == "étymologie"
