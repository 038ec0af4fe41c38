# -----------------------------------------------------------------------------
# This module provides the one HTTP primitive every source shares: a single
# unauthenticated GET that returns the raw body plus status.
#
#   - non-2xx responses are ordinary results; callers inspect `status`
#   - request failures (DNS, timeout, connect, reset, redirect loops,
#     undecodable content) become `FetchError`
#   - no retries; redirects follow the transport default
#
# The transport is injected: production code lets the fetcher build an
# `httpx.AsyncClient`, tests hand in a client backed by `httpx.MockTransport`
# so that no real HTTP calls are made during CI.
# -----------------------------------------------------------------------------
from __future__ import annotations

from dataclasses import dataclass
from types import TracebackType
from urllib.parse import quote

import httpx

from etymol.core.errors import FetchError
from etymol.core.settings import get_logger, load_settings

logger = get_logger("etymol.fetcher")


def build_url(template: str, term: str) -> str:
    """Substitute the percent-encoded ``term`` into a ``{term}`` URL template.

    >>> build_url("https://dle.rae.es/{term}", "pingüino")
    'https://dle.rae.es/ping%C3%BCino'
    """
    return template.format(term=quote(term, safe=""))


@dataclass(frozen=True, slots=True)
class FetchResult:
    """Raw response of one GET.

    Parameters
    ----------
    url:
        Final URL of the response (after any redirects).
    status:
        HTTP status code.
    body:
        Undecoded response bytes.
    encoding:
        Charset announced by the server, if any.
    """

    url: str
    status: int
    body: bytes
    encoding: str | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def text(self, encoding: str | None = None) -> str:
        """Decode the body under ``encoding``, the announced charset, or UTF-8.

        Passing an explicit ``encoding`` is how legacy single-byte sites are
        read; undecodable bytes are replaced rather than raising. A charset
        Python does not know (e.g. ``utf8mb4``) falls back to UTF-8.
        """
        charset = encoding or self.encoding or "utf-8"
        try:
            return self.body.decode(charset, errors="replace")
        except LookupError:
            logger.debug("Unknown charset %r for %s; decoding as UTF-8", charset, self.url)
            return self.body.decode("utf-8", errors="replace")


class SourceFetcher:
    """Async GET helper shared by all sources within one lookup.

    Use as an async context manager when the fetcher owns its client::

        async with SourceFetcher() as fetcher:
            result = await fetcher.fetch("https://dle.rae.es/casa")

    A caller-provided ``client`` is never closed by the fetcher.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout: float | None = None,
        user_agent: str | None = None,
    ) -> None:
        cfg = load_settings()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else cfg.http_timeout,
            headers={"User-Agent": user_agent or cfg.user_agent},
            follow_redirects=True,
        )

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def fetch(self, url: str) -> FetchResult:
        """Issue one GET against ``url``.

        Raises
        ------
        FetchError
            On any request-level failure (transport, redirect loop, body
            decoding). HTTP error statuses do not raise.
        """
        try:
            response = await self._client.get(url)
        except httpx.RequestError as exc:
            logger.debug("GET %s failed: %s", url, exc)
            raise FetchError(url, str(exc) or type(exc).__name__) from exc

        logger.debug("GET %s -> %s (%d bytes)", url, response.status_code, len(response.content))
        return FetchResult(
            url=str(response.url),
            status=response.status_code,
            body=response.content,
            encoding=response.charset_encoding,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> SourceFetcher:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


__all__ = ["FetchResult", "SourceFetcher", "build_url"]
