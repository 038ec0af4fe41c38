"""Shared fixtures: isolated settings, fixture pages, mock HTTP transports.

No test in this suite touches the network. Every fetcher is built on an
``httpx.AsyncClient`` backed by ``httpx.MockTransport`` whose handler routes
requests by host to canned pages.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import httpx
import pytest

from etymol.core.settings import load_settings
from etymol.sources.fetcher import SourceFetcher

Handler = Callable[[httpx.Request], Any]

# --------------------------------------------------------------------------- #
# Fixture pages
# --------------------------------------------------------------------------- #

DPD_PAGE = """
<html><body>
  <section><h2>Uso</h2><p>Se escribe con tilde.</p></section>
  <section>
    <h2>Etimología</h2>
    <p>Del lat. <i>casa</i> 'choza'.</p>
  </section>
</body></html>
"""

DLE_PAGE = """
<html><body>
  <section class="c-section">
    <article>
      <header>casa</header>
      <div class="c-text-intro">Del lat. casa 'choza'.</div>
      <ol class="c-definitions">
        <li>1. f. Edificio para habitar.</li>
        <li>2. f. Familia.</li>
      </ol>
    </article>
  </section>
</body></html>
"""

# Served as windows-1252 bytes without a charset header, like the real site.
DECHILE_PAGE = """
<html><body>
  <h3>casa</h3>
  <p>La palabra casa viene del latín.</p>
  <p>Significaba choza o cabaña.</p>
  <div class="ads">publicidad</div>
</body></html>
""".encode("cp1252")

WIKTIONNAIRE_PAGE = """
<html><body>
  <div class="mw-heading mw-heading3"><h3 id="Étymologie">Étymologie</h3></div>
  <dl><dd>Du latin <i>casa</i>.</dd></dl>
  <div class="mw-heading mw-heading3"><h3 id="Nom_commun">Nom commun</h3></div>
  <p>Maison.</p>
</body></html>
"""

CNRTL_PAGE = """
<html><body>
  <div id="art">
    <span class="tlf_cvedette">CASE</span><b>Étymol.</b> Empr. au lat. <i>casa</i>.
  </div>
  <div id="contentbox">Pied de page</div>
</body></html>
"""

ENGLISH_PAYLOAD = [
    {
        "word": "hello",
        "phonetic": "/həˈləʊ/",
        "origin": "early 19th century: variant of earlier hollo.",
        "meanings": [
            {
                "partOfSpeech": "exclamation",
                "definitions": [
                    {"definition": "used as a greeting.", "example": "hello there, Katie!"}
                ],
            },
            {"partOfSpeech": "noun", "definitions": [{"definition": "an utterance of 'hello'."}]},
        ],
    }
]


def site_response(request: httpx.Request) -> httpx.Response:
    """Return the canned page for the host of ``request`` (404 otherwise)."""
    host = request.url.host
    if host == "www.rae.es":
        return httpx.Response(200, html=DPD_PAGE)
    if host == "dle.rae.es":
        return httpx.Response(200, html=DLE_PAGE)
    if host == "etimologias.dechile.net":
        return httpx.Response(200, content=DECHILE_PAGE, headers={"content-type": "text/html"})
    if host == "fr.wiktionary.org":
        return httpx.Response(200, html=WIKTIONNAIRE_PAGE)
    if host == "www.cnrtl.fr":
        return httpx.Response(200, html=CNRTL_PAGE)
    if host == "api.dictionaryapi.dev":
        return httpx.Response(200, json=ENGLISH_PAYLOAD)
    return httpx.Response(404, text="not found")


def unreachable(request: httpx.Request) -> httpx.Response:
    """Simulate a total transport outage."""
    raise httpx.ConnectError("Name or service not known", request=request)


def make_fetcher(handler: Handler, *, follow_redirects: bool = False) -> SourceFetcher:
    """Build a fetcher whose client is served by ``handler``.

    Pass ``follow_redirects=True`` to mirror the client the fetcher builds
    for itself in production.
    """
    transport = httpx.MockTransport(handler)
    return SourceFetcher(httpx.AsyncClient(transport=transport, follow_redirects=follow_redirects))


# --------------------------------------------------------------------------- #
# Fixtures
# --------------------------------------------------------------------------- #


@pytest.fixture(autouse=True)  # type: ignore[misc]
def isolated_settings(monkeypatch: Any, tmp_path: Any) -> Generator[None, None, None]:
    """Point settings at a throwaway preferences file for every test."""
    monkeypatch.setenv("ETYMOL_ENV", "test")
    monkeypatch.setenv("ETYMOL_PREFERENCES_PATH", str(tmp_path / "preferences.json"))
    monkeypatch.delenv("ETYMOL_ALLOW_MULTIWORD", raising=False)
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


@pytest.fixture  # type: ignore[misc]
def site_fetcher() -> SourceFetcher:
    """Fetcher serving the canned pages for every known host."""
    return make_fetcher(site_response)


@pytest.fixture  # type: ignore[misc]
def request_log() -> list[str]:
    return []


@pytest.fixture  # type: ignore[misc]
def counting_fetcher(request_log: list[str]) -> SourceFetcher:
    """Fetcher that records every requested URL in ``request_log``."""

    def handler(request: httpx.Request) -> httpx.Response:
        request_log.append(str(request.url))
        return site_response(request)

    return make_fetcher(handler)


@pytest.fixture  # type: ignore[misc]
def fetcher_for() -> Callable[[Handler], SourceFetcher]:
    """Factory fixture: ``fetcher_for(handler)`` -> mock-backed fetcher."""
    return make_fetcher


@pytest.fixture  # type: ignore[misc]
def site_handler() -> Handler:
    return site_response


@pytest.fixture  # type: ignore[misc]
def unreachable_handler() -> Handler:
    return unreachable
