"""
Etymology aggregator: concurrent fan-out over the sources of one language.

Flow
----
1. Resolve the ordered source list for ``query.language`` from the registry.
2. Start one task per source: fetch -> decode -> parse -> extract.
3. Join on all of them (``asyncio.gather``); no task can abort the join,
   because each one converts its own failure into a :class:`SourceResult`.
4. Assemble results in registry order, whatever order the tasks finished in.

Failure mapping per source
--------------------------
- :class:`FetchError`       -> ``error=network``
- non-2xx status            -> ``error=http_status`` (with ``status``)
- selector miss / bad HTML  -> no text, no error
- anything else raised      -> no text, no error (logged with traceback)

The English source is not aggregated; see :mod:`etymol.pipelines.lookup`.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from etymol.core.contracts import (
    AggregatedEtymology,
    ErrorKind,
    LanguageCode,
    Query,
    SourceResult,
)
from etymol.core.errors import FetchError
from etymol.core.settings import get_logger
from etymol.sources.extractors import EXTRACTORS, run_extractor
from etymol.sources.fetcher import SourceFetcher, build_url
from etymol.sources.registry import SourceSpec, sources_for

logger = get_logger("etymol.aggregator")


async def fetch_and_extract(spec: SourceSpec, term: str, fetcher: SourceFetcher) -> SourceResult:
    """Query one source and turn whatever happens into a :class:`SourceResult`."""
    url = build_url(spec.url_template, term)
    try:
        response = await fetcher.fetch(url)
    except FetchError as exc:
        logger.debug("%s unreachable for %r: %s", spec.source.value, term, exc.reason)
        return SourceResult(source=spec.source, error=ErrorKind.NETWORK)

    if not response.ok:
        logger.debug("%s returned HTTP %d for %r", spec.source.value, response.status, term)
        return SourceResult(source=spec.source, error=ErrorKind.HTTP_STATUS, status=response.status)

    text = run_extractor(spec.source, response.text(spec.encoding), term)
    logger.debug("%s: %s for %r", spec.source.value, "text" if text else "no text", term)
    return SourceResult(source=spec.source, text=text, status=response.status)


async def _isolated(spec: SourceSpec, term: str, fetcher: SourceFetcher) -> SourceResult:
    """Run :func:`fetch_and_extract`; an unexpected error becomes "no text"."""
    try:
        return await fetch_and_extract(spec, term, fetcher)
    except Exception:
        logger.exception("%s failed unexpectedly for %r", spec.source.value, term)
        return SourceResult(source=spec.source)


def _html_sources(language: LanguageCode, sources: Sequence[SourceSpec] | None) -> list[SourceSpec]:
    specs = list(sources) if sources is not None else list(sources_for(language))
    unsupported = [s.source for s in specs if s.source not in EXTRACTORS]
    if unsupported:
        names = ", ".join(s.value for s in unsupported)
        raise ValueError(f"No HTML extractor for source(s): {names}")
    return specs


async def aggregate(
    query: Query,
    fetcher: SourceFetcher,
    *,
    sources: Sequence[SourceSpec] | None = None,
) -> AggregatedEtymology:
    """Fan out to every source for ``query.language`` and join the results.

    Parameters
    ----------
    query:
        The validated query.
    fetcher:
        Shared fetcher; all sources use its transport.
    sources:
        Optional override of the registry's source list (same order rules).

    Raises
    ------
    ValueError
        If a source without an HTML extractor (e.g. English) is requested.
    """
    specs = _html_sources(query.language, sources)
    results = await asyncio.gather(
        *(_isolated(spec, query.term, fetcher) for spec in specs)
    )
    # gather() returns results in argument order, i.e. registry order.
    return AggregatedEtymology(term=query.term, language=query.language, results=tuple(results))


__all__ = ["aggregate", "fetch_and_extract"]
