"""
Lookup pipeline: the one call surface exposed to shells.

    lookup(selection, language) -> LookupResult

Flow Overview
-------------
1. **Validation**: an absent or blank selection returns
   :class:`EmptySelection` before any network activity. The selection is
   trimmed and case-folded; multi-word input is rejected only when
   ``allow_multiword`` is off.
2. **Dispatch**: English goes to the structured dictionary client; every other
   language fans out through :func:`etymol.pipelines.aggregator.aggregate`.
3. **Classification**: text anywhere -> :class:`Found`; every source down at
   the transport level -> :class:`LookupFailed`; otherwise :class:`NotFound`.

Recovery boundary
-----------------
This module is the only place where exceptions are converted into results.
Anything raised underneath (transport outage on the English path, a bug in a
decoder, ...) is logged and returned as :class:`LookupFailed`, so shells never
see raw exceptions and never observe a half-built result.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Protocol

from etymol.core.contracts import EnglishEntry, LanguageCode, Query
from etymol.core.errors import FetchError
from etymol.core.result import (
    EmptySelection,
    EntriesFound,
    Found,
    InvalidQuery,
    LookupFailed,
    LookupResult,
    NotFound,
)
from etymol.core.settings import get_logger, load_settings
from etymol.pipelines.aggregator import aggregate
from etymol.sources.english import EnglishDictionary
from etymol.sources.fetcher import SourceFetcher

logger = get_logger("etymol.lookup")

CONNECTION_FAILED_MESSAGE = "Search failed. Are you connected to the internet?"


class EnglishSearch(Protocol):
    """Anything that can search the English lexicon (real client or fake)."""

    async def search(self, term: str) -> list[EnglishEntry]: ...


class LookupPipeline:
    """Validate a selection, query the sources, classify the outcome.

    Parameters
    ----------
    fetcher:
        Shared :class:`SourceFetcher`. When omitted, a fresh one is created
        and closed around every lookup.
    english:
        English dictionary client. When omitted, an
        :class:`EnglishDictionary` bound to the lookup's fetcher is used.
    allow_multiword:
        Accept selections containing whitespace. Defaults to
        ``settings.allow_multiword``.
    """

    def __init__(
        self,
        fetcher: SourceFetcher | None = None,
        english: EnglishSearch | None = None,
        *,
        allow_multiword: bool | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.english = english
        self.allow_multiword = (
            load_settings().allow_multiword if allow_multiword is None else allow_multiword
        )

    # --------------------------------------------------------------------- #
    # Public API
    # --------------------------------------------------------------------- #
    async def lookup_async(
        self, selection: str | None, language: LanguageCode | str
    ) -> LookupResult:
        """Look up ``selection`` in ``language``; never raises."""
        if selection is None or not selection.strip():
            return EmptySelection()

        term = selection.strip().casefold()
        try:
            query = Query(term=term, language=LanguageCode.parse(language))
        except ValueError as exc:
            return InvalidQuery(term=term, reason=str(exc))
        if query.is_multiword and not self.allow_multiword:
            return InvalidQuery(term=query.term, reason="Select a single word.")

        try:
            return await self._run(query)
        except FetchError as exc:
            logger.warning("Lookup for %r could not reach %s: %s", query.term, exc.url, exc.reason)
        except Exception:
            logger.exception("Lookup for %r (%s) failed", query.term, query.language.value)
        return LookupFailed(term=query.term, message=CONNECTION_FAILED_MESSAGE)

    def lookup(self, selection: str | None, language: LanguageCode | str) -> LookupResult:
        """Synchronous wrapper around :meth:`lookup_async`.

        Must not be called from inside a running event loop.
        """
        return asyncio.run(self.lookup_async(selection, language))

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #
    @asynccontextmanager
    async def _fetcher_scope(self) -> AsyncIterator[SourceFetcher]:
        if self.fetcher is not None:
            yield self.fetcher
            return
        async with SourceFetcher() as fetcher:
            yield fetcher

    async def _run(self, query: Query) -> LookupResult:
        async with self._fetcher_scope() as fetcher:
            if query.language is LanguageCode.ENGLISH:
                english = self.english or EnglishDictionary(fetcher)
                entries = await english.search(query.term)
                if entries:
                    return EntriesFound(term=query.term, entries=tuple(entries))
                return NotFound(term=query.term)

            etymology = await aggregate(query, fetcher)

        if etymology.has_text:
            return Found(etymology=etymology)
        if etymology.all_network_failures:
            logger.warning("Every source for %r was unreachable", query.term)
            return LookupFailed(term=query.term, message=CONNECTION_FAILED_MESSAGE)
        return NotFound(term=query.term)


# --------------------------------------------------------------------------- #
# Module-level conveniences
# --------------------------------------------------------------------------- #


async def lookup_async(selection: str | None, language: LanguageCode | str) -> LookupResult:
    """Run one lookup with a default-configured :class:`LookupPipeline`."""
    return await LookupPipeline().lookup_async(selection, language)


def lookup(selection: str | None, language: LanguageCode | str) -> LookupResult:
    """Blocking variant of :func:`lookup_async`."""
    return LookupPipeline().lookup(selection, language)


__all__ = [
    "CONNECTION_FAILED_MESSAGE",
    "EnglishSearch",
    "LookupPipeline",
    "lookup",
    "lookup_async",
]
