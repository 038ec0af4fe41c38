# -----------------------------------------------------------------------------
# English lookups go to the Free Dictionary API, which already returns
# structured entries (headword, phonetic, origin, meanings by part of speech).
# No HTML is scraped on this path.
#
# The client is constructed explicitly and handed to the lookup pipeline, so
# tests can substitute a fake or back the fetcher with httpx.MockTransport.
# -----------------------------------------------------------------------------
from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from etymol.core.contracts import (
    EnglishDefinition,
    EnglishEntry,
    EnglishMeaning,
    SourceId,
)
from etymol.core.settings import get_logger

from .fetcher import SourceFetcher, build_url
from .registry import get_source

logger = get_logger("etymol.english")


class EnglishDictionary:
    """Structured search over the English lexical endpoint.

    Parameters
    ----------
    fetcher:
        Shared :class:`SourceFetcher`; its transport decides where requests go.
    url_template:
        Endpoint with a ``{term}`` placeholder. Defaults to the registry entry
        for :attr:`SourceId.ENGLISH`.
    """

    def __init__(self, fetcher: SourceFetcher, url_template: str | None = None) -> None:
        self.fetcher = fetcher
        self.url_template = url_template or get_source(SourceId.ENGLISH).url_template

    async def search(self, term: str) -> list[EnglishEntry]:
        """Return every entry for ``term``; an unknown word yields ``[]``.

        Raises
        ------
        FetchError
            If the endpoint cannot be reached at all.
        """
        result = await self.fetcher.fetch(build_url(self.url_template, term))
        if result.status == 404:
            return []
        if not result.ok:
            logger.warning("English dictionary returned HTTP %d for %r", result.status, term)
            return []

        try:
            payload = json.loads(result.text())
        except json.JSONDecodeError as exc:
            logger.warning("English dictionary sent invalid JSON for %r: %s", term, exc)
            return []
        if not isinstance(payload, list):
            return []
        return [entry for raw in payload if (entry := _parse_entry(raw)) is not None]


# --------------------------------------------------------------------- #
# Response parsing
# --------------------------------------------------------------------- #


def _str_or_none(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _parse_definitions(raw: Any) -> list[EnglishDefinition]:
    if not isinstance(raw, Sequence):
        return []
    out = []
    for item in raw:
        if not isinstance(item, Mapping):
            continue
        text = _str_or_none(item.get("definition"))
        if text:
            example = _str_or_none(item.get("example"))
            out.append(EnglishDefinition(definition=text, example=example))
    return out


def _parse_entry(raw: Any) -> EnglishEntry | None:
    """Map one API object to :class:`EnglishEntry`; skip malformed objects."""
    if not isinstance(raw, Mapping):
        return None
    word = _str_or_none(raw.get("word"))
    if word is None:
        return None

    raw_meanings = raw.get("meanings")
    if not isinstance(raw_meanings, Sequence):
        raw_meanings = []

    meanings = []
    for meaning in raw_meanings:
        if not isinstance(meaning, Mapping):
            continue
        definitions = _parse_definitions(meaning.get("definitions"))
        if definitions:
            meanings.append(
                EnglishMeaning(
                    part_of_speech=_str_or_none(meaning.get("partOfSpeech")) or "unknown",
                    definitions=definitions,
                )
            )

    return EnglishEntry(
        word=word,
        phonetic=_str_or_none(raw.get("phonetic")),
        origin=_str_or_none(raw.get("origin")),
        meanings=meanings,
    )


__all__ = ["EnglishDictionary"]
