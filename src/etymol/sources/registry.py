# -----------------------------------------------------------------------------
# This module defines the in-process source registry used by the aggregator.
#
# The registry gives us a single place to:
#   - pin every SourceId to its URL template and byte encoding
#   - declare, per language, which sources are consulted and in what order
#
# The order in LANGUAGE_SOURCES is the rendering order: results are always
# reported in this order, never in the order network calls complete.
# -----------------------------------------------------------------------------
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from etymol.core.contracts import LanguageCode, SourceId


@dataclass(frozen=True, slots=True)
class SourceSpec:
    """Static description of one source.

    Parameters
    ----------
    source:
        Identifier used in results and in the extractor registry.
    label:
        Human-readable name shown as the block label in shells.
    url_template:
        URL with a ``{term}`` placeholder; the term is percent-encoded.
    encoding:
        Byte encoding used to decode the body before parsing. ``None`` means
        "whatever the server announces, else UTF-8".
    """

    source: SourceId
    label: str
    url_template: str
    encoding: str | None = None


# --------------------------------------------------------------------------- #
# Registry
# --------------------------------------------------------------------------- #

SOURCE_REGISTRY: dict[SourceId, SourceSpec] = {
    SourceId.DPD: SourceSpec(
        source=SourceId.DPD,
        label="Diccionario panhispánico de dudas (RAE)",
        url_template="https://www.rae.es/dpd/{term}",
    ),
    SourceId.DLE_ETYMOLOGY: SourceSpec(
        source=SourceId.DLE_ETYMOLOGY,
        label="Etimología (DLE, RAE)",
        url_template="https://dle.rae.es/{term}",
    ),
    # etimologias.dechile.net still serves a legacy single-byte charset.
    SourceId.DECHILE: SourceSpec(
        source=SourceId.DECHILE,
        label="Etimologías de Chile",
        url_template="https://etimologias.dechile.net/?{term}",
        encoding="windows-1252",
    ),
    SourceId.DLE_DEFINITIONS: SourceSpec(
        source=SourceId.DLE_DEFINITIONS,
        label="Definiciones (DLE, RAE)",
        url_template="https://dle.rae.es/{term}",
    ),
    SourceId.WIKTIONNAIRE: SourceSpec(
        source=SourceId.WIKTIONNAIRE,
        label="Wiktionnaire",
        url_template="https://fr.wiktionary.org/wiki/{term}",
    ),
    SourceId.CNRTL: SourceSpec(
        source=SourceId.CNRTL,
        label="CNRTL",
        url_template="https://www.cnrtl.fr/etymologie/{term}",
    ),
    SourceId.ENGLISH: SourceSpec(
        source=SourceId.ENGLISH,
        label="Free Dictionary",
        url_template="https://api.dictionaryapi.dev/api/v2/entries/en/{term}",
    ),
}

#: Sources consulted per language, in priority (and rendering) order.
LANGUAGE_SOURCES: dict[LanguageCode, tuple[SourceId, ...]] = {
    LanguageCode.ENGLISH: (SourceId.ENGLISH,),
    LanguageCode.SPANISH: (
        SourceId.DPD,
        SourceId.DLE_ETYMOLOGY,
        SourceId.DECHILE,
        SourceId.DLE_DEFINITIONS,
    ),
    LanguageCode.FRENCH: (SourceId.WIKTIONNAIRE, SourceId.CNRTL),
}


def get_source(source: SourceId) -> SourceSpec:
    """Return the :class:`SourceSpec` registered for ``source``."""
    return SOURCE_REGISTRY[source]


def sources_for(language: LanguageCode) -> tuple[SourceSpec, ...]:
    """Return the ordered source specs consulted for ``language``.

    Raises
    ------
    KeyError
        If no sources are registered for ``language``.
    """
    return tuple(SOURCE_REGISTRY[s] for s in LANGUAGE_SOURCES[language])


def all_sources() -> Mapping[SourceId, SourceSpec]:
    """Return a read-only snapshot of the registry.

    The returned mapping is a shallow copy so callers cannot mutate
    :data:`SOURCE_REGISTRY` directly.
    """
    return dict(SOURCE_REGISTRY)


__all__ = [
    "SourceSpec",
    "SOURCE_REGISTRY",
    "LANGUAGE_SOURCES",
    "get_source",
    "sources_for",
    "all_sources",
]
