from __future__ import annotations

from .english import EnglishDictionary
from .extractors import EXTRACTORS, Extractor, get_extractor, run_extractor
from .fetcher import FetchResult, SourceFetcher, build_url
from .registry import (
    LANGUAGE_SOURCES,
    SOURCE_REGISTRY,
    SourceSpec,
    all_sources,
    get_source,
    sources_for,
)

__all__ = [
    "EnglishDictionary",
    "EXTRACTORS",
    "Extractor",
    "get_extractor",
    "run_extractor",
    "FetchResult",
    "SourceFetcher",
    "build_url",
    "LANGUAGE_SOURCES",
    "SOURCE_REGISTRY",
    "SourceSpec",
    "all_sources",
    "get_source",
    "sources_for",
]
