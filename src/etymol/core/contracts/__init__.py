"""Public contracts shared by the sources, the pipeline and the shells."""

from __future__ import annotations

from .english import EnglishDefinition, EnglishEntry, EnglishMeaning
from .etymology import AggregatedEtymology
from .language import ErrorKind, LanguageCode, SourceId
from .query import Query
from .source_result import SourceResult

__all__ = [
    "AggregatedEtymology",
    "EnglishDefinition",
    "EnglishEntry",
    "EnglishMeaning",
    "ErrorKind",
    "LanguageCode",
    "Query",
    "SourceId",
    "SourceResult",
]
