"""AggregatedEtymology: every source's answer for one query, in priority order."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .language import ErrorKind, LanguageCode
from .source_result import SourceResult


class AggregatedEtymology(BaseModel):
    """Ordered per-source results for one term.

    ``results`` follows the fixed per-language source priority list, never
    the order in which requests completed.
    """

    model_config = ConfigDict(frozen=True)

    term: str
    language: LanguageCode
    results: tuple[SourceResult, ...] = ()

    @property
    def found(self) -> tuple[SourceResult, ...]:
        """Results that carry text, still in priority order."""
        return tuple(r for r in self.results if r.found)

    @property
    def has_text(self) -> bool:
        return any(r.found for r in self.results)

    @property
    def all_network_failures(self) -> bool:
        """True when every source failed at the transport level."""
        return bool(self.results) and all(r.error is ErrorKind.NETWORK for r in self.results)


__all__ = ["AggregatedEtymology"]
