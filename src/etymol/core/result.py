"""Typed outcome of a lookup, returned instead of raising.

Motivation
----------
The lookup pipeline is the single recovery boundary of the system: whatever
happens underneath, callers (CLI, HTTP API, tests) receive exactly one of the
variants below and discriminate on :attr:`LookupResult.kind`.

Variants
--------
- :class:`EmptySelection`: nothing to look up; no network call was made.
- :class:`InvalidQuery`: the selection was rejected (e.g. multi-word input).
- :class:`Found`: at least one source produced text.
- :class:`EntriesFound`: the English dictionary returned structured entries.
- :class:`NotFound`: every consulted source came back empty.
- :class:`LookupFailed`: transport outage or unexpected failure.

Example
-------
>>> from etymol.core.result import NotFound
>>> r = NotFound(term="xyz")
>>> r.kind, r.is_found()
('not_found', False)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from etymol.core.contracts import AggregatedEtymology, EnglishEntry


class LookupResult:
    """Sum type over the possible lookup outcomes."""

    kind: ClassVar[str] = "unknown"

    # ----- Introspection -----------------------------------------------------
    def is_found(self) -> bool:
        """Return ``True`` for :class:`Found` and :class:`EntriesFound`."""
        return isinstance(self, Found | EntriesFound)

    def is_failure(self) -> bool:
        """Return ``True`` when the caller should report an error."""
        return isinstance(self, LookupFailed | InvalidQuery)

    # ----- Serialization -----------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-safe mapping with a ``kind`` discriminator."""
        return {"kind": self.kind}


@dataclass(frozen=True)
class EmptySelection(LookupResult):
    """No usable text was selected."""

    kind: ClassVar[str] = "empty_selection"


@dataclass(frozen=True)
class InvalidQuery(LookupResult):
    """The selection was non-empty but not an acceptable query."""

    kind: ClassVar[str] = "invalid_query"

    term: str
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "term": self.term, "reason": self.reason}


@dataclass(frozen=True)
class Found(LookupResult):
    """At least one source produced text; ``etymology`` holds all of them."""

    kind: ClassVar[str] = "found"

    etymology: AggregatedEtymology

    @property
    def term(self) -> str:
        return self.etymology.term

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, **self.etymology.model_dump(mode="json")}


@dataclass(frozen=True)
class EntriesFound(LookupResult):
    """Structured English entries."""

    kind: ClassVar[str] = "entries_found"

    term: str
    entries: tuple[EnglishEntry, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "term": self.term,
            "entries": [e.model_dump(mode="json") for e in self.entries],
        }


@dataclass(frozen=True)
class NotFound(LookupResult):
    """The lookup ran, but no consulted source knows the word."""

    kind: ClassVar[str] = "not_found"

    term: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "term": self.term}


@dataclass(frozen=True)
class LookupFailed(LookupResult):
    """The lookup could not be carried out; ``message`` is user-facing."""

    kind: ClassVar[str] = "lookup_failed"

    term: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "term": self.term, "message": self.message}


__all__ = [
    "LookupResult",
    "EmptySelection",
    "InvalidQuery",
    "Found",
    "EntriesFound",
    "NotFound",
    "LookupFailed",
]
