"""Query: one word to look up in one language."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from .language import LanguageCode


class Query(BaseModel):
    """An immutable lookup request.

    ``term`` is trimmed and case-folded on construction, so two queries that
    differ only in surrounding whitespace or letter case are equal.
    """

    model_config = ConfigDict(frozen=True)

    term: str
    language: LanguageCode

    @field_validator("term")
    @classmethod
    def _fold_term(cls, v: str) -> str:
        folded = v.strip().casefold()
        if not folded:
            raise ValueError("term must not be empty")
        return folded

    @property
    def is_multiword(self) -> bool:
        return len(self.term.split()) > 1


__all__ = ["Query"]
