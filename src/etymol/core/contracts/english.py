"""Structured English dictionary entries.

The English source answers with JSON rather than HTML, so its results keep
their shape (headword, parts of speech, definitions, origin) instead of being
flattened into a :class:`SourceResult`.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class EnglishDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    definition: str
    example: str | None = None


class EnglishMeaning(BaseModel):
    """All definitions listed under one part of speech."""

    model_config = ConfigDict(frozen=True)

    part_of_speech: str
    definitions: list[EnglishDefinition] = Field(default_factory=list)


class EnglishEntry(BaseModel):
    """One headword as returned by the English dictionary endpoint."""

    model_config = ConfigDict(frozen=True)

    word: str
    phonetic: str | None = None
    origin: str | None = Field(default=None, description="Etymology note, when provided")
    meanings: list[EnglishMeaning] = Field(default_factory=list)


__all__ = ["EnglishDefinition", "EnglishMeaning", "EnglishEntry"]
