"""SourceResult: the outcome of querying a single source."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .language import ErrorKind, SourceId


class SourceResult(BaseModel):
    """Text extracted from one source, or the reason there is none.

    Fields
    ------
    source : SourceId
        Which site produced this result.
    text : str | None
        Extracted etymology or definition text.
    error : ErrorKind | None
        Set only when the fetch itself failed. Both ``text`` and ``error``
        absent means the page was fetched but held nothing usable.
    status : int | None
        HTTP status code, when a response was received.
    """

    model_config = ConfigDict(frozen=True)

    source: SourceId
    text: str | None = None
    error: ErrorKind | None = None
    status: int | None = Field(default=None, ge=100, le=599)

    @model_validator(mode="after")
    def _text_xor_error(self) -> SourceResult:
        if self.text is not None and self.error is not None:
            raise ValueError("a SourceResult cannot carry both text and an error")
        return self

    @property
    def found(self) -> bool:
        return self.text is not None


__all__ = ["SourceResult"]
