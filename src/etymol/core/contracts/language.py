"""Language and source identifiers."""

from __future__ import annotations

from enum import Enum


class LanguageCode(str, Enum):
    """Target language of a lookup; selects which sources are consulted."""

    ENGLISH = "en"
    SPANISH = "es"
    FRENCH = "fr"

    @classmethod
    def parse(cls, value: str | LanguageCode) -> LanguageCode:
        """Coerce ``"es"``, ``"ES"`` or ``" es "`` into a member.

        Raises
        ------
        ValueError
            If the value is not a known language code.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            known = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown language {value!r}; expected one of: {known}") from None


class SourceId(str, Enum):
    """One external dictionary site or service."""

    DPD = "dpd"
    DLE_ETYMOLOGY = "dle_etymology"
    DLE_DEFINITIONS = "dle_definitions"
    DECHILE = "dechile"
    WIKTIONNAIRE = "wiktionnaire"
    CNRTL = "cnrtl"
    ENGLISH = "english"


class ErrorKind(str, Enum):
    """Why a source produced no text, when the reason was a fetch failure."""

    NETWORK = "network"
    HTTP_STATUS = "http_status"


__all__ = ["LanguageCode", "SourceId", "ErrorKind"]
