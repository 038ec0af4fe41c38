"""
Text normalization for scraped dictionary fragments.

Two independent concerns live here:

Mojibake repair
    Some pages (or the proxies in front of them) deliver UTF-8 text that was
    decoded as a single-byte encoding, so ``"á"`` arrives as ``"Ã¡"``.
    :func:`normalize` maps every known two-character sequence back to its
    accented letter. The table is derived from the codecs themselves rather
    than typed by hand, for both Latin-1 and Windows-1252 mis-decodes.

Whitespace cleanup
    :func:`collapse_whitespace` flattens a single DOM fragment to one line;
    :func:`clean` tidies a multi-line block while keeping its line structure.

All functions are pure and never raise on ``str`` input.
"""

from __future__ import annotations

import re

# Accented letters seen across the Spanish and French sources.
_REPAIRABLE = "áéíóúñüàâèêëîïôûçÁÉÍÓÚÑÜÀÂÈÊËÎÏÔÛÇ"
_MISDECODINGS = ("latin-1", "cp1252")


def _build_mojibake_table() -> dict[str, str]:
    table: dict[str, str] = {}
    for char in _REPAIRABLE:
        raw = char.encode("utf-8")
        for codec in _MISDECODINGS:
            try:
                garbled = raw.decode(codec)
            except UnicodeDecodeError:
                # cp1252 leaves 0x81, 0x8D, 0x8F, 0x90 and 0x9D undefined.
                continue
            table.setdefault(garbled, char)
    return table


MOJIBAKE_TABLE: dict[str, str] = _build_mojibake_table()
_MOJIBAKE_RE = re.compile(
    "|".join(re.escape(k) for k in sorted(MOJIBAKE_TABLE, key=len, reverse=True))
)

_HSPACE_RE = re.compile(r"[^\S\n]+")
_BLANK_RUN_RE = re.compile(r"\n{3,}")


def normalize(raw: str) -> str:
    """Repair UTF-8-as-single-byte mojibake; unknown sequences pass through.

    Examples
    --------
    >>> normalize("etimologÃ­a")
    'etimología'
    >>> normalize("etimología")
    'etimología'
    """
    if not raw:
        return raw
    return _MOJIBAKE_RE.sub(lambda m: MOJIBAKE_TABLE[m.group(0)], raw)


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run, newlines included, into one space."""
    return " ".join(text.split())


def clean(text: str) -> str:
    """Tidy a multi-line block.

    - runs of spaces, tabs, NBSP and carriage returns inside a line become a
      single space, and each line is trimmed;
    - two or more consecutive blank lines become exactly one;
    - the whole block is trimmed.

    ``clean(clean(x)) == clean(x)`` for every ``x``.
    """
    lines = (_HSPACE_RE.sub(" ", line).strip() for line in text.split("\n"))
    return _BLANK_RUN_RE.sub("\n\n", "\n".join(lines)).strip()


def ellipsis(text: str, max_length: int = 18) -> str:
    """Shorten ``text`` for menu labels and titles.

    >>> ellipsis("hipopótamo", 4)
    'hipo...'
    """
    if max_length <= 0:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length].rstrip() + "..."


__all__ = ["MOJIBAKE_TABLE", "normalize", "collapse_whitespace", "clean", "ellipsis"]
