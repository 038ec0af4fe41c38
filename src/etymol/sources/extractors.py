"""
Source-specific extraction rules.

Each extractor is a pure function ``(document, term) -> str | None`` over a
parsed BeautifulSoup tree. The rules mirror the current markup of each site
and are deliberately narrow: when a selector misses, the extractor returns
``None`` and the aggregator records "no text" for that source.

Registry
--------
:data:`EXTRACTORS` maps every HTML-backed :class:`SourceId` to its function.
The English source answers with JSON and is handled by
:mod:`etymol.sources.english` instead.

Error policy
------------
Extractors may raise on pathological markup; :func:`run_extractor` converts
any exception into ``None`` so that a parse problem is indistinguishable from
a page without content.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Mapping

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from etymol.core.contracts import SourceId
from etymol.core.settings import get_logger
from etymol.text import clean, collapse_whitespace, normalize

logger = get_logger("etymol.extractors")

Extractor = Callable[[BeautifulSoup, str], str | None]

# ===========================================================================
# Selectors and patterns
# ===========================================================================

DPD_HEADER = "etimología"
DPD_SENSE_SELECTOR = 'p[data-heading="sense"]'
_DPD_PREFIX_RE = re.compile(r"^\s*etimolog[ií]a[\s:.]*", re.IGNORECASE)

DLE_ETYMOLOGY_SELECTOR = "section .c-text-intro"
DLE_ETYMOLOGY_ALT_SELECTOR = "div.etim span.etimologia"
DLE_DEFINITION_SELECTORS = ("ol.c-definitions > li", "p.j")
# "3. adj. Texto" -> "Texto"; the part-of-speech abbreviation is lowercase.
_DLE_ITEM_PREFIX_RE = re.compile(r"^\s*\d+\s*\.\s*(?:[a-záéíóúüñ]+\.\s*)?")

WIKTIONNAIRE_IDS = ("Étymologie", "Etymologie")
_SECTION_HEADINGS = ["h2", "h3"]

CNRTL_VEDETTE_CLASS = "tlf_cvedette"
CNRTL_STOP_ID = "contentbox"

_SKIPPED_TAGS = frozenset({"script", "style", "noscript"})
_BLOCK_TAGS = frozenset({"p", "div", "section", "ol", "ul", "li", "br", "table", "tr"})


# ===========================================================================
# Helpers
# ===========================================================================


def _tidy(text: str) -> str:
    """Repair encoding first, then whitespace (NBSP is part of some mojibake)."""
    return clean(normalize(text))


def _flat_text(node: Tag) -> str:
    return collapse_whitespace(normalize(node.get_text(" ")))


def _is_section_heading(node: Tag) -> bool:
    """True for ``<h2>``/``<h3>`` and for MediaWiki's ``div.mw-heading`` wrappers."""
    if node.name in _SECTION_HEADINGS:
        return True
    if node.name != "div" or "mw-heading" not in (node.get("class") or []):
        return False
    return node.find(_SECTION_HEADINGS) is not None


def _has_id(node: Tag | None, value: str) -> bool:
    return isinstance(node, Tag) and node.get("id") == value


# ===========================================================================
# RAE: Diccionario panhispánico de dudas
# ===========================================================================


def extract_dpd(document: BeautifulSoup, term: str) -> str | None:
    """Return the DPD "Etimología" section, else the first sense paragraph."""
    for section in document.find_all("section"):
        header = section.find("h2")
        if header is None or _flat_text(header).casefold() != DPD_HEADER:
            continue
        body = _DPD_PREFIX_RE.sub("", _flat_text(section)).strip()
        if body:
            return body

    sense = document.select_one(DPD_SENSE_SELECTOR)
    if sense is not None:
        return _tidy(sense.get_text()) or None
    return None


# ===========================================================================
# RAE: Diccionario de la lengua española
# ===========================================================================


def extract_dle_etymology_alt(document: BeautifulSoup, term: str) -> str | None:
    """Older DLE layout: ``<div class="etim"><span class="etimologia">``."""
    node = document.select_one(DLE_ETYMOLOGY_ALT_SELECTOR)
    if node is None:
        return None
    return normalize(node.get_text()).strip() or None


def extract_dle_etymology(document: BeautifulSoup, term: str) -> str | None:
    """Current DLE layout (intro paragraph of the entry), then the older one."""
    node = document.select_one(DLE_ETYMOLOGY_SELECTOR)
    if node is not None:
        text = normalize(node.get_text()).strip()
        if text:
            return text
    return extract_dle_etymology_alt(document, term)


def extract_dle_definitions(document: BeautifulSoup, term: str) -> str | None:
    """Renumbered DLE senses, one per line, without part-of-speech tags.

    ``"1. adj. Primera definición"`` and ``"2. sust. Segunda"`` become
    ``"1. Primera definición\\n2. Segunda"``.
    """
    items: list[Tag] = []
    for selector in DLE_DEFINITION_SELECTORS:
        items = document.select(selector)
        if items:
            break

    bodies = []
    for item in items:
        body = _DLE_ITEM_PREFIX_RE.sub("", _flat_text(item)).strip()
        if body:
            bodies.append(body)
    if not bodies:
        return None

    lines = [f"{n}. {body}" for n, body in enumerate(bodies, start=1)]
    return _tidy("\n".join(lines)) or None


# ===========================================================================
# etimologias.dechile.net
# ===========================================================================


def extract_dechile(document: BeautifulSoup, term: str) -> str | None:
    """Paragraphs directly after the ``<h3>`` naming ``term``.

    Collection stops at the first sibling that is not a ``<p>``. Paragraphs
    are separated by a blank line.
    """
    wanted = collapse_whitespace(term).casefold()
    for heading in document.find_all("h3"):
        if _flat_text(heading).casefold() != wanted:
            continue
        paragraphs = []
        for sibling in heading.find_next_siblings():
            if sibling.name != "p":
                break
            text = _tidy(sibling.get_text())
            if text:
                paragraphs.append(text)
        if paragraphs:
            return "\n\n".join(paragraphs)
    return None


# ===========================================================================
# fr.wiktionary.org
# ===========================================================================


def _wiktionnaire_anchor(document: BeautifulSoup) -> Tag | None:
    for anchor_id in WIKTIONNAIRE_IDS:
        anchor = document.find(id=anchor_id)
        if isinstance(anchor, Tag):
            return anchor
    return None


def extract_wiktionnaire(document: BeautifulSoup, term: str) -> str | None:
    """Everything between the "Étymologie" heading and the next h2/h3."""
    anchor = _wiktionnaire_anchor(document)
    if anchor is None:
        return None

    # The id sits on the heading itself (current skin) or on a span inside
    # it (legacy skin); the heading may in turn be wrapped in div.mw-heading.
    start: Tag = anchor
    if anchor.name not in _SECTION_HEADINGS:
        heading = anchor.find_parent(_SECTION_HEADINGS)
        if heading is not None:
            start = heading
    wrapper = start.parent
    if isinstance(wrapper, Tag) and _is_section_heading(wrapper) and wrapper.name == "div":
        start = wrapper

    parts = []
    for sibling in start.find_next_siblings():
        if _is_section_heading(sibling):
            break
        text = _tidy(sibling.get_text())
        if text:
            parts.append(text)
    return "\n".join(parts) or None


# ===========================================================================
# cnrtl.fr étymologie
# ===========================================================================


def _walk_forward(node: Tag | NavigableString) -> Iterator[Tag | NavigableString]:
    """Yield nodes after ``node`` in sibling order, climbing when a level ends.

    The walk never descends into children and stops at the ``#contentbox``
    element, whether it is reached as a sibling or as the parent being left.
    """
    current: Tag | NavigableString | None = node
    while current is not None:
        nxt = current.next_sibling
        while nxt is None:
            parent = current.parent
            if parent is None or _has_id(parent, CNRTL_STOP_ID) or parent.name in ("body", "html"):
                return
            current = parent
            nxt = current.next_sibling
        if _has_id(nxt, CNRTL_STOP_ID):
            return
        yield nxt
        current = nxt


def extract_cnrtl(document: BeautifulSoup, term: str) -> str | None:
    """Text from the bold etymon after the vedette marker up to ``#contentbox``."""
    start = document.select_one(f".{CNRTL_VEDETTE_CLASS} + b")
    if start is None:
        return None

    chunks = [start.get_text()]
    for node in _walk_forward(start):
        if isinstance(node, Comment):
            continue
        if isinstance(node, NavigableString):
            chunks.append(str(node))
        elif isinstance(node, Tag) and node.name not in _SKIPPED_TAGS:
            prefix = "\n" if node.name in _BLOCK_TAGS else ""
            chunks.append(prefix + node.get_text())
    return _tidy("".join(chunks)) or None


# ===========================================================================
# Registry
# ===========================================================================

EXTRACTORS: Mapping[SourceId, Extractor] = {
    SourceId.DPD: extract_dpd,
    SourceId.DLE_ETYMOLOGY: extract_dle_etymology,
    SourceId.DLE_DEFINITIONS: extract_dle_definitions,
    SourceId.DECHILE: extract_dechile,
    SourceId.WIKTIONNAIRE: extract_wiktionnaire,
    SourceId.CNRTL: extract_cnrtl,
}


def get_extractor(source: SourceId) -> Extractor:
    """Return the extractor registered for ``source``.

    Raises
    ------
    KeyError
        If ``source`` is not HTML-backed (e.g. :attr:`SourceId.ENGLISH`).
    """
    return EXTRACTORS[source]


def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def run_extractor(source: SourceId, html: str, term: str) -> str | None:
    """Parse ``html`` and apply the extractor for ``source``.

    Never raises: a parse error or extractor bug yields ``None``.
    """
    try:
        text = get_extractor(source)(parse_document(html), term)
    except Exception as exc:
        logger.debug("Extractor %s failed for %r: %s", source.value, term, exc)
        return None
    if text is None or not text.strip():
        return None
    return text


__all__ = [
    "Extractor",
    "EXTRACTORS",
    "get_extractor",
    "parse_document",
    "run_extractor",
    "extract_dpd",
    "extract_dle_etymology",
    "extract_dle_etymology_alt",
    "extract_dle_definitions",
    "extract_dechile",
    "extract_wiktionnaire",
    "extract_cnrtl",
]
