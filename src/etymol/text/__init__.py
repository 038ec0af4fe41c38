"""Text helpers applied to everything scraped from dictionary pages."""

from __future__ import annotations

from .normalizer import clean, collapse_whitespace, ellipsis, normalize

__all__ = ["clean", "collapse_whitespace", "ellipsis", "normalize"]
