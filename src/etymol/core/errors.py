"""Exception types raised inside Etymol.

Only transport-level failures are exceptions; per-source misses and non-2xx
responses are ordinary values (see :class:`etymol.core.contracts.SourceResult`).
"""

from __future__ import annotations


class EtymolError(Exception):
    """Base class for Etymol errors."""


class FetchError(EtymolError):
    """Network-level failure (DNS, timeout, connection reset) for one URL."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"GET {url} failed: {reason}")
        self.url = url
        self.reason = reason


__all__ = ["EtymolError", "FetchError"]
