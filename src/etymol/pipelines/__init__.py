"""Pipeline entry points for Etymol.

Currently exposed:

- :func:`lookup` / :func:`lookup_async` - validate a selection and return a
  :class:`~etymol.core.result.LookupResult` (``lookup.py``).
- :func:`aggregate` - concurrent multi-source fan-out (``aggregator.py``).
"""

from __future__ import annotations

from .aggregator import aggregate
from .lookup import LookupPipeline, lookup, lookup_async

__all__ = ["aggregate", "LookupPipeline", "lookup", "lookup_async"]
