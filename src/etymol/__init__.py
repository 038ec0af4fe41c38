"""Etymol: multi-source etymology lookup.

The public entry point is :func:`etymol.pipelines.lookup`; the CLI and the
HTTP API are thin shells around it.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.3.0"
