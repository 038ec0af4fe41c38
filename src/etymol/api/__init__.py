"""HTTP shell around the lookup pipeline."""

from __future__ import annotations

from .app import create_app, get_pipeline

__all__ = ["create_app", "get_pipeline"]
