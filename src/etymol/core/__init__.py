"""Core package initializer for Etymol.

Holds settings, contracts, the lookup result sum type and persisted
preferences:
    from etymol.core.settings import settings, load_settings, Settings, get_logger
"""

from __future__ import annotations

__all__ = ["__doc__"]
