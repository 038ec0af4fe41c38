"""Persisted user preferences.

The only persisted state is the preferred default language, stored as a small
JSON document at ``settings.preferences_path``. It is read when a shell starts
and written whenever the user changes it.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ValidationError

from etymol.core.contracts import LanguageCode
from etymol.core.settings import get_logger, load_settings

logger = get_logger("etymol.preferences")


class Preferences(BaseModel):
    """User-level preferences."""

    default_language: LanguageCode = LanguageCode.SPANISH


def _resolve(path: Path | None) -> Path:
    if path is not None:
        return path.expanduser()
    return load_settings().resolved_preferences_path()


def load_preferences(path: Path | None = None) -> Preferences:
    """Read preferences from disk, falling back to defaults.

    A missing file is the normal first-run case. An unreadable or invalid
    file is logged and ignored so a corrupt preference never blocks a lookup.
    """
    target = _resolve(path)
    if not target.exists():
        return Preferences()
    try:
        raw = json.loads(target.read_text(encoding="utf-8"))
        return Preferences.model_validate(raw)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        logger.warning("Ignoring unreadable preferences at %s: %s", target, exc)
        return Preferences()


def save_preferences(prefs: Preferences, path: Path | None = None) -> Path:
    """Write ``prefs`` to disk and return the file path."""
    target = _resolve(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(prefs.model_dump(mode="json"), indent=2), encoding="utf-8")
    logger.debug("Saved preferences to %s", target)
    return target


__all__ = ["Preferences", "load_preferences", "save_preferences"]
