"""Centralized application configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the repository root: .env, .env.local
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from etymol import __version__

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_PREFERENCES_PATH = Path("~/.config/etymol/preferences.json")


class Settings(BaseSettings):
    """Typed application configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `ETYMOL_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    http_timeout : float
        Per-request timeout in seconds handed to the HTTP transport.
    user_agent : str
        `User-Agent` header sent to every dictionary site.
    allow_multiword : bool
        When false, selections containing whitespace are rejected as invalid.
    preferences_path : Path
        JSON file holding the persisted default language.
    """

    environment: EnvName = Field(default="dev", alias="ETYMOL_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    http_timeout: float = Field(default=15.0, gt=0, alias="ETYMOL_HTTP_TIMEOUT")
    user_agent: str = Field(default=f"etymol/{__version__}", alias="ETYMOL_USER_AGENT")
    allow_multiword: bool = Field(default=True, alias="ETYMOL_ALLOW_MULTIWORD")
    preferences_path: Path = Field(
        default=DEFAULT_PREFERENCES_PATH, alias="ETYMOL_PREFERENCES_PATH"
    )

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_dev(self) -> bool:
        """Return True if running in the development environment."""
        return self.environment == "dev"

    @property
    def is_test(self) -> bool:
        """Return True if running in the test environment."""
        return self.environment == "test"

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)

    def resolved_preferences_path(self) -> Path:
        """Return `preferences_path` with `~` expanded."""
        return self.preferences_path.expanduser()


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    Tests force a rebuild via `load_settings.cache_clear()` after mutating
    `os.environ`.
    """
    os.environ.setdefault("ETYMOL_ENV", "dev")
    return Settings()


settings: Settings = load_settings()


def get_logger(name: str = "etymol") -> logging.Logger:
    """Return a process-global logger configured to the current log level."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger
