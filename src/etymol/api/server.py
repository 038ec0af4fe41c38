"""
ASGI Entry Point for the Etymol API.

This module exposes the `app` object required by ASGI servers (Uvicorn).
It loads environment variables from `.env` before the application factory
runs so that settings see them.

Usage
-----
Run via the module entry point:
    $ python -m etymol.api.server

Or via uvicorn directly:
    $ uvicorn etymol.api.server:app --reload
"""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from etymol.api.app import create_app
from etymol.core.settings import load_settings

load_dotenv(dotenv_path=Path(".env"))

app = create_app()


def main() -> None:
    """Run the API server locally for development."""
    cfg = load_settings()
    uvicorn.run(
        "etymol.api.server:app",
        host="127.0.0.1",
        port=8000,
        reload=cfg.is_dev,
        log_level=cfg.log_level.lower(),
    )


if __name__ == "__main__":
    main()
