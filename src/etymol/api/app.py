"""
FastAPI Application Factory & Configuration.

This module builds the HTTP shell around the lookup pipeline. It is
responsible for:
1.  **Middleware Setup**: CORS so a browser-based editor can call the API.
2.  **Exception Handling**: global handlers so every error is structured JSON.
3.  **Routing**: ``GET /health`` and ``GET /lookup``.

Design Pattern
--------------
We use an **Application Factory** (`create_app`) and expose the pipeline
through a dependency (`get_pipeline`) so tests can swap in a pipeline backed
by a mock transport via ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from etymol import __version__
from etymol.core.contracts import LanguageCode
from etymol.core.result import InvalidQuery, LookupFailed
from etymol.core.settings import get_logger, load_settings
from etymol.pipelines.lookup import LookupPipeline

logger = get_logger("etymol.api")


def get_pipeline() -> LookupPipeline:
    """Dependency providing a default-configured pipeline per request."""
    return LookupPipeline()


def create_app() -> FastAPI:
    """
    Construct and configure the Etymol FastAPI application.

    Returns
    -------
    FastAPI
        The configured ASGI application ready to be served by Uvicorn.
    """
    app = FastAPI(
        title="Etymol API",
        description="Multi-source etymology lookup",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # -----------------------------------------------------------------------
    # Middleware
    # -----------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # -----------------------------------------------------------------------
    # Global Exception Handlers
    # -----------------------------------------------------------------------
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all so unhandled exceptions still return structured JSON."""
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": str(exc),
                "path": request.url.path,
            },
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        """Map Python ValueErrors (e.g. unknown language) to HTTP 400."""
        return JSONResponse(
            status_code=400,
            content={
                "error": "Bad Request",
                "detail": str(exc),
            },
        )

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------
    @app.get("/health", tags=["System"])
    async def health_check() -> dict[str, str]:
        """Simple liveness probe."""
        return {
            "status": "ok",
            "environment": load_settings().environment,
            "version": __version__,
        }

    @app.get("/lookup", tags=["Lookup"])
    async def lookup_word(
        pipeline: Annotated[LookupPipeline, Depends(get_pipeline)],
        q: Annotated[str | None, Query(description="Selected text to look up.")] = None,
        lang: Annotated[str, Query(description="Language code: en, es or fr.")] = "es",
    ) -> Any:
        """
        Look up ``q`` in ``lang``.

        The body is always ``LookupResult.to_dict()``; the ``kind`` field tells
        clients which shape they received. ``lookup_failed`` is sent with 502.
        """
        language = LanguageCode.parse(lang)
        result = await pipeline.lookup_async(q, language)
        if isinstance(result, LookupFailed):
            return JSONResponse(status_code=502, content=result.to_dict())
        if isinstance(result, InvalidQuery):
            return JSONResponse(status_code=422, content=result.to_dict())
        return result.to_dict()

    return app


__all__ = ["create_app", "get_pipeline"]
