"""FastAPI application factory.

Routers
-------
All endpoint groups are mounted under their respective path prefix:

    /extract  article extraction (content, related links, concepts, blocks)
    /health  liveness probe

Error handling
--------------
Pipeline errors (:class:`~backend.scraper.errors.ReaderError` subclasses) are
mapped to status codes here so routers can stay free of ``try``/``except``.
Every error body carries a short ``error`` message; the diagnostic
``details`` field is included only when ``settings.expose_error_details`` is
on.  Stack traces go to the log, never to the client.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.config import configure_logging, settings
from backend.scraper.errors import (
    BusyError,
    ExtractionError,
    FetchError,
    ReaderError,
    ValidationError,
)

from backend.api.routers import extract as extract_router

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: list[tuple[type[ReaderError], int]] = [
    (ValidationError, 422),
    (ExtractionError, 422),
    (FetchError, 502),
    (BusyError, 503),
]


def _error_body(exc: ReaderError) -> dict[str, Any]:
    body: dict[str, Any] = {"error": exc.message}
    if settings.expose_error_details and exc.detail:
        body["details"] = exc.detail
    return body


async def _reader_error_handler(request: Request, exc: ReaderError) -> JSONResponse:
    status = next(
        (code for err_type, code in _STATUS_BY_ERROR if isinstance(exc, err_type)),
        500,
    )
    logger.warning("%s %s failed (%d): %s", request.method, request.url.path, status, exc)
    return JSONResponse(status_code=status, content=_error_body(exc))


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    body: dict[str, Any] = {"error": "Failed to fetch or process the URL."}
    if settings.expose_error_details:
        body["details"] = str(exc)
    return JSONResponse(status_code=500, content=body)


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    configure_logging()
    app = FastAPI(
        title="Clean Reader API",
        description=(
            "Isolates the main article of a web page and returns clean text, "
            "related links found inside it, matched key concepts and a typed "
            "block breakdown for display."
        ),
        version="0.1.0",
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ReaderError, _reader_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)

    app.include_router(extract_router.router, prefix="/extract", tags=["extract"])

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# Module-level instance used by uvicorn:
#   uvicorn backend.api.app:app --reload
app = create_app()
