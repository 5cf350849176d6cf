"""Global exception handlers — translate domain errors to HTTP responses.

Every failure is answered with a plain-text body prefixed with
``Request error:`` (4xx) or ``Unexpected error:`` (500).
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from repo_concat.domain.exceptions import (
    InvalidInputError,
    RepoConcatError,
    RepositoryFetchError,
    RepositoryFileNotFoundError,
)

logger = logging.getLogger(__name__)

_EXCEPTION_STATUS: list[tuple[type[RepoConcatError], int]] = [
    (InvalidInputError, 400),
    (RepositoryFileNotFoundError, 404),
]


def status_for_error(exc: BaseException) -> int:
    """Map an exception raised by the pipeline to the HTTP status shown to the caller."""
    if isinstance(exc, RepositoryFetchError):
        if exc.status in (401, 403):
            return 403
        if exc.status == 404:
            return 404
        return 500

    for exc_type, code in _EXCEPTION_STATUS:
        if isinstance(exc, exc_type):
            return code

    return 500


def _error_text(status_code: int, message: str) -> PlainTextResponse:
    prefix = "Unexpected error" if status_code >= 500 else "Request error"
    return PlainTextResponse(f"{prefix}: {message}", status_code=status_code)


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    @app.exception_handler(RepoConcatError)
    async def domain_handler(request: Request, exc: RepoConcatError) -> PlainTextResponse:
        status_code = status_for_error(exc)
        logger.warning("%s (%d): %s", type(exc).__name__, status_code, exc)
        return _error_text(status_code, str(exc))

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> PlainTextResponse:
        logger.exception("Unhandled exception")
        return _error_text(500, str(exc) or "Unknown error")
