"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from repo_concat.interface.dependencies import shutdown, startup
from repo_concat.interface.error_handlers import register_error_handlers
from repo_concat.interface.routes import router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup / shutdown of shared resources."""
    await startup()
    yield
    await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="Repo Concat",
        version="1.0.0",
        description=(
            "Fetches a GitHub repository snapshot and returns it as a single "
            "text document: one file, a directory tree, or every selected "
            "file concatenated."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)

    # ── Health check (simple liveness probe) ────────────────────────────
    # Registered before the catch-all repository route so it is matched first.

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(router)

    return app
