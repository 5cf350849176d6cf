"""FastAPI dependency injection wiring."""

from __future__ import annotations

import httpx

from repo_concat.infrastructure.codeload_adapter import CodeloadArchiveAdapter
from repo_concat.infrastructure.config import Settings, get_settings
from repo_concat.infrastructure.zip_archive import ZipRepositoryArchive
from repo_concat.services.process_repository import ProcessRepositoryUseCase

_http_client: httpx.AsyncClient | None = None


def new_http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout))


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client  # noqa: PLW0603

    _http_client = new_http_client(get_settings())


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None


def build_use_case(client: httpx.AsyncClient, settings: Settings) -> ProcessRepositoryUseCase:
    """Assemble the pipeline around an HTTP client."""
    downloader = CodeloadArchiveAdapter(
        client=client,
        base_url=settings.archive_base_url,
        user_agent=settings.user_agent,
    )
    return ProcessRepositoryUseCase(
        downloader=downloader,
        open_archive=ZipRepositoryArchive.from_bytes,
        limits=settings.processing_limits(),
    )


def get_use_case() -> ProcessRepositoryUseCase:
    """Build the use-case with injected adapters."""
    assert _http_client is not None, "startup() was not called"
    return build_use_case(_http_client, get_settings())
