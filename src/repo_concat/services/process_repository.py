"""Process-repository use case — the main orchestration pipeline.

This is the single entry point for the business logic, shared by the browser
route and the MCP tool.  It depends only on the two ports
(:class:`ArchiveDownloader` and :class:`RepositoryArchive`) and the pure
service modules.  The interface layer injects concrete adapters at runtime.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from repo_concat.domain.ports.archive_downloader import ArchiveDownloader
from repo_concat.domain.ports.repository_archive import RepositoryArchive
from repo_concat.domain.value_objects import ProcessingLimits, RepositoryRequest
from repo_concat.services.archive_fetcher import fetch_archive
from repo_concat.services.content_renderer import render
from repo_concat.services.file_filter import filter_archive
from repo_concat.services.reference_resolver import resolve

logger = logging.getLogger(__name__)

ArchiveOpener = Callable[[bytes], RepositoryArchive]


class ProcessRepositoryUseCase:
    """Orchestrates the full request → text pipeline.

    Parameters
    ----------
    downloader:
        Adapter that can download a repository zip for one branch.
    open_archive:
        Turns downloaded bytes into a :class:`RepositoryArchive`.
    limits:
        Size thresholds used while filtering.
    """

    def __init__(
        self,
        downloader: ArchiveDownloader,
        open_archive: ArchiveOpener,
        limits: ProcessingLimits | None = None,
    ) -> None:
        self._downloader = downloader
        self._open_archive = open_archive
        self._limits = limits or ProcessingLimits()

    async def execute(self, request: RepositoryRequest, token: str | None = None) -> str:
        """Run the full pipeline and return the rendered text."""
        resolved = resolve(request)
        reference = resolved.reference
        logger.info(
            "Processing %s@%s (mode=%s)",
            reference.full_name,
            reference.branch,
            resolved.mode.value,
        )

        fetched = await fetch_archive(self._downloader, reference, token)
        # Decompression and member reads are CPU-bound; keep them off the event loop.
        archive = await asyncio.to_thread(self._open_archive, fetched.data)
        filtered = await asyncio.to_thread(
            filter_archive,
            archive,
            reference.archive_root(fetched.branch),
            resolved.scope,
            resolved.mode,
            self._limits,
        )
        logger.info(
            "Selected %d file(s) from %s@%s (%d → %d bytes)",
            len(filtered.files),
            reference.full_name,
            fetched.branch,
            filtered.original_total,
            filtered.display_total,
        )

        return render(filtered, resolved.scope, resolved.mode, self._limits)
