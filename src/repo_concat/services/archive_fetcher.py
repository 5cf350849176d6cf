"""Archive retrieval with default-branch fallback."""

from __future__ import annotations

import logging

from repo_concat.domain.entities import FetchedArchive
from repo_concat.domain.exceptions import RepositoryFetchError
from repo_concat.domain.ports.archive_downloader import ArchiveDownloader
from repo_concat.domain.value_objects import RepositoryReference

logger = logging.getLogger(__name__)

FALLBACK_BRANCHES: tuple[str, ...] = ("main", "master")


async def fetch_archive(
    downloader: ArchiveDownloader,
    reference: RepositoryReference,
    token: str | None = None,
) -> FetchedArchive:
    """Download the archive for ``reference.branch``, falling back to main/master.

    Attempts run one at a time and stop at the first success.  When every
    attempt fails, the error from the requested branch is raised.
    """
    try:
        data = await downloader.download(
            reference.owner, reference.repo, reference.branch, token
        )
        return FetchedArchive(branch=reference.branch, data=data)
    except RepositoryFetchError as first_error:
        logger.info(
            "Branch %r of %s unavailable (%s) — trying default branches",
            reference.branch,
            reference.full_name,
            first_error.status,
        )
        for fallback in FALLBACK_BRANCHES:
            if fallback == reference.branch:
                continue
            try:
                data = await downloader.download(
                    reference.owner, reference.repo, fallback, token
                )
            except RepositoryFetchError as exc:
                logger.debug("Fallback branch %r failed: %s", fallback, exc)
                continue
            logger.info("Using fallback branch %r for %s", fallback, reference.full_name)
            return FetchedArchive(branch=fallback, data=data)
        raise first_error
