"""Port: archive downloader — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol


class ArchiveDownloader(Protocol):
    """Abstract contract for downloading a repository snapshot at one branch."""

    async def download(
        self, owner: str, repo: str, branch: str, token: str | None = None
    ) -> bytes:
        """Return the zip payload, or raise ``RepositoryFetchError`` on a non-2xx answer."""
        ...
