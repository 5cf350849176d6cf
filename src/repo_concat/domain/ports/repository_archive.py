"""Port: repository archive — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol, Sequence

from repo_concat.domain.entities import ArchiveEntry


class RepositoryArchive(Protocol):
    """Read-only view over a decompressed repository snapshot."""

    def entries(self) -> Sequence[ArchiveEntry]:
        """Return every member in the archive's own iteration order."""
        ...

    def read_text(self, path: str) -> str:
        """Return the decoded text content of the member at *path*."""
        ...
