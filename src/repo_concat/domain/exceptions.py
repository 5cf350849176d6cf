"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class RepoConcatError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidInputError(RepoConcatError):
    """The request is missing its URL or the URL has no owner/repo."""


# ── Archive retrieval ───────────────────────────────────────────────────────


class RepositoryFetchError(RepoConcatError):
    """The archive endpoint answered with a non-2xx status for every branch tried."""

    def __init__(self, status: int, status_text: str) -> None:
        super().__init__(f"Failed to fetch repository: {status} {status_text}".rstrip())
        self.status = status
        self.status_text = status_text


class ArchiveDownloadError(RepoConcatError):
    """Transport-level failure while downloading the archive (no HTTP status)."""


class InvalidArchiveError(RepoConcatError):
    """The downloaded payload is not a readable zip archive."""


# ── Rendering ───────────────────────────────────────────────────────────────


class RepositoryFileNotFoundError(RepoConcatError):
    """A single file was requested but is absent from the filtered result."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File not found: {path}")
        self.path = path
