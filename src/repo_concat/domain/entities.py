"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    """A single member of the downloaded archive (file or directory)."""

    path: str
    is_directory: bool = False


@dataclass(frozen=True, slots=True)
class FetchedArchive:
    """Raw zip payload together with the branch that actually served it."""

    branch: str
    data: bytes


@dataclass(frozen=True, slots=True)
class RenderedFile:
    """A selected file, ready for rendering.

    ``byte_size`` is the UTF-8 size of the original content, even when
    ``content`` has been truncated.
    """

    path: str
    byte_size: int
    content: str
    is_truncated: bool = False
    display_size: int = 0


@dataclass(slots=True)
class FilteredFiles:
    """Files that survived filtering, in archive order, with running totals."""

    files: dict[str, RenderedFile] = field(default_factory=dict)
    original_total: int = 0
    display_total: int = 0

    def add(self, rendered: RenderedFile) -> None:
        self.files[rendered.path] = rendered
        self.original_total += rendered.byte_size
        self.display_total += rendered.display_size
