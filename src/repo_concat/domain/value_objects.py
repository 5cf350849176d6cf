"""Value objects — immutable request descriptors and processing limits."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DisplayMode(str, Enum):
    """Output shape requested by the caller."""

    FULL = "full"
    TREE = "tree"

    @classmethod
    def from_param(cls, value: str | None) -> DisplayMode:
        """``"tree"`` selects the tree view; anything else is a full listing."""
        return cls.TREE if value == cls.TREE.value else cls.FULL


@dataclass(frozen=True, slots=True)
class RepositoryRequest:
    """Raw request descriptor, as built by the browser route or the MCP tool."""

    url: str
    dir: str | None = None
    ext: str | None = None
    branch: str | None = None
    file: str | None = None
    mode: str | None = None


@dataclass(frozen=True, slots=True)
class RepositoryReference:
    """A GitHub repository plus the branch to try first."""

    owner: str
    repo: str
    branch: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def archive_root(self, branch: str) -> str:
        """Top-level directory of the codeload zip for *branch*.

        codeload replaces ``/`` in branch names with ``-`` when naming it.
        """
        return f"{self.repo}-{branch.replace('/', '-')}/"


@dataclass(frozen=True, slots=True)
class ScopeSelection:
    """Which part of the repository is wanted.

    ``directories`` entries always end with ``/``.  ``file`` and
    ``directories`` coming from the URL path are mutually exclusive; query
    values may combine them, in which case ``file`` wins during filtering.
    """

    directories: tuple[str, ...] = ()
    file: str | None = None
    extensions: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True, slots=True)
class ResolvedRequest:
    """Canonical descriptor produced by the reference resolver."""

    reference: RepositoryReference
    scope: ScopeSelection
    mode: DisplayMode


@dataclass(frozen=True, slots=True)
class ProcessingLimits:
    """Size thresholds and heuristics applied while filtering files."""

    max_display_bytes: int = 30 * 1024
    max_file_bytes: int = 500 * 1024
    binary_sample_size: int = 1000
    binary_threshold: float = 0.05
