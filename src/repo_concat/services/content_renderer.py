"""Content renderer — builds the final text artefact from the filtered files.

This is the last transformation before text leaves the pipeline.
"""

from __future__ import annotations

from repo_concat.domain.entities import FilteredFiles
from repo_concat.domain.exceptions import RepositoryFileNotFoundError
from repo_concat.domain.value_objects import DisplayMode, ProcessingLimits, ScopeSelection
from repo_concat.services.file_filter import is_readme

_FOLDER = "📂"
_LEAF = "📄"


def _kb(size: int) -> str:
    return f"{size / 1024:.2f}"


def _all_prefixes(paths: list[str]) -> tuple[list[str], set[str]]:
    """Every ancestor path of every file (file paths included), sorted,
    plus the subset that has descendants."""
    prefixes: set[str] = set()
    parents: set[str] = set()
    for path in paths:
        parts = path.split("/")
        for depth in range(1, len(parts) + 1):
            prefix = "/".join(parts[:depth])
            prefixes.add(prefix)
            if depth < len(parts):
                parents.add(prefix)
    return sorted(prefixes), parents


def render_tree(
    filtered: FilteredFiles,
    show_size: bool = False,
    limits: ProcessingLimits | None = None,
) -> str:
    """Render the directory listing implied by the filtered file paths."""
    limits = limits or ProcessingLimits()
    truncated = f"→{limits.max_display_bytes // 1024}KB truncated"
    prefixes, parents = _all_prefixes(list(filtered.files))
    lines: list[str] = []

    for prefix in prefixes:
        indent = "  " * prefix.count("/")
        name = prefix.rsplit("/", maxsplit=1)[-1]
        is_leaf = prefix not in parents

        if not is_leaf:
            lines.append(f"{indent}{_FOLDER} {name}")
        elif not show_size:
            lines.append(f"{indent}{_LEAF} {name}")
        else:
            info = filtered.files.get(prefix)
            size = _kb(info.byte_size) if info else "0.00"
            suffix = truncated if info and info.is_truncated else ""
            lines.append(f"{indent}{_LEAF} {name} ({size} KB{suffix})")

    return "".join(f"{line}\n" for line in lines)


def _render_tree_mode(filtered: FilteredFiles) -> str:
    sections = [f"# Directory Structure\n\n{render_tree(filtered)}"]

    readmes = sorted(
        (path, f.content)
        for path, f in filtered.files.items()
        if is_readme(path) and f.content
    )
    if readmes:
        body = "".join(f"## {path}\n\n{content}\n\n" for path, content in readmes)
        sections.append(f"# README Files\n\n{body}")

    return "\n".join(sections)


def _render_full_mode(filtered: FilteredFiles, limits: ProcessingLimits | None) -> str:
    summary = (
        f"Total: {_kb(filtered.original_total)} KB→"
        f"{_kb(filtered.display_total)} KB"
    )
    blocks = "".join(
        f"```{path}\n{f.content}\n```\n\n" for path, f in filtered.files.items()
    )
    return (
        f"# File Tree\n\n{render_tree(filtered, show_size=True, limits=limits)}\n"
        f"{summary}\n\n"
        f"# Files\n\n{blocks}"
    )


def render(
    filtered: FilteredFiles,
    scope: ScopeSelection,
    mode: DisplayMode,
    limits: ProcessingLimits | None = None,
) -> str:
    """Produce the single-file, tree or full-listing output.

    Raises :class:`RepositoryFileNotFoundError` when a single file was asked
    for but did not survive filtering (absent, binary, oversized or a lock file).
    """
    if scope.file:
        rendered = filtered.files.get(scope.file)
        if rendered is None:
            raise RepositoryFileNotFoundError(scope.file)
        return rendered.content

    if mode is DisplayMode.TREE:
        return _render_tree_mode(filtered)
    return _render_full_mode(filtered, limits)
