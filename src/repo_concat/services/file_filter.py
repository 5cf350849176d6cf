"""File filtering — decide which archive members to keep and load their content."""

from __future__ import annotations

import logging

from repo_concat.domain.entities import FilteredFiles, RenderedFile
from repo_concat.domain.ports.repository_archive import RepositoryArchive
from repo_concat.domain.value_objects import DisplayMode, ProcessingLimits, ScopeSelection

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS: frozenset[str] = frozenset(
    {".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".webp", ".svg"}
)

BINARY_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".zip", ".tar", ".gz", ".rar", ".7z",
        ".exe", ".dll", ".so", ".dylib", ".bin", ".dat",
        ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
        ".mp3", ".mp4", ".avi", ".mov", ".wav",
        ".db", ".sqlite",
    }
)

TS_PROJECT_MARKER = "tsconfig.json"
COMPILED_JS_SUFFIXES: tuple[str, ...] = (".js", ".mjs")

README_NAME = "readme.md"

_ALLOWED_CONTROL_CHARS: frozenset[int] = frozenset({9, 10, 13})  # tab, LF, CR


def _filename(path: str) -> str:
    return path.rsplit("/", maxsplit=1)[-1]


def _extension(path: str) -> str:
    """Lower-case final extension of the file name, without the dot."""
    name = _filename(path)
    if "." not in name:
        return ""
    return name.rsplit(".", maxsplit=1)[-1].lower()


def is_readme(path: str) -> bool:
    return _filename(path).lower() == README_NAME


def is_lock_file(path: str) -> bool:
    name = _filename(path).lower()
    return "-lock." in name or name.endswith(".lock")


def is_binary_content(sample: str, threshold: float = 0.05) -> bool:
    """Return *True* when control characters make up more than *threshold* of *sample*."""
    if not sample:
        return False
    non_printable = sum(
        1
        for char in sample
        if ord(char) == 0 or (ord(char) < 32 and ord(char) not in _ALLOWED_CONTROL_CHARS)
    )
    return non_printable / len(sample) > threshold


def should_include(
    path: str,
    directories: tuple[str, ...],
    extensions: frozenset[str],
) -> bool:
    """Directory-prefix and extension selection for a relative path."""
    if directories and not any(path.startswith(d) for d in directories):
        return False
    if extensions and _extension(path) not in extensions:
        return False
    return True


def skip_reason(
    path: str,
    size: int,
    content: str,
    is_ts_project: bool,
    limits: ProcessingLimits,
) -> str | None:
    """Return why a loaded file must be dropped, or *None* to keep it."""
    if is_lock_file(path):
        return "lock file"

    ext = f".{_extension(path)}"
    if ext in IMAGE_EXTENSIONS or ext in BINARY_EXTENSIONS:
        return "binary extension"

    if is_ts_project and path.endswith(COMPILED_JS_SUFFIXES):
        return "compiled JavaScript in a TypeScript project"

    if size > limits.max_file_bytes:
        return "too large"

    if is_binary_content(content[: limits.binary_sample_size], limits.binary_threshold):
        return "binary content"

    return None


def truncate(content: str, size: int, limits: ProcessingLimits) -> tuple[str, bool]:
    """Cut *content* to the display limit (in UTF-8 bytes) and note what was left out."""
    if size <= limits.max_display_bytes:
        return content, False

    head = content.encode("utf-8")[: limits.max_display_bytes].decode("utf-8", errors="ignore")
    remaining_kb = (size - limits.max_display_bytes) / 1024
    limit_kb = limits.max_display_bytes // 1024
    marker = (
        f"\n\nThis file is too large, truncated at {limit_kb}KB. "
        f"There is {remaining_kb:.2f}KB remaining."
    )
    return head + marker, True


def filter_archive(
    archive: RepositoryArchive,
    root_prefix: str,
    scope: ScopeSelection,
    mode: DisplayMode,
    limits: ProcessingLimits | None = None,
) -> FilteredFiles:
    """Select archive members under *root_prefix* and load what the mode needs.

    Members outside *root_prefix* are ignored.  Insertion order of the result
    is the archive's own member order.
    """
    limits = limits or ProcessingLimits()
    entries = archive.entries()
    is_ts_project = any(
        e.path.startswith(root_prefix) and e.path.endswith(TS_PROJECT_MARKER)
        for e in entries
    )

    result = FilteredFiles()
    for entry in entries:
        if entry.is_directory or not entry.path.startswith(root_prefix):
            continue

        relative = entry.path[len(root_prefix):]
        if scope.file:
            if relative != scope.file:
                continue
        elif not should_include(relative, scope.directories, scope.extensions):
            continue

        if mode is DisplayMode.TREE and not is_readme(relative):
            result.add(RenderedFile(path=relative, byte_size=0, content=""))
            continue

        content = archive.read_text(entry.path)
        size = len(content.encode("utf-8"))

        reason = skip_reason(relative, size, content, is_ts_project, limits)
        if reason:
            logger.debug("Skipping %s (%s)", relative, reason)
            continue

        processed, is_truncated = truncate(content, size, limits)
        result.add(
            RenderedFile(
                path=relative,
                byte_size=size,
                content=processed,
                is_truncated=is_truncated,
                display_size=limits.max_display_bytes if is_truncated else size,
            )
        )

    return result
