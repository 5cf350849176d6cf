"""Reference resolution — turn a raw URL plus query parameters into a canonical request.

Accepted URL shapes (scheme optional)::

    github.com/<owner>/<repo>
    github.com/<owner>/<repo>/tree/<branch>/<dir...>
    github.com/<owner>/<repo>/blob/<branch>/<file...>
    github.com/<owner>/<repo>/<dir...>

Query parameters (``dir``, ``ext``, ``branch``, ``file``) win over anything
embedded in the path, but relative ``dir``/``file`` values stay anchored to
the directory selected by the path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from repo_concat.domain.exceptions import InvalidInputError
from repo_concat.domain.value_objects import (
    DisplayMode,
    RepositoryReference,
    RepositoryRequest,
    ResolvedRequest,
    ScopeSelection,
)

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "main"


@dataclass(slots=True)
class _PathSelection:
    """What the URL path alone says about branch and scope."""

    branch: str | None = None
    directories: list[str] = field(default_factory=list)
    file: str | None = None

    @property
    def base_dir(self) -> str:
        return self.directories[0] if self.directories else ""


def _with_trailing_slash(path: str) -> str:
    return path if path.endswith("/") else f"{path}/"


def _split_csv(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def _path_segments(url: str) -> list[str]:
    candidate = url if url.startswith("http") else f"https://{url}"
    try:
        parsed = urlsplit(candidate)
    except ValueError as exc:
        raise InvalidInputError(f"Invalid URL: {exc}") from exc

    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidInputError(f"Invalid URL: '{url}'")

    return [segment for segment in parsed.path.split("/") if segment]


def _parse_path(path_segments: list[str]) -> _PathSelection:
    selection = _PathSelection()

    if len(path_segments) >= 2:
        kind = path_segments[0]
        if kind == "tree":
            selection.branch = path_segments[1]
            remainder = "/".join(path_segments[2:])
            if remainder:
                selection.directories = [_with_trailing_slash(remainder)]
        elif kind == "blob" and len(path_segments) >= 3:
            selection.branch = path_segments[1]
            selection.file = "/".join(path_segments[2:])

    # Shorthand scoping: /owner/repo/src/utils means "only src/utils/".
    if (
        selection.branch is None
        and selection.file is None
        and not selection.directories
        and path_segments
    ):
        selection.directories = [_with_trailing_slash("/".join(path_segments))]

    return selection


def _anchor(path: str, base_dir: str) -> str:
    if base_dir and not path.startswith(base_dir):
        return base_dir + path
    return path


def _resolve_directories(query_dir: str | None, path: _PathSelection) -> tuple[str, ...]:
    query_dirs = _split_csv(query_dir)
    if not query_dirs:
        return tuple(path.directories)
    return tuple(
        _anchor(_with_trailing_slash(entry.lstrip("/")), path.base_dir)
        for entry in query_dirs
    )


def _resolve_extensions(query_ext: str | None) -> frozenset[str]:
    return frozenset(
        ext
        for ext in (part.lower().lstrip(".") for part in _split_csv(query_ext))
        if ext
    )


def _resolve_file(query_file: str | None, path: _PathSelection) -> str | None:
    if query_file:
        normalized = query_file[1:] if query_file.startswith("/") else query_file
        return _anchor(normalized, path.base_dir)
    return path.file


def resolve(request: RepositoryRequest) -> ResolvedRequest:
    """Parse *request* into owner/repo/branch, scope and display mode.

    Raises :class:`InvalidInputError` when the URL is missing, unparseable,
    or lacks the ``<owner>/<repo>`` segments.
    """
    url = (request.url or "").strip()
    if not url:
        raise InvalidInputError(
            "URL parameter is required. Please provide a GitHub repository URL "
            "(e.g., https://github.com/owner/repo)"
        )

    segments = _path_segments(url)
    if len(segments) < 2:
        raise InvalidInputError(f"Invalid GitHub repository URL format: '{url}'")

    owner, repo = segments[0], segments[1]
    path = _parse_path(segments[2:])

    reference = RepositoryReference(
        owner=owner,
        repo=repo,
        branch=request.branch or path.branch or DEFAULT_BRANCH,
    )
    scope = ScopeSelection(
        directories=_resolve_directories(request.dir, path),
        file=_resolve_file(request.file, path),
        extensions=_resolve_extensions(request.ext),
    )
    mode = DisplayMode.from_param(request.mode)

    logger.debug(
        "Resolved %s -> %s@%s dirs=%s file=%s exts=%s mode=%s",
        url,
        reference.full_name,
        reference.branch,
        scope.directories,
        scope.file,
        sorted(scope.extensions),
        mode.value,
    )
    return ResolvedRequest(reference=reference, scope=scope, mode=mode)
