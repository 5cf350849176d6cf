"""Browser routes — thin controllers that delegate to the use case."""

from __future__ import annotations

import re

from fastapi import APIRouter, Depends, Header
from fastapi.responses import PlainTextResponse

from repo_concat.domain.exceptions import InvalidInputError
from repo_concat.domain.value_objects import RepositoryRequest
from repo_concat.interface.dependencies import get_use_case
from repo_concat.services.process_repository import ProcessRepositoryUseCase

router = APIRouter()

# Proxies and browsers may collapse "https://" inside a path to "https:/".
_SCHEME_RE = re.compile(r"^(https?):/+")


def _target_url(target: str) -> str:
    if _SCHEME_RE.match(target):
        return _SCHEME_RE.sub(r"\1://", target, count=1)
    return f"https://{target}"


def _bearer_token(authorization: str | None) -> str | None:
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[len("bearer "):].strip() or None
    return None


@router.get(
    "/{target:path}",
    response_class=PlainTextResponse,
    responses={
        400: {"description": "Missing or malformed repository URL"},
        403: {"description": "Repository is private or access was denied"},
        404: {"description": "Repository, branch or requested file not found"},
    },
)
async def fetch_repository(
    target: str,
    dir: str | None = None,
    ext: str | None = None,
    branch: str | None = None,
    file: str | None = None,
    mode: str | None = None,
    authorization: str | None = Header(default=None),
    use_case: ProcessRepositoryUseCase = Depends(get_use_case),
) -> PlainTextResponse:
    """Render a GitHub repository (or part of it) as plain text."""
    if not target:
        raise InvalidInputError("No repository URL provided")

    request = RepositoryRequest(
        url=_target_url(target),
        dir=dir,
        ext=ext,
        branch=branch,
        file=file,
        mode=mode,
    )
    text = await use_case.execute(request, _bearer_token(authorization))
    return PlainTextResponse(text)
