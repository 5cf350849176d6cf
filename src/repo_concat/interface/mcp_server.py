"""MCP server exposing the pipeline as a single ``fetch_github_code`` tool.

Run with ``repo-concat-mcp`` (stdio transport).  The configured
``GITHUB_TOKEN``, when set, is sent as the bearer credential.
"""

from __future__ import annotations

import logging
from typing import Literal

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from repo_concat.domain.value_objects import RepositoryRequest
from repo_concat.infrastructure.config import get_settings
from repo_concat.interface.dependencies import build_use_case, new_http_client

logger = logging.getLogger(__name__)

mcp = FastMCP("repo-concat")


async def fetch_code(request: RepositoryRequest) -> str:
    """Run one request through a fresh pipeline and wrap failures as tool errors."""
    settings = get_settings()
    try:
        async with new_http_client(settings) as client:
            use_case = build_use_case(client, settings)
            return await use_case.execute(request, settings.token())
    except Exception as exc:
        logger.warning("fetch_github_code failed: %s", exc)
        raise ToolError(f"Failed to fetch GitHub code: {exc}") from exc


@mcp.tool()
async def fetch_github_code(
    url: str = Field(description="GitHub repository URL (e.g., https://github.com/owner/repo)"),
    dir: str | None = Field(default=None, description="Filter by directory paths, comma-separated (optional)"),
    ext: str | None = Field(default=None, description="Filter by file extensions, comma-separated (optional)"),
    branch: str | None = Field(default=None, description="Git branch name (optional)"),
    file: str | None = Field(default=None, description="Specific file to fetch (optional)"),
    mode: Literal["tree", "full"] | None = Field(default=None, description="Display mode (optional)"),
) -> str:
    """Fetch code from GitHub repositories with flexible filtering options."""
    return await fetch_code(
        RepositoryRequest(url=url, dir=dir, ext=ext, branch=branch, file=file, mode=mode)
    )


def main() -> None:
    logging.basicConfig(level=get_settings().log_level.upper())
    mcp.run()


if __name__ == "__main__":
    main()
