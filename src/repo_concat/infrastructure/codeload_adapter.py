"""codeload.github.com adapter — implements the ArchiveDownloader port."""

from __future__ import annotations

import logging

import httpx

from repo_concat.domain.exceptions import ArchiveDownloadError, RepositoryFetchError

logger = logging.getLogger(__name__)

_CODELOAD_BASE = "https://codeload.github.com"
_USER_AGENT = "repo-concat/1.0"


class CodeloadArchiveAdapter:
    """Concrete ArchiveDownloader backed by GitHub's zip download endpoint."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str = _CODELOAD_BASE,
        user_agent: str = _USER_AGENT,
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._user_agent = user_agent

    def archive_url(self, owner: str, repo: str, branch: str) -> str:
        return f"{self._base_url}/{owner}/{repo}/zip/{branch}"

    async def download(
        self, owner: str, repo: str, branch: str, token: str | None = None
    ) -> bytes:
        """GET /{owner}/{repo}/zip/{branch} → zip bytes."""
        url = self.archive_url(owner, repo, branch)
        headers = {"User-Agent": self._user_agent}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.info("Fetching zip from: %s", url)
        try:
            resp = await self._client.get(url, headers=headers, follow_redirects=True)
        except httpx.HTTPError as exc:
            raise ArchiveDownloadError(f"Network error fetching {url}: {exc}") from exc

        if not resp.is_success:
            raise RepositoryFetchError(resp.status_code, resp.reason_phrase)

        return resp.content
