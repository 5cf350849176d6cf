"""Shared fixtures: in-memory archives and a scripted downloader."""

from __future__ import annotations

import io
import zipfile

import pytest

from repo_concat.domain.exceptions import RepositoryFetchError
from repo_concat.infrastructure.zip_archive import ZipRepositoryArchive


def build_zip(files: dict[str, str | bytes], root: str = "demo-main/") -> bytes:
    """Zip *files* under *root*, adding directory members like codeload does."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        written_dirs: set[str] = set()
        zf.writestr(root, "")
        written_dirs.add(root)
        for path, content in files.items():
            parts = path.split("/")[:-1]
            for depth in range(1, len(parts) + 1):
                directory = root + "/".join(parts[:depth]) + "/"
                if directory not in written_dirs:
                    zf.writestr(directory, "")
                    written_dirs.add(directory)
            zf.writestr(root + path, content)
    return buf.getvalue()


class ScriptedDownloader:
    """ArchiveDownloader fake: serves configured branches, fails the rest."""

    def __init__(
        self,
        archives: dict[str, bytes],
        failure: tuple[int, str] = (404, "Not Found"),
    ) -> None:
        self.archives = archives
        self.failure = failure
        self.calls: list[tuple[str, str, str, str | None]] = []

    async def download(
        self, owner: str, repo: str, branch: str, token: str | None = None
    ) -> bytes:
        self.calls.append((owner, repo, branch, token))
        if branch in self.archives:
            return self.archives[branch]
        raise RepositoryFetchError(*self.failure)

    @property
    def branches(self) -> list[str]:
        return [call[2] for call in self.calls]


@pytest.fixture
def make_zip():
    return build_zip


@pytest.fixture
def make_archive():
    def _make(files: dict[str, str | bytes], root: str = "demo-main/") -> ZipRepositoryArchive:
        return ZipRepositoryArchive.from_bytes(build_zip(files, root))

    return _make


@pytest.fixture
def scripted_downloader():
    return ScriptedDownloader
