"""In-memory zip reader — implements the RepositoryArchive port."""

from __future__ import annotations

import io
import zipfile

from repo_concat.domain.entities import ArchiveEntry
from repo_concat.domain.exceptions import InvalidArchiveError


class ZipRepositoryArchive:
    """Concrete RepositoryArchive over a :class:`zipfile.ZipFile`.

    Member contents are only decompressed when :meth:`read_text` asks for them.
    """

    def __init__(self, zf: zipfile.ZipFile) -> None:
        self._zf = zf
        self._entries = [
            ArchiveEntry(path=info.filename, is_directory=info.is_dir())
            for info in zf.infolist()
        ]

    @classmethod
    def from_bytes(cls, data: bytes) -> ZipRepositoryArchive:
        try:
            return cls(zipfile.ZipFile(io.BytesIO(data)))
        except zipfile.BadZipFile as exc:
            raise InvalidArchiveError(f"Downloaded archive is not a valid zip: {exc}") from exc

    def entries(self) -> list[ArchiveEntry]:
        return list(self._entries)

    def read_text(self, path: str) -> str:
        return self._zf.read(path).decode("utf-8", errors="replace")
