"""File operations on a GoogleDriveFileSystem."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from gdrivefs.errors import NotFoundError, NotReadableError, NotWritableError
from gdrivefs.models import EntryInfo
from gdrivefs.util.data import merge, to_bytes
from gdrivefs.util.mime import is_download_disallowed
from gdrivefs.util.paths import get_name, get_parent_path

if TYPE_CHECKING:
    from gdrivefs.filesystem import GoogleDriveFileSystem

logger = logging.getLogger(__name__)


class DriveFile:
    """A file at a virtual path. Holds no remote state between calls."""

    def __init__(self, fs: "GoogleDriveFileSystem", path: str) -> None:
        self._fs = fs
        self.path = path

    def __repr__(self) -> str:
        return f"DriveFile({self.path!r})"

    def read(self, *, start: Optional[int] = None, end: Optional[int] = None) -> bytes:
        """
        Return the file content, or the byte range [start, end) of it.

        Files reported with size 0 return b"" without a download.
        """
        if (start is not None and start < 0) or (end is not None and end < 0):
            raise NotReadableError(
                "Byte range offsets must be non-negative",
                details={"path": self.path, "start": start, "end": end},
            )

        fs = self._fs
        with fs.translating(self.path, write=False):
            info = fs.resolve_required(self.path)
            if info.is_folder or is_download_disallowed(info.mime_type or ""):
                raise NotReadableError(
                    f"Not a downloadable file: {self.path}",
                    details={"path": self.path, "mime_type": info.mime_type},
                )
            if info.size == 0:
                return b""
            if _empty_range(start, end, info.size):
                return b""

            client = fs.get_client()
            return client.download(info.id, start=start, end=end)

    def write(self, data: Any, *, append: bool = False) -> EntryInfo:
        """
        Store data at this path.

        An existing file gets a new version (its revision history is kept);
        with append=True the current content is prepended first. A missing
        file is created in its parent folder, which must exist.
        """
        fs = self._fs
        with fs.translating(self.path, write=True):
            buffer = to_bytes(data)
            client = fs.get_client()

        resolution = fs.try_resolve(self.path, write=True)
        if resolution.status == "error":
            raise resolution.error  # type: ignore[misc]

        with fs.translating(self.path, write=True):
            info = resolution.info
            if resolution.status == "found" and info is not None:
                if info.is_folder:
                    raise NotWritableError(
                        f"Is a directory: {self.path}",
                        details={"path": self.path},
                    )
                if append and info.size != 0:
                    head = client.download(info.id)
                    buffer = merge([head, buffer])
                logger.debug("Uploading new version of %s (%d bytes)", self.path, len(buffer))
                return client.upload_new_version(info.id, buffer)

            full_path = fs.full_path(self.path)
            parent = fs.resolve_full(get_parent_path(full_path))
            if parent is None or not parent.is_folder:
                raise NotFoundError(
                    f"Parent directory does not exist: {self.path}",
                    details={"path": self.path, "repository": fs.repository},
                )
            logger.debug("Creating %s (%d bytes)", self.path, len(buffer))
            return client.create_file(parent.id, get_name(full_path), buffer)

    def delete(self) -> None:
        fs = self._fs
        with fs.translating(self.path, write=True):
            info = fs.resolve_required(self.path)
            if info.is_folder:
                raise NotWritableError(
                    f"Is a directory: {self.path}",
                    details={"path": self.path},
                )
            fs.get_client().delete(info.id)

    def stat(self):
        return self._fs.stat(self.path)


def _empty_range(start: Optional[int], end: Optional[int], size: Optional[int]) -> bool:
    first = start or 0
    if end is not None and end <= first:
        return True
    return size is not None and first >= size
