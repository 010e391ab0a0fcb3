"""Directory operations on a GoogleDriveFileSystem."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from gdrivefs.errors import (
    ApiError,
    NotFoundError,
    NotReadableError,
    NotWritableError,
    status_code_of,
)
from gdrivefs.models import EntryInfo, EntryType, Item
from gdrivefs.util.paths import child_path, get_name, get_parent_path, normalize_path
from gdrivefs.util.time import to_epoch_millis

if TYPE_CHECKING:
    from gdrivefs.filesystem import GoogleDriveFileSystem

logger = logging.getLogger(__name__)


class DriveDirectory:
    """A folder at a virtual path. Holds no remote state between calls."""

    def __init__(self, fs: "GoogleDriveFileSystem", path: str) -> None:
        self._fs = fs
        self.path = path

    def __repr__(self) -> str:
        return f"DriveDirectory({self.path!r})"

    def list(self) -> list[Item]:
        """List active children; trashed entries are never returned."""
        fs = self._fs
        with fs.translating(self.path, write=False):
            info = fs.resolve_required(self.path)
            if not info.is_folder:
                raise NotReadableError(
                    f"Not a directory: {self.path}",
                    details={"path": self.path},
                )
            children = fs.get_client().list_children(info.id)
            return [
                _entry_to_item(self.path, e)
                for e in children
                if e.is_active
            ]

    def mkdir(self, *, force: Optional[bool] = None, recursive: bool = False) -> EntryInfo:
        """
        Create this folder.

        Args:
            force: Treat an existing folder of the same name as success.
                Defaults to the filesystem's `idempotent_mkdir` setting.
            recursive: Create missing ancestors as well.
        """
        fs = self._fs
        if force is None:
            force = fs.idempotent_mkdir
        with fs.translating(self.path, write=True):
            return self._make_folder(fs.full_path(self.path), force=force, recursive=recursive)

    def rmdir(self) -> None:
        """Delete this folder; it must be empty."""
        fs = self._fs
        with fs.translating(self.path, write=True):
            info = fs.resolve_required(self.path)
            if not info.is_folder:
                raise NotWritableError(
                    f"Not a directory: {self.path}",
                    details={"path": self.path},
                )
            client = fs.get_client()
            if any(e.is_active for e in client.list_children(info.id)):
                raise NotWritableError(
                    f"Directory not empty: {self.path}",
                    details={"path": self.path},
                )
            client.delete(info.id)
            if normalize_path(self.path) == "/":
                logger.info("Repository root /%s was removed", fs.repository)
                fs.reset_client()

    def _make_folder(self, full_path: str, *, force: bool, recursive: bool) -> EntryInfo:
        fs = self._fs
        parent_path = get_parent_path(full_path)
        name = get_name(full_path)

        parent = fs.resolve_full(parent_path)
        if parent is None:
            if not recursive:
                raise NotFoundError(
                    f"Parent directory does not exist: {self.path}",
                    details={"path": self.path, "repository": fs.repository},
                )
            parent = self._make_folder(parent_path, force=True, recursive=True)
        if not parent.is_folder:
            raise NotWritableError(
                f"Parent is not a directory: {self.path}",
                details={"path": self.path},
            )

        client = fs.get_client()
        for entry in client.list_children(parent.id):
            if entry.name != name or not entry.is_active:
                continue
            if entry.is_folder and force:
                return entry
            raise NotWritableError(
                f"Already exists: {full_path}",
                details={"path": self.path, "type": entry.type},
            )

        try:
            created = client.create_folder(parent.id, name)
        except ApiError as exc:
            if status_code_of(exc) != 409 or not force:
                raise
            logger.warning("Folder %s already exists; ignoring conflict", full_path)
            existing = fs.resolve_full(full_path)
            if existing is None:
                raise
            return existing

        logger.info("Created folder %s", full_path)
        return created


def _entry_to_item(parent: str, entry: EntryInfo) -> Item:
    if entry.is_folder:
        item = Item(path=child_path(parent, entry.name), type=EntryType.DIRECTORY)
    else:
        item = Item(path=child_path(parent, entry.name), type=EntryType.FILE, size=entry.size)
    item.created = to_epoch_millis(entry.created_at)
    item.modified = to_epoch_millis(entry.modified_at)
    item.etag = entry.etag
    return item
