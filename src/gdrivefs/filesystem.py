"""GoogleDriveFileSystem: virtual filesystem view of one Drive folder tree."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Mapping, Optional, Sequence

from gdrivefs.auth import AuthInfo
from gdrivefs.controller import GoogleDriveController
from gdrivefs.errors import (
    DomainError,
    InvalidArgumentError,
    NotFoundError,
    NotReadableError,
    translate_error,
)
from gdrivefs.models import Capabilities, EntryInfo, EntryType, Item, Resolution, Stats
from gdrivefs.resolver import EntryResolver
from gdrivefs.util.paths import join_paths, normalize_path
from gdrivefs.util.time import from_timestamp, to_epoch_millis

from .directory import DriveDirectory
from .file import DriveFile

logger = logging.getLogger(__name__)

_TIMESTAMP_PROPS: dict[str, str] = {
    "created": "createdTime",
    "modified": "modifiedTime",
}


class GoogleDriveFileSystem:
    """
    Filesystem rooted at a repository folder inside Google Drive.

    Every virtual path ("/", "/a/b.txt") is mapped below the repository
    folder ("/<repository>", "/<repository>/a/b.txt") before it is resolved
    against the Drive hierarchy, so the filesystem never sees the rest of the
    account.

    Notes:
        - The Drive client is created on first use and kept for the lifetime
          of the object.
        - First use has a side effect: the repository folder is created when
          missing (see ensure_root).
    """

    def __init__(
        self,
        repository: str,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
        idempotent_mkdir: bool = True,
        keep_revision_forever: bool = False,
    ) -> None:
        if not isinstance(auth_info, AuthInfo):
            raise InvalidArgumentError("auth_info must be an AuthInfo")

        def factory() -> GoogleDriveController:
            return GoogleDriveController(
                auth_info,
                scopes=scopes,
                supports_all_drives=supports_all_drives,
                keep_revision_forever=keep_revision_forever,
            )

        self._init(repository, factory, idempotent_mkdir=idempotent_mkdir)

    @classmethod
    def from_controller(
        cls,
        controller: GoogleDriveController,
        repository: str,
        *,
        idempotent_mkdir: bool = True,
    ) -> "GoogleDriveFileSystem":
        """Create filesystem with an injected controller (useful for tests)."""
        obj = cls.__new__(cls)
        obj._init(repository, lambda: controller, idempotent_mkdir=idempotent_mkdir)
        return obj

    def _init(
        self,
        repository: str,
        factory: Callable[[], GoogleDriveController],
        *,
        idempotent_mkdir: bool,
    ) -> None:
        if not isinstance(repository, str):
            raise InvalidArgumentError("repository must be a string")
        self.repository = normalize_path(repository.strip()).lstrip("/")
        if not self.repository:
            raise InvalidArgumentError(
                "repository must name a folder below the Drive root",
                details={"repository": repository},
            )

        self.idempotent_mkdir = idempotent_mkdir
        self._controller_factory = factory
        self._controller: Optional[GoogleDriveController] = None
        self._resolver = EntryResolver(self.get_client)

    # ----------------------------
    # Client lifecycle
    # ----------------------------
    def get_client(self) -> GoogleDriveController:
        """
        Return the Drive controller, creating it on first call.

        Side effect: the first call runs ensure_root(), which may create the
        repository folder in Drive.
        """
        if self._controller is not None:
            return self._controller

        self._controller = self._controller_factory()
        try:
            self.ensure_root()
        except Exception:
            self._controller = None
            raise
        return self._controller

    def reset_client(self) -> None:
        """Drop the controller; the next get_client() provisions the root again."""
        self._controller = None

    def ensure_root(self) -> None:
        """Create the repository folder (and its ancestors) when missing."""
        self.get_directory("/").mkdir(force=True, recursive=True)
        logger.info("Repository root /%s is ready", self.repository)

    # ----------------------------
    # Paths and resolution
    # ----------------------------
    def full_path(self, path: str) -> str:
        """Map a virtual path to its remote path below the repository folder."""
        return join_paths(self.repository, normalize_path(path))

    def virtual_path(self, full_path: str) -> str:
        """Inverse of full_path."""
        full_path = normalize_path(full_path)
        prefix = "/" + self.repository
        if full_path == prefix:
            return "/"
        if full_path.startswith(prefix + "/"):
            return full_path[len(prefix):]
        raise InvalidArgumentError(
            "Path is outside the repository",
            details={"path": full_path, "repository": self.repository},
        )

    def resolve_full(self, full_path: str) -> Optional[EntryInfo]:
        return self._resolver.resolve(full_path)

    def resolve(self, path: str) -> Optional[EntryInfo]:
        return self._resolver.resolve(self.full_path(path))

    def resolve_required(self, path: str) -> EntryInfo:
        info = self.resolve(path)
        if info is None:
            raise NotFoundError(
                f"No such entry: {path}",
                details={"path": path, "repository": self.repository},
            )
        return info

    def try_resolve(self, path: str, *, write: bool = False) -> Resolution:
        """
        Resolve path without raising.

        A miss and a translated 404 both yield `not_found`; every other
        failure yields `error` carrying the translated domain error.
        """
        try:
            info = self.resolve(path)
        except Exception as exc:
            error = self.translate_error(path, exc, write=write)
            if isinstance(error, NotFoundError):
                return Resolution.not_found()
            return Resolution.failed(error)
        if info is None:
            return Resolution.not_found()
        return Resolution.found(info)

    # ----------------------------
    # Errors
    # ----------------------------
    def translate_error(self, path: str, exc: BaseException, *, write: bool) -> DomainError:
        return translate_error(exc, write=write, path=path, repository=self.repository)

    @contextmanager
    def translating(self, path: str, *, write: bool) -> Iterator[None]:
        """Re-raise any failure inside the block as a domain error."""
        try:
            yield
        except DomainError:
            raise
        except Exception as exc:
            raise self.translate_error(path, exc, write=write) from exc

    # ----------------------------
    # Metadata
    # ----------------------------
    def stat(self, path: str) -> Stats:
        with self.translating(path, write=False):
            info = self.resolve_required(path)
            if not info.is_active:
                raise NotFoundError(
                    f"No such entry: {path}",
                    details={"path": path, "item_status": info.item_status},
                )
            return _entry_to_stats(info)

    def patch(self, path: str, props: Mapping[str, Any]) -> None:
        """
        Update entry metadata.

        `created` / `modified` (epoch milliseconds or aware datetimes) are
        sent as Drive `createdTime` / `modifiedTime`; other keys are passed
        through as Drive file fields.
        """
        with self.translating(path, write=True):
            body = dict(props)
            body.pop("fields", None)
            for prop, field_name in _TIMESTAMP_PROPS.items():
                value = body.pop(prop, None)
                if value is not None:
                    body[field_name] = from_timestamp(value)

            info = self.resolve_required(path)
            self.get_client().update(info.id, body)
            logger.debug("Patched %s (%s): %s", path, info.type, sorted(body))

    def to_url(self, path: str, *, url_type: str = "GET") -> str:
        """Return a direct download URL. Only "GET" URLs are supported."""
        if url_type != "GET":
            raise NotReadableError(
                f'"{url_type}" is not supported',
                details={"path": path, "repository": self.repository},
            )
        with self.translating(path, write=False):
            info = self.resolve_required(path)
            if not info.web_content_link:
                raise NotReadableError(
                    f"No download URL for {path}",
                    details={"path": path, "type": info.type},
                )
            return info.web_content_link

    # ----------------------------
    # Entries
    # ----------------------------
    def get_file(self, path: str) -> DriveFile:
        return DriveFile(self, path)

    def get_directory(self, path: str) -> DriveDirectory:
        return DriveDirectory(self, path)

    def supports_directory(self) -> bool:
        return True

    def capabilities(self) -> Capabilities:
        return Capabilities(range_read=True, append=False, range_write=False)

    # Shortcuts
    def read(self, path: str, *, start: Optional[int] = None, end: Optional[int] = None) -> bytes:
        return self.get_file(path).read(start=start, end=end)

    def write(self, path: str, data: Any, *, append: bool = False) -> EntryInfo:
        return self.get_file(path).write(data, append=append)

    def rm(self, path: str) -> None:
        self.get_file(path).delete()

    def ls(self, path: str = "/") -> list[Item]:
        return self.get_directory(path).list()

    def mkdir(self, path: str, *, force: Optional[bool] = None, recursive: bool = False) -> EntryInfo:
        return self.get_directory(path).mkdir(force=force, recursive=recursive)

    def rmdir(self, path: str) -> None:
        self.get_directory(path).rmdir()


def _entry_to_stats(info: EntryInfo) -> Stats:
    folder = info.is_folder
    return Stats(
        type=EntryType.DIRECTORY if folder else EntryType.FILE,
        id=info.id,
        name=info.name,
        item_status=info.item_status,
        etag=info.etag,
        size=None if folder else info.size,
        created=to_epoch_millis(info.created_at),
        modified=to_epoch_millis(info.modified_at),
    )
