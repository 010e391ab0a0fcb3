"""Google Drive API controller (internal use only)."""

from __future__ import annotations

import io
import logging
from typing import Any, Callable, Optional, Sequence, TypeVar

from gdrivefs.auth import AuthInfo, DriveAuthClient
from gdrivefs.errors import ApiError, GDriveFsError, api_error_from_http
from gdrivefs.errors.exceptions import _http_error_to_info
from gdrivefs.models import EntryInfo, ParentRef
from gdrivefs.util.mime import DEFAULT_UPLOAD_MIME, FOLDER_MIME, is_folder

from .fields import FILE_FIELDS, LIST_FIELDS

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Uploads above this size go through the resumable protocol.
_SIMPLE_UPLOAD_LIMIT = 5 * 1024 * 1024


class GoogleDriveController:
    """
    Drive API controller (internal only).

    Notes:
        - The Drive `service` object is NOT exposed.
        - `supports_all_drives` is applied to all requests consistently.
        - Failures surface as ApiError with `status_code` in details; no
          retries are performed.
    """

    DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
        keep_revision_forever: bool = False,
    ) -> None:
        self._supports_all_drives = supports_all_drives
        self._keep_revision_forever = keep_revision_forever

        use_scopes = list(scopes) if scopes is not None else list(self.DEFAULT_SCOPES)
        client = DriveAuthClient(auth_info)
        self._service = client.build_drive_service(use_scopes, ensure_valid=True)

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        supports_all_drives: bool = True,
        keep_revision_forever: bool = False,
    ) -> "GoogleDriveController":
        """Create controller from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._supports_all_drives = supports_all_drives
        obj._keep_revision_forever = keep_revision_forever
        obj._service = service
        return obj

    # ----------------------------
    # Public API
    # ----------------------------
    def list_children(
        self,
        folder_id: str,
        *,
        include_trashed: bool = False,
    ) -> list[EntryInfo]:
        """List the direct children of folder_id, following every page."""
        q = _build_parent_query(folder_id, include_trashed=include_trashed)
        entries: list[EntryInfo] = []
        page_token: Optional[str] = None

        while True:
            req = self._service.files().list(
                q=q,
                fields=LIST_FIELDS,
                pageToken=page_token,
                **self._common_list_kwargs(),
            )
            data = self._execute(req.execute)
            for f in data.get("files", []):
                entries.append(_file_dict_to_entry_info(f, parent_id=folder_id))

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        logger.debug("Listed %d children of %s", len(entries), folder_id)
        return entries

    def download(
        self,
        file_id: str,
        *,
        start: Optional[int] = None,
        end: Optional[int] = None,
    ) -> bytes:
        """
        Download file content. `start`/`end` select the byte range
        [start, end); a full download is streamed in chunks.
        """
        req = self._service.files().get_media(
            fileId=file_id,
            **self._common_get_kwargs(),
        )

        if start is not None or end is not None:
            first = start or 0
            last = "" if end is None else str(end - 1)
            req.headers["Range"] = f"bytes={first}-{last}"
            return self._execute(req.execute)

        try:
            from googleapiclient.http import MediaIoBaseDownload
        except ImportError as exc:  # pragma: no cover
            raise ApiError("google-api-python-client is not available", cause=exc) from exc

        buffer = io.BytesIO()
        downloader = MediaIoBaseDownload(fd=buffer, request=req)
        done = False
        while not done:
            _, done = self._execute(downloader.next_chunk)
        return buffer.getvalue()

    def upload_new_version(self, file_id: str, content: bytes) -> EntryInfo:
        """Replace the content of file_id, creating a new head revision."""
        kwargs = self._common_write_kwargs()
        if self._keep_revision_forever:
            kwargs["keepRevisionForever"] = True
        req = self._service.files().update(
            fileId=file_id,
            media_body=_media(content),
            fields=FILE_FIELDS,
            **kwargs,
        )
        data = self._execute(req.execute)
        return _file_dict_to_entry_info(data)

    def create_file(self, parent_id: str, name: str, content: bytes) -> EntryInfo:
        body = {"name": name, "parents": [parent_id]}
        req = self._service.files().create(
            body=body,
            media_body=_media(content),
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_entry_info(data, parent_id=parent_id)

    def create_folder(self, parent_id: str, name: str) -> EntryInfo:
        body = {"name": name, "mimeType": FOLDER_MIME, "parents": [parent_id]}
        req = self._service.files().create(
            body=body,
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_entry_info(data, parent_id=parent_id)

    def update(self, file_id: str, body: dict[str, Any]) -> EntryInfo:
        """Update metadata of a file or folder."""
        req = self._service.files().update(
            fileId=file_id,
            body=body,
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_entry_info(data)

    def delete(self, file_id: str) -> None:
        """Permanently delete file_id (folders are deleted with their content)."""
        req = self._service.files().delete(
            fileId=file_id,
            **self._common_write_kwargs(),
        )
        self._execute(req.execute)

    # ----------------------------
    # Internals
    # ----------------------------
    def _common_get_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _common_list_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True, "includeItemsFromAllDrives": True}

    def _common_write_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _execute(self, func: Callable[[], T]) -> T:
        try:
            return func()
        except Exception as exc:
            mapped = self._map_exception(exc)
            logger.debug("Drive API call failed: %s", mapped)
            raise mapped from exc

    def _map_exception(self, exc: Exception) -> Exception:
        if isinstance(exc, GDriveFsError):
            return exc

        try:
            from googleapiclient.errors import HttpError
        except ImportError:  # pragma: no cover
            HttpError = None  # type: ignore[assignment]

        if HttpError is not None and isinstance(exc, HttpError):
            return api_error_from_http(_http_error_to_info(exc), cause=exc)

        if isinstance(exc, (OSError, TimeoutError)):
            return ApiError("Network error", cause=exc)

        return ApiError("Drive API error", cause=exc)


def _media(content: bytes):
    try:
        from googleapiclient.http import MediaIoBaseUpload
    except ImportError as exc:  # pragma: no cover
        raise ApiError("google-api-python-client is not available", cause=exc) from exc

    return MediaIoBaseUpload(
        io.BytesIO(content),
        mimetype=DEFAULT_UPLOAD_MIME,
        resumable=len(content) > _SIMPLE_UPLOAD_LIMIT,
    )


def _build_parent_query(parent_id: str, *, include_trashed: bool) -> str:
    q = f"'{parent_id}' in parents"
    if not include_trashed:
        q = f"({q}) and trashed=false"
    return q


def _file_dict_to_entry_info(
    data: dict[str, Any],
    *,
    parent_id: Optional[str] = None,
) -> EntryInfo:
    file_id = data.get("id")
    name = data.get("name", "")
    mime_type = data.get("mimeType", "")
    mime_type = mime_type if isinstance(mime_type, str) else ""
    folder = is_folder(mime_type)

    size = None
    if not folder:
        if isinstance(data.get("size"), str) and data["size"].isdigit():
            size = int(data["size"])
        elif isinstance(data.get("size"), int):
            size = data["size"]

    version = data.get("version")
    etag = str(version) if isinstance(version, (str, int)) else None

    if parent_id is None:
        parents = data.get("parents") or []
        if isinstance(parents, list) and parents and isinstance(parents[0], str):
            parent_id = parents[0]

    created = data.get("createdTime")
    modified = data.get("modifiedTime")
    link = data.get("webContentLink")

    return EntryInfo(
        type="folder" if folder else "file",
        id=file_id if isinstance(file_id, str) else "",
        name=name if isinstance(name, str) else "",
        item_status="trashed" if data.get("trashed") else "active",
        etag=etag,
        size=size,
        created_at=created if isinstance(created, str) else None,
        modified_at=modified if isinstance(modified, str) else None,
        mime_type=mime_type or None,
        web_content_link=link if isinstance(link, str) else None,
        parent=ParentRef(id=parent_id) if parent_id else None,
    )
