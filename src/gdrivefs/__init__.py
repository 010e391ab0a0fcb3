"""gdrivefs public API."""

from __future__ import annotations

from gdrivefs.auth import AuthInfo, DriveAuthClient
from gdrivefs.errors import (
    ApiError,
    AuthError,
    DomainError,
    GDriveFsError,
    HttpErrorInfo,
    InvalidArgumentError,
    NotFoundError,
    NotReadableError,
    NotWritableError,
    translate_error,
)
from gdrivefs.filesystem import GoogleDriveFileSystem
from gdrivefs.directory import DriveDirectory
from gdrivefs.file import DriveFile
from gdrivefs.models import (
    Capabilities,
    EntryInfo,
    EntryType,
    Item,
    ParentRef,
    Resolution,
    Stats,
)

__all__ = [
    # High-level
    "GoogleDriveFileSystem",
    "DriveFile",
    "DriveDirectory",
    # Auth
    "AuthInfo",
    "DriveAuthClient",
    # Models
    "EntryInfo",
    "ParentRef",
    "EntryType",
    "Item",
    "Stats",
    "Capabilities",
    "Resolution",
    # Errors
    "GDriveFsError",
    "AuthError",
    "InvalidArgumentError",
    "ApiError",
    "DomainError",
    "NotFoundError",
    "NotReadableError",
    "NotWritableError",
    "HttpErrorInfo",
    "translate_error",
]
