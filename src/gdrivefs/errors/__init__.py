"""Public error exports for gdrivefs."""

from __future__ import annotations

from .exceptions import (
    ApiError,
    AuthError,
    DomainError,
    GDriveFsError,
    HttpErrorInfo,
    InvalidArgumentError,
    NotFoundError,
    NotReadableError,
    NotWritableError,
    api_error_from_http,
    status_code_of,
    translate_error,
)

__all__ = [
    "GDriveFsError",
    "AuthError",
    "InvalidArgumentError",
    "ApiError",
    "DomainError",
    "NotFoundError",
    "NotReadableError",
    "NotWritableError",
    "HttpErrorInfo",
    "api_error_from_http",
    "status_code_of",
    "translate_error",
]
