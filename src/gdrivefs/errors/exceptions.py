"""Exception hierarchy and error translation for gdrivefs."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional


class GDriveFsError(Exception):
    """
    Base exception for gdrivefs.

    Attributes:
        details: Optional structured information (e.g., HTTP status, path).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class AuthError(GDriveFsError):
    """Raised when credentials cannot be loaded, refreshed or authorized."""


class InvalidArgumentError(GDriveFsError):
    """Raised when arguments given to the library are invalid."""


class ApiError(GDriveFsError):
    """Raised for raw Drive API / transport failures (status in details)."""


class DomainError(GDriveFsError):
    """Base of the error kinds exposed across the filesystem boundary."""


class NotFoundError(DomainError):
    """Raised when the remote entry does not exist (or is not active)."""


class NotReadableError(DomainError):
    """Raised when a read-class operation fails for any reason but absence."""


class NotWritableError(DomainError):
    """Raised when a write-class operation fails for any reason but absence."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information extracted from a transport error."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


def status_code_of(exc: BaseException) -> Optional[int]:
    """
    Return the transport status code carried by exc, if any.

    Looks at ApiError details, googleapiclient HttpError responses and any
    plain `status_code` attribute, in that order.
    """
    if isinstance(exc, GDriveFsError):
        code = exc.details.get("status_code")
        return code if isinstance(code, int) and code > 0 else None

    status = getattr(getattr(exc, "resp", None), "status", None)
    if isinstance(status, int):
        return status
    if isinstance(status, str) and status.isdigit():
        return int(status)

    code = getattr(exc, "status_code", None)
    return code if isinstance(code, int) else None


def translate_error(
    exc: BaseException,
    *,
    write: bool,
    path: Optional[str] = None,
    repository: Optional[str] = None,
) -> DomainError:
    """
    Translate any error into one of the domain error kinds.

    Policy:
        - NotFoundError / NotReadableError / NotWritableError -> unchanged
        - status 404 -> NotFoundError
        - anything else during a write -> NotWritableError
        - anything else during a read -> NotReadableError
    """
    if isinstance(exc, DomainError):
        return exc

    code = status_code_of(exc)
    details: dict[str, Any] = {"path": path, "repository": repository}
    if code is not None:
        details["status_code"] = code

    message = str(exc) or exc.__class__.__name__
    if code == 404:
        return NotFoundError(message, details=details, cause=exc)
    if write:
        return NotWritableError(message, details=details, cause=exc)
    return NotReadableError(message, details=details, cause=exc)


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            payload = None
        err = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                details["reason_detail"] = errors[0].get("reason")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if isinstance(status_code, str) and status_code.isdigit():
        status_code = int(status_code)
    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )


def api_error_from_http(info: HttpErrorInfo, *, cause: Optional[BaseException] = None) -> ApiError:
    """Wrap extracted HTTP error information into an ApiError."""
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)
    message = info.message or f"HTTP error {info.status_code}"
    return ApiError(message, details=details, cause=cause)
