from __future__ import annotations

FOLDER_MIME: str = "application/vnd.google-apps.folder"
DEFAULT_UPLOAD_MIME: str = "application/octet-stream"


def is_folder(mime_type: str) -> bool:
    return mime_type == FOLDER_MIME


def is_google_app(mime_type: str) -> bool:
    """Returns True if the MIME type is a Google 'apps' type (Docs, Sheets, ...)."""
    return mime_type.startswith("application/vnd.google-apps.")


def is_download_disallowed(mime_type: str) -> bool:
    """
    Folders and Google-apps documents have no binary content to download;
    export handling is out of scope.
    """
    return is_folder(mime_type) or is_google_app(mime_type)
