from .data import merge, to_bytes
from .mime import DEFAULT_UPLOAD_MIME, FOLDER_MIME, is_download_disallowed, is_folder, is_google_app
from .paths import child_path, get_name, get_parent_path, join_paths, normalize_path
from .time import from_timestamp, normalize_dt, parse_rfc3339, to_epoch_millis, to_rfc3339

__all__ = [
    "to_bytes",
    "merge",
    "FOLDER_MIME",
    "DEFAULT_UPLOAD_MIME",
    "is_folder",
    "is_google_app",
    "is_download_disallowed",
    "normalize_path",
    "get_parent_path",
    "get_name",
    "join_paths",
    "child_path",
    "parse_rfc3339",
    "to_rfc3339",
    "normalize_dt",
    "to_epoch_millis",
    "from_timestamp",
]
