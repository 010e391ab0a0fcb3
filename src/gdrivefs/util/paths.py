"""Forward-slash virtual path helpers."""

from __future__ import annotations

import posixpath


def normalize_path(path: str) -> str:
    """Return an absolute, slash-normalized path ("" and "." become "/")."""
    if not path or path in (".", "/"):
        return "/"
    return posixpath.normpath("/" + path.strip("/"))


def get_parent_path(path: str) -> str:
    return posixpath.dirname(normalize_path(path))


def get_name(path: str) -> str:
    return posixpath.basename(normalize_path(path))


def join_paths(*parts: str) -> str:
    """Join segments into one absolute path, ignoring empty segments."""
    segments = [p.strip("/") for p in parts if p and p.strip("/")]
    return normalize_path("/".join(segments))


def child_path(parent: str, name: str) -> str:
    """Path of `name` inside `parent`, without a double slash at the root."""
    parent = normalize_path(parent)
    return ("" if parent == "/" else parent) + "/" + name
