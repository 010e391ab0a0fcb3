from __future__ import annotations

from collections.abc import Iterable
from typing import Any


def to_bytes(data: Any) -> bytes:
    """
    Materialize a write payload into bytes.

    Accepts bytes-like objects, str (UTF-8), binary file-like objects with
    read(), and iterables of bytes-like chunks.
    """
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, str):
        return data.encode("utf-8")

    read = getattr(data, "read", None)
    if callable(read):
        content = read()
        if isinstance(content, str):
            return content.encode("utf-8")
        return bytes(content)

    if isinstance(data, Iterable):
        return merge(data)

    raise TypeError(f"Unsupported data type: {type(data).__name__}")


def merge(chunks: Iterable[Any]) -> bytes:
    """Concatenate chunks (each converted with to_bytes) into one buffer."""
    return b"".join(to_bytes(chunk) for chunk in chunks)
