"""Generic filesystem shapes returned to callers."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .entry_info import ItemStatus


class EntryType(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(slots=True)
class Item:
    """One element of a directory listing. Timestamps are epoch milliseconds."""

    path: str
    type: EntryType
    size: Optional[int] = None
    created: Optional[int] = None
    modified: Optional[int] = None
    etag: Optional[str] = None

    @property
    def name(self) -> str:
        return posixpath.basename(self.path)


@dataclass(slots=True)
class Stats:
    """Metadata of a single entry (`size` is None for directories)."""

    type: EntryType
    id: str
    name: str
    item_status: ItemStatus = "active"
    etag: Optional[str] = None
    size: Optional[int] = None
    created: Optional[int] = None
    modified: Optional[int] = None


@dataclass(slots=True, frozen=True)
class Capabilities:
    """Optional features advertised by the filesystem."""

    range_read: bool = True
    append: bool = False
    range_write: bool = False
