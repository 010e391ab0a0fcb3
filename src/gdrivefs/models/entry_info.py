"""Data model for remote Drive entries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

EntryKind = Literal["file", "folder"]
ItemStatus = Literal["active", "trashed", "deleted"]


@dataclass(slots=True, frozen=True)
class ParentRef:
    """Back-reference to the containing folder (not an ownership edge)."""

    id: str
    name: str = ""


@dataclass(slots=True, frozen=True)
class EntryInfo:
    """
    A remote entry as returned by one resolution call.

    Notes:
        - Built fresh on every resolution and never cached; re-resolve before
          mutating, since concurrent changes may invalidate `id`.
        - `etag` carries the Drive `version` field as an opaque string.
        - `size` is only set for files.
    """

    type: EntryKind
    id: str
    name: str
    item_status: ItemStatus = "active"

    etag: Optional[str] = None
    size: Optional[int] = None
    created_at: Optional[str] = None
    modified_at: Optional[str] = None
    mime_type: Optional[str] = None
    web_content_link: Optional[str] = None
    parent: Optional[ParentRef] = None

    @property
    def is_active(self) -> bool:
        return self.item_status == "active"

    @property
    def is_folder(self) -> bool:
        return self.type == "folder"
