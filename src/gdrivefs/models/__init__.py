"""Public model exports for gdrivefs."""

from __future__ import annotations

from .entry_info import EntryInfo, EntryKind, ItemStatus, ParentRef
from .item import Capabilities, EntryType, Item, Stats
from .results import Resolution, ResolutionStatus

__all__ = [
    "EntryInfo",
    "EntryKind",
    "ItemStatus",
    "ParentRef",
    "EntryType",
    "Item",
    "Stats",
    "Capabilities",
    "Resolution",
    "ResolutionStatus",
]
