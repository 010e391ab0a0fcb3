"""Result model for path resolution attempts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from gdrivefs.errors import DomainError

from .entry_info import EntryInfo

ResolutionStatus = Literal["found", "not_found", "error"]


@dataclass(slots=True, frozen=True)
class Resolution:
    """
    Outcome of resolving one path.

    Exactly one of `info` (found) or `error` (error) is set; neither is set
    for not_found.
    """

    status: ResolutionStatus
    info: Optional[EntryInfo] = None
    error: Optional[DomainError] = None

    @classmethod
    def found(cls, info: EntryInfo) -> "Resolution":
        return cls(status="found", info=info)

    @classmethod
    def not_found(cls) -> "Resolution":
        return cls(status="not_found")

    @classmethod
    def failed(cls, error: DomainError) -> "Resolution":
        return cls(status="error", error=error)
