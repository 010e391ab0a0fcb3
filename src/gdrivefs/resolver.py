"""Path to remote entry resolution."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Callable, Optional

from gdrivefs.models import EntryInfo, ParentRef
from gdrivefs.util.paths import child_path, get_parent_path, normalize_path

if TYPE_CHECKING:
    from gdrivefs.controller import GoogleDriveController

logger = logging.getLogger(__name__)

ROOT_FOLDER_ID: str = "root"

ROOT_ENTRY = EntryInfo(type="folder", id=ROOT_FOLDER_ID, name="", item_status="active")


class EntryResolver:
    """
    Walk a full remote path from the Drive root, one folder listing per
    segment.

    Nothing is cached: resolving a path of depth D costs D list calls and
    always reflects the current remote state.
    """

    def __init__(self, get_controller: Callable[[], "GoogleDriveController"]) -> None:
        self._get_controller = get_controller

    def resolve(self, full_path: str) -> Optional[EntryInfo]:
        """Return the entry at full_path, or None when it does not exist."""
        full_path = normalize_path(full_path)
        if full_path == "/":
            return ROOT_ENTRY

        parent_path = get_parent_path(full_path)
        parent = self.resolve(parent_path)
        if parent is None or not parent.is_folder:
            return None

        controller = self._get_controller()
        for entry in controller.list_children(parent.id):
            if child_path(parent_path, entry.name) == full_path:
                return replace(entry, parent=ParentRef(id=parent.id, name=parent.name))

        logger.debug("No entry at %s", full_path)
        return None
