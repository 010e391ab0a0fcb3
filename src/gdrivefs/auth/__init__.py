"""Public auth exports for gdrivefs."""

from __future__ import annotations

from .auth_client import DriveAuthClient
from .auth_info import AuthInfo

__all__ = ["AuthInfo", "DriveAuthClient"]
