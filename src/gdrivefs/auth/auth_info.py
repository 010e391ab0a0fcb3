"""Authentication information for gdrivefs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

_REQUIRED_KEYS: dict[str, tuple[str, ...]] = {
    "oauth": ("client_secrets_file", "token_file"),
    "service_account": ("service_account_file",),
}


@dataclass(slots=True, frozen=True)
class AuthInfo:
    """
    Authentication information.

    Two kinds are supported:
        kind = "oauth" (user credentials)
            data must include:
                - client_secrets_file
                - token_file
        kind = "service_account" (application credentials)
            data must include:
                - service_account_file
            data may include:
                - subject (user to impersonate with domain-wide delegation)
    """

    kind: str
    data: dict[str, Any]

    def __post_init__(self) -> None:
        if self.kind not in _REQUIRED_KEYS:
            raise ValueError("AuthInfo.kind must be 'oauth' or 'service_account'")

        if not isinstance(self.data, dict):
            raise TypeError("AuthInfo.data must be a dict")

        for key in _REQUIRED_KEYS[self.kind]:
            value = self.data.get(key)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"AuthInfo.data['{key}'] must be a non-empty string")

        subject = self.data.get("subject")
        if subject is not None and (not isinstance(subject, str) or not subject.strip()):
            raise ValueError("AuthInfo.data['subject'] must be a non-empty string")

    @classmethod
    def oauth(cls, client_secrets_file: str, token_file: str) -> "AuthInfo":
        return cls(
            kind="oauth",
            data={"client_secrets_file": client_secrets_file, "token_file": token_file},
        )

    @classmethod
    def service_account(
        cls,
        service_account_file: str,
        *,
        subject: Optional[str] = None,
    ) -> "AuthInfo":
        data: dict[str, Any] = {"service_account_file": service_account_file}
        if subject is not None:
            data["subject"] = subject
        return cls(kind="service_account", data=data)

    @property
    def is_service_account(self) -> bool:
        return self.kind == "service_account"

    @property
    def client_secrets_file(self) -> str:
        """Path to OAuth client secrets JSON."""
        return str(self.data["client_secrets_file"])

    @property
    def token_file(self) -> str:
        """Path to OAuth token JSON (authorized user)."""
        return str(self.data["token_file"])

    @property
    def service_account_file(self) -> str:
        """Path to the service account key JSON."""
        return str(self.data["service_account_file"])

    @property
    def subject(self) -> Optional[str]:
        value = self.data.get("subject")
        return str(value) if value else None
