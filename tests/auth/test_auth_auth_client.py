import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import Mock, patch

from gdrivefs.auth import AuthInfo, DriveAuthClient
from gdrivefs.errors import AuthError, InvalidArgumentError

SCOPES = ["https://www.googleapis.com/auth/drive"]


class TestDriveAuthClient(unittest.TestCase):
    def test_get_credentials_loads_token_file_without_refresh(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            token_file = tmp_path / "token.json"

            token_payload = {
                "token": "fake-token",
                "refresh_token": "fake-refresh-token",
                "token_uri": "https://oauth2.googleapis.com/token",
                "client_id": "fake-client-id",
                "client_secret": "fake-client-secret",
                "scopes": SCOPES,
                "type": "authorized_user",
            }
            token_file.write_text(json.dumps(token_payload), encoding="utf-8")

            info = AuthInfo.oauth(str(tmp_path / "client_secrets.json"), str(token_file))
            client = DriveAuthClient(info)
            creds = client.get_credentials(scopes=SCOPES, ensure_valid=False)

            self.assertEqual(creds.refresh_token, "fake-refresh-token")

    def test_broken_token_file_is_auth_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            token_file = Path(tmp) / "token.json"
            token_file.write_text("not json", encoding="utf-8")

            client = DriveAuthClient(AuthInfo.oauth(str(Path(tmp) / "cs.json"), str(token_file)))
            with self.assertRaises(AuthError):
                client.get_credentials(scopes=SCOPES)

    def test_service_account_credentials_with_subject(self) -> None:
        creds = Mock()
        delegated = Mock()
        creds.with_subject.return_value = delegated

        info = AuthInfo.service_account("/keys/sa.json", subject="admin@example.com")
        with patch(
            "google.oauth2.service_account.Credentials.from_service_account_file",
            return_value=creds,
        ) as from_file:
            result = DriveAuthClient(info).get_credentials(scopes=SCOPES)

        from_file.assert_called_once_with("/keys/sa.json", scopes=SCOPES)
        creds.with_subject.assert_called_once_with("admin@example.com")
        self.assertIs(result, delegated)

    def test_missing_service_account_file_is_auth_error(self) -> None:
        info = AuthInfo.service_account("/definitely/not/here.json")
        with self.assertRaises(AuthError) as ctx:
            DriveAuthClient(info).get_credentials(scopes=SCOPES)
        self.assertEqual(ctx.exception.details["service_account_file"], "/definitely/not/here.json")

    def test_invalid_scopes(self) -> None:
        client = DriveAuthClient(AuthInfo.service_account("/keys/sa.json"))
        with self.assertRaises(InvalidArgumentError):
            client.get_credentials(scopes=[])
        with self.assertRaises(InvalidArgumentError):
            client.get_credentials(scopes=[" "])

    def test_requires_auth_info(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            DriveAuthClient({"kind": "oauth"})  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
