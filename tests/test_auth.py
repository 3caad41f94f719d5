"""Tests for OAuth credential loading."""

from unittest.mock import MagicMock, patch

import pytest
from google.auth.exceptions import RefreshError

from sports_sync.auth import google as google_auth
from sports_sync.config import Settings
from sports_sync.errors import ConfigurationError


@pytest.fixture
def auth_settings(tmp_path) -> Settings:
    return Settings(
        spreadsheet_id="s",
        calendar_id="c",
        google_client_secrets_file=str(tmp_path / "credentials.json"),
        google_token_file=str(tmp_path / "token.json"),
    )


def cached(credentials):
    return patch.object(google_auth, "_load_cached_token", return_value=credentials)


class TestLoadCredentials:
    """Tests for the token cache, refresh and consent flow."""

    def test_valid_cached_token(self, auth_settings):
        credentials = MagicMock(valid=True)
        with cached(credentials):
            assert google_auth.load_credentials(auth_settings) is credentials
        credentials.refresh.assert_not_called()

    def test_expired_token_refreshed_and_saved(self, auth_settings, tmp_path):
        credentials = MagicMock(valid=False, expired=True, refresh_token="r")
        credentials.to_json.return_value = '{"token": "new"}'
        with cached(credentials):
            assert google_auth.load_credentials(auth_settings) is credentials
        credentials.refresh.assert_called_once()
        assert (tmp_path / "token.json").read_text() == '{"token": "new"}'

    def test_missing_secrets_file(self, auth_settings):
        with cached(None), pytest.raises(ConfigurationError):
            google_auth.load_credentials(auth_settings)

    def test_failed_refresh_falls_back_to_consent(self, auth_settings, tmp_path):
        (tmp_path / "credentials.json").write_text("{}")
        stale = MagicMock(valid=False, expired=True, refresh_token="r")
        stale.refresh.side_effect = RefreshError("revoked")
        fresh = MagicMock()
        fresh.to_json.return_value = "{}"

        with cached(stale), patch.object(google_auth, "InstalledAppFlow") as flow_cls:
            flow_cls.from_client_secrets_file.return_value.run_local_server.return_value = fresh
            assert google_auth.load_credentials(auth_settings) is fresh

        flow_cls.from_client_secrets_file.assert_called_once_with(
            str(tmp_path / "credentials.json"), auth_settings.google_scopes
        )
        assert (tmp_path / "token.json").exists()

    def test_unreadable_token_ignored(self, tmp_path):
        token_file = tmp_path / "token.json"
        token_file.write_text("not json")
        with patch.object(
            google_auth.Credentials, "from_authorized_user_file", side_effect=ValueError("bad")
        ):
            assert google_auth._load_cached_token(token_file, []) is None
