"""Unit tests for OAuthManager and the consent flow helper."""

from unittest.mock import MagicMock, patch

import pytest

from gdrive_upload_mcp.auth.oauth_manager import (
    DRIVE_UPLOAD_SCOPES,
    GOOGLE_TOKEN_URI,
    OAuthManager,
    authorize,
)
from gdrive_upload_mcp.config import DriveConfig


@pytest.mark.unit
class TestOAuthManagerInit:
    """Tests for OAuthManager initialization."""

    def test_should_build_credentials_from_config(self, drive_config: DriveConfig) -> None:
        """Verify the refresh token and client are bound to the credential."""
        manager = OAuthManager(drive_config)
        creds = manager.credentials

        assert creds.refresh_token == drive_config.refresh_token
        assert creds.client_id == drive_config.client_id
        assert creds.client_secret == drive_config.client_secret
        assert creds.token_uri == GOOGLE_TOKEN_URI

    def test_should_not_contact_google_on_construction(self, drive_config: DriveConfig) -> None:
        """Verify token exchange is deferred until first use."""
        with patch("gdrive_upload_mcp.auth.oauth_manager.Credentials.refresh") as mock_refresh:
            manager = OAuthManager(drive_config)

        mock_refresh.assert_not_called()
        assert manager.credentials.token is None
        assert manager.credentials.valid is False


@pytest.mark.unit
class TestOAuthManagerGetAccessToken:
    """Tests for OAuthManager.get_access_token()."""

    @pytest.mark.asyncio
    async def test_should_refresh_when_no_token(self, drive_config: DriveConfig) -> None:
        """Verify the first call exchanges the refresh token."""
        manager = OAuthManager(drive_config)
        fake_creds = MagicMock()
        fake_creds.valid = False
        fake_creds.token = "fresh_access_token"
        manager.credentials = fake_creds

        token = await manager.get_access_token()

        assert token == "fresh_access_token"
        fake_creds.refresh.assert_called_once()

    @pytest.mark.asyncio
    async def test_should_reuse_valid_token(self, drive_config: DriveConfig) -> None:
        """Verify no refresh happens while the token is valid."""
        manager = OAuthManager(drive_config)
        fake_creds = MagicMock()
        fake_creds.valid = True
        fake_creds.token = "cached_access_token"
        manager.credentials = fake_creds

        token = await manager.get_access_token()

        assert token == "cached_access_token"
        fake_creds.refresh.assert_not_called()

    @pytest.mark.asyncio
    async def test_should_propagate_refresh_failure(self, drive_config: DriveConfig) -> None:
        """Verify a rejected refresh token surfaces to the caller."""
        from google.auth.exceptions import RefreshError

        manager = OAuthManager(drive_config)
        fake_creds = MagicMock()
        fake_creds.valid = False
        fake_creds.refresh.side_effect = RefreshError("invalid_grant: Bad Request")
        manager.credentials = fake_creds

        with pytest.raises(RefreshError, match="invalid_grant"):
            await manager.get_access_token()


@pytest.mark.unit
class TestAuthorize:
    """Tests for the consent flow helper."""

    def test_should_require_client_credentials(self) -> None:
        """Verify ValueError when client ID or secret is missing."""
        with pytest.raises(ValueError, match="Client ID and secret required"):
            authorize("", "secret")

    def test_should_request_offline_access(self) -> None:
        """Verify the flow asks for a refresh token with the upload scope."""
        with patch(
            "gdrive_upload_mcp.auth.oauth_manager.InstalledAppFlow"
        ) as mock_flow_class:
            mock_flow = MagicMock()
            mock_flow.run_local_server.return_value = MagicMock(refresh_token="new_refresh")
            mock_flow_class.from_client_config.return_value = mock_flow

            creds = authorize("client_id", "client_secret", port=8789)

        assert creds.refresh_token == "new_refresh"
        client_config = mock_flow_class.from_client_config.call_args.args[0]
        assert client_config["installed"]["client_id"] == "client_id"
        assert mock_flow_class.from_client_config.call_args.kwargs["scopes"] == (
            DRIVE_UPLOAD_SCOPES
        )
        mock_flow.run_local_server.assert_called_once_with(
            port=8789, access_type="offline", prompt="consent"
        )
