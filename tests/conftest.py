"""Shared pytest fixtures for gdrive-upload-mcp tests.

This module provides reusable fixtures for configuration, OAuth
credentials and a fake Drive client.
"""

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from gdrive_upload_mcp.config import DriveConfig

# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def drive_config() -> DriveConfig:
    """Create a complete configuration."""
    return DriveConfig(
        client_id="test_client_id.apps.googleusercontent.com",
        client_secret="test_client_secret",  # pragma: allowlist secret
        refresh_token="test_refresh_token_xyz789",
    )


@pytest.fixture
def full_environ() -> dict[str, str]:
    """Environment mapping with all required variables set."""
    return {
        "GOOGLE_CLIENT_ID": "env_client_id",
        "GOOGLE_CLIENT_SECRET": "env_client_secret",  # pragma: allowlist secret
        "GOOGLE_REFRESH_TOKEN": "env_refresh_token",
    }


# =============================================================================
# OAuth Fixtures
# =============================================================================


@pytest.fixture
def mock_oauth_manager() -> MagicMock:
    """Create an OAuthManager stand-in that always has a token."""
    manager = MagicMock()
    manager.get_access_token = AsyncMock(return_value="mock_access_token_12345")
    return manager


# =============================================================================
# Drive Fixtures
# =============================================================================


DRIVE_FILE_RESPONSE: dict[str, Any] = {
    "id": "file_abc123",
    "name": "a.png",
    "webViewLink": "https://drive.google.com/file/d/file_abc123/view?usp=drivesdk",
}


@pytest.fixture
def mock_drive_client() -> MagicMock:
    """Create a fake DriveClient whose uploads succeed."""
    client = MagicMock()
    client.create_file = AsyncMock(return_value=dict(DRIVE_FILE_RESPONSE))
    client.aclose = AsyncMock()
    return client


# =============================================================================
# Local File Fixtures
# =============================================================================


@pytest.fixture
def local_file(tmp_path: Path) -> Path:
    """Create a small readable file to upload."""
    path = tmp_path / "a.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\n" + b"\x00" * 64)
    return path
