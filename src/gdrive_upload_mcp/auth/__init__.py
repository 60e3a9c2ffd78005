"""OAuth authentication for the Drive upload MCP server.

Quick Start:
    ```python
    from gdrive_upload_mcp.auth import OAuthManager
    from gdrive_upload_mcp.config import load_config

    manager = OAuthManager(load_config())
    access_token = await manager.get_access_token()
    ```
"""

from gdrive_upload_mcp.auth.oauth_manager import (
    DRIVE_UPLOAD_SCOPES,
    GOOGLE_TOKEN_URI,
    OAuthManager,
    authorize,
)

__all__ = [
    "OAuthManager",
    "authorize",
    "DRIVE_UPLOAD_SCOPES",
    "GOOGLE_TOKEN_URI",
]
