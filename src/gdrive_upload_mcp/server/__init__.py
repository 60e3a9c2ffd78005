"""MCP server implementation for Google Drive uploads.

Tools (1):
- upload_file: Upload a local file to Google Drive and return its web view link

Transport: Stdio (for Claude Desktop)
Authentication: OAuth 2.0 refresh token with automatic access token refresh
"""

from gdrive_upload_mcp.config import DriveConfig
from gdrive_upload_mcp.server.drive_upload_server import DriveUploadServer, main


def create_server(config: DriveConfig) -> DriveUploadServer:
    """Create and configure a Drive upload MCP server.

    Args:
        config: OAuth client and refresh token.

    Returns:
        DriveUploadServer: Configured server instance ready to run.

    Example:
        >>> server = create_server(load_config())
        >>> asyncio.run(server.run())
    """
    return DriveUploadServer.from_config(config)


__all__ = ["create_server", "DriveUploadServer", "main"]
