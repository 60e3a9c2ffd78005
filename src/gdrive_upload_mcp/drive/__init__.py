"""Google Drive API access."""

from gdrive_upload_mcp.drive.client import DriveApiError, DriveClient

__all__ = ["DriveClient", "DriveApiError"]
