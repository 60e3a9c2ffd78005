"""The ``upload_file`` tool handler."""

import logging

import anyio
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_REQUEST, ErrorData, TextContent

from gdrive_upload_mcp.drive import DriveApiError, DriveClient
from gdrive_upload_mcp.server.tools import UploadFileRequest

logger = logging.getLogger(__name__)

UPLOAD_FIELDS = "id, name, webViewLink"


class UploadHandler:
    """Uploads one local file per call through a shared DriveClient.

    Attributes:
        drive: Authenticated Drive client, shared read-only across calls.
    """

    def __init__(self, drive: DriveClient) -> None:
        self.drive = drive

    async def upload(self, request: UploadFileRequest) -> list[TextContent]:
        """Upload ``request.file_path`` and describe the result.

        The local file is checked before any network call. Nothing is retried.

        Args:
            request: Validated tool arguments.

        Returns:
            A single text item with the view link, or a notice that the file
            was uploaded but no link came back.

        Raises:
            McpError: INVALID_REQUEST if the file cannot be read,
                INTERNAL_ERROR if the Drive call fails.
        """
        file_path = request.file_path
        file_name = request.effective_name
        logger.info(f"Attempting to upload file: {file_path} as {file_name}")

        try:
            async with await anyio.open_file(file_path, "rb"):
                pass
        except OSError as e:
            logger.error(f"Error accessing file {file_path}: {e}")
            raise McpError(
                ErrorData(
                    code=INVALID_REQUEST,
                    message=f"Cannot read local file: {file_path}. Error: {e}",
                )
            ) from e

        try:
            result = await self.drive.create_file(
                request.to_metadata(),
                file_path,
                mime_type=request.mime_type or None,
                fields=UPLOAD_FIELDS,
            )
        except Exception as e:
            logger.exception("Google Drive API Error during upload")
            raise McpError(
                ErrorData(
                    code=INTERNAL_ERROR,
                    message=f"Google Drive API Error: {_describe_error(e)}",
                )
            ) from e

        file_id = result.get("id")
        name = result.get("name")
        view_link = result.get("webViewLink")
        logger.info(f"File uploaded successfully. ID: {file_id}, Name: {name}")

        if not view_link:
            logger.warning(f"File uploaded (ID: {file_id}) but no webViewLink was returned.")
            return [
                TextContent(
                    type="text",
                    text=(
                        f"File '{name}' uploaded successfully to Google Drive "
                        f"(ID: {file_id}), but a direct view link could not be "
                        "generated. You may need to adjust sharing settings."
                    ),
                )
            ]

        return [TextContent(type="text", text=f"File uploaded successfully: {view_link}")]


def _describe_error(error: Exception) -> str:
    """Most specific message available for a failed Drive call."""
    if isinstance(error, DriveApiError) and error.message:
        return error.message
    return str(error) or "Unknown error during file upload."
