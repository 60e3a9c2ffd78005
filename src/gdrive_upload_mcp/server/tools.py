"""Tool definitions exposed by the Drive upload server."""

from pathlib import Path
from typing import Any, TypeVar

from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS, ErrorData, Tool
from pydantic import BaseModel, Field, StrictStr, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

UPLOAD_FILE_TOOL_NAME = "upload_file"
UPLOAD_FILE_DESCRIPTION = "Uploads a local file to Google Drive and returns its web view link."

UPLOAD_FILE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "file_path": {
            "type": "string",
            "description": "The absolute local path to the file to upload.",
        },
        "file_name": {
            "type": "string",
            "description": (
                "Optional: The desired name for the file in Google Drive. "
                "Defaults to the original filename."
            ),
        },
        "mime_type": {
            "type": "string",
            "description": (
                'Optional: The MIME type of the file (e.g., "image/png", "text/plain"). '
                "Will attempt to infer if not provided."
            ),
        },
        "folder_id": {
            "type": "string",
            "description": (
                "Optional: The ID of the Google Drive folder to upload the file into. "
                "If omitted, uploads to the root folder."
            ),
        },
    },
    "required": ["file_path"],
}


def list_tools() -> list[Tool]:
    """Return the tools this server provides."""
    return [
        Tool(
            name=UPLOAD_FILE_TOOL_NAME,
            description=UPLOAD_FILE_DESCRIPTION,
            inputSchema=UPLOAD_FILE_SCHEMA,
        ),
    ]


class UploadFileRequest(BaseModel):
    """Validated ``upload_file`` arguments.

    Empty strings in the optional fields mean "not provided".

    Attributes:
        file_path: Local file to upload.
        file_name: Name to give the Drive file.
        mime_type: Declared MIME type.
        folder_id: Parent folder ID; root when absent.
    """

    file_path: StrictStr = Field(..., min_length=1, description="Local file path")
    file_name: StrictStr | None = Field(default=None, description="Drive file name")
    mime_type: StrictStr | None = Field(default=None, description="MIME type")
    folder_id: StrictStr | None = Field(default=None, description="Parent folder ID")

    model_config = {"extra": "ignore", "frozen": True}

    @property
    def effective_name(self) -> str:
        """Drive name: ``file_name`` or the last segment of ``file_path``."""
        return self.file_name or Path(self.file_path).name

    def to_metadata(self) -> dict[str, Any]:
        """Build the Drive file resource for ``files.create``."""
        metadata: dict[str, Any] = {"name": self.effective_name}
        if self.folder_id:
            metadata["parents"] = [self.folder_id]
        return metadata


def parse_arguments(model: type[ModelT], arguments: dict[str, Any] | None) -> ModelT:
    """Validate raw tool arguments into a typed request.

    Raises:
        McpError: INVALID_PARAMS describing the first offending field.
    """
    try:
        return model.model_validate(arguments or {})
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        if field == "file_path":
            message = "file_path (string) is required."
        else:
            message = f"Invalid arguments: {field}: {error['msg']}"
        raise McpError(ErrorData(code=INVALID_PARAMS, message=message)) from e
