"""Google Drive upload MCP server for Claude Desktop integration.

This MCP server provides a single ``upload_file`` tool that streams a local
file into Google Drive using a pre-provisioned OAuth refresh token.

Access tokens are refreshed automatically by google-auth whenever the
cached one is missing or expired.
"""

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from mcp.types import METHOD_NOT_FOUND, ErrorData, TextContent, Tool
from pydantic import BaseModel

from gdrive_upload_mcp.__version__ import __version__
from gdrive_upload_mcp.auth import OAuthManager
from gdrive_upload_mcp.config import ConfigurationError, DriveConfig, load_config
from gdrive_upload_mcp.drive import DriveClient
from gdrive_upload_mcp.server.tools import (
    UPLOAD_FILE_TOOL_NAME,
    UploadFileRequest,
    list_tools,
    parse_arguments,
)
from gdrive_upload_mcp.server.upload import UploadHandler

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SERVER_NAME = "gdrive-upload-mcp"

ToolHandler = Callable[[Any], Awaitable[list[TextContent]]]


class DriveUploadServer:
    """MCP server for uploading files to Google Drive.

    The Drive client is injected so tests can substitute a fake; nothing
    else is shared between requests.

    Attributes:
        server: MCP Server instance.
        drive: DriveClient used by every upload.
    """

    def __init__(self, drive: DriveClient) -> None:
        """Initialize the server.

        Args:
            drive: Authenticated Drive client, owned by this server from now on.
        """
        self.server = Server(SERVER_NAME, version=__version__)
        self.drive = drive
        self._upload = UploadHandler(drive)
        self._tools: dict[str, tuple[type[BaseModel], ToolHandler]] = {
            UPLOAD_FILE_TOOL_NAME: (UploadFileRequest, self._upload.upload),
        }
        self._setup_handlers()

    @classmethod
    def from_config(cls, config: DriveConfig) -> "DriveUploadServer":
        """Build the server and its Drive client from configuration."""
        return cls(DriveClient(OAuthManager(config)))

    async def close(self) -> None:
        """Release the Drive client's HTTP resources."""
        await self.drive.aclose()

    def _setup_handlers(self) -> None:
        """Register MCP request handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> list[Tool]:
            """Return list of available tools."""
            return list_tools()

        # Registered directly so McpError reaches the session and is sent as
        # a JSON-RPC error instead of being folded into an isError result.
        self.server.request_handlers[types.CallToolRequest] = self._handle_call_tool

    async def _handle_call_tool(self, request: types.CallToolRequest) -> types.ServerResult:
        """Handle a tools/call request."""
        content = await self.call_tool(request.params.name, request.params.arguments)
        return types.ServerResult(types.CallToolResult(content=content, isError=False))

    async def call_tool(
        self, name: str, arguments: dict[str, Any] | None
    ) -> list[TextContent]:
        """Dispatch tool call to the registered handler.

        Args:
            name: Tool name.
            arguments: Raw tool arguments.

        Returns:
            Handler result content.

        Raises:
            McpError: METHOD_NOT_FOUND for unknown tools, or whatever the
                handler raises.
        """
        entry = self._tools.get(name)
        if entry is None:
            raise McpError(ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}"))

        model, handler = entry
        request = parse_arguments(model, arguments)
        return await handler(request)

    async def run(self) -> None:
        """Run the MCP server using stdio transport."""
        try:
            async with stdio_server() as (read_stream, write_stream):
                logger.info("Google Drive upload MCP server running on stdio")
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                )
        finally:
            await self.close()


def main(config: DriveConfig | None = None) -> None:
    """Entry point for the Google Drive upload MCP server.

    Configuration is loaded before the transport opens; a missing variable
    stops the process with exit status 1. Any error escaping the server loop
    is logged and also ends the process with status 1.
    """
    if config is None:
        try:
            config = load_config()
        except ConfigurationError as e:
            logger.error(str(e))
            sys.exit(1)

    server = DriveUploadServer.from_config(config)
    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        logger.info("Server stopped.")
    except Exception:
        logger.exception("Google Drive upload MCP server failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
