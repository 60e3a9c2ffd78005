"""Google Drive Upload MCP Server.

Expose a single ``upload_file`` tool to MCP clients that streams a local
file into Google Drive and returns its web view link.
"""

from gdrive_upload_mcp.__version__ import __version__

__all__ = ["__version__"]
