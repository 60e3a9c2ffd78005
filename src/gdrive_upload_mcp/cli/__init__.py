"""Command-line interface for gdrive-upload-mcp."""
