"""Command-line interface for gdrive-upload-mcp."""

import asyncio
import os
import sys

import click

from gdrive_upload_mcp.__version__ import __version__
from gdrive_upload_mcp.config import (
    CLIENT_ID_ENV,
    CLIENT_SECRET_ENV,
    REFRESH_TOKEN_ENV,
    REQUIRED_ENV_VARS,
    ConfigurationError,
    load_config,
)


def _mask(value: str) -> str:
    """Show only the last four characters of a secret."""
    if len(value) <= 4:
        return "****"
    return f"****{value[-4:]}"


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """Google Drive Upload MCP Server - Let Claude upload local files to Google Drive.

    Provides one tool:
    - upload_file (upload a local file, get its web view link)
    """
    pass


@main.command()
def mcp() -> None:
    """Start the MCP server for Claude Desktop integration.

    Requires GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET and GOOGLE_REFRESH_TOKEN.
    Run 'gdrive-upload-mcp authorize' to obtain a refresh token.

    This command is typically invoked by Claude Desktop via the MCP protocol.
    """
    from gdrive_upload_mcp.server import main as server_main

    try:
        config = load_config()
    except ConfigurationError as e:
        click.echo(f"❌ {e}", err=True)
        click.echo("Run 'gdrive-upload-mcp doctor' to check your setup.", err=True)
        sys.exit(1)

    click.echo("Starting Google Drive upload MCP server...", err=True)
    server_main(config)


@main.command()
@click.option("--client-id", envvar=CLIENT_ID_ENV, help="Google OAuth client ID")
@click.option("--client-secret", envvar=CLIENT_SECRET_ENV, help="Google OAuth client secret")
@click.option("--port", default=0, show_default=True, help="Local callback port (0 = any)")
def authorize(client_id: str | None, client_secret: str | None, port: int) -> None:
    """Obtain a refresh token through the Google consent screen.

    This will:
    1. Open browser for OAuth2 consent flow
    2. Print the refresh token to export as GOOGLE_REFRESH_TOKEN
    """
    from gdrive_upload_mcp.auth import authorize as run_consent_flow

    if not client_id or not client_secret:
        click.echo("❌ Error: OAuth client credentials required")
        click.echo("")
        click.echo("Set environment variables:")
        click.echo(f"  export {CLIENT_ID_ENV}='your-client-id'")
        click.echo(f"  export {CLIENT_SECRET_ENV}='your-client-secret'")
        click.echo("")
        click.echo("Or pass as options:")
        click.echo("  gdrive-upload-mcp authorize --client-id=... --client-secret=...")
        sys.exit(1)

    click.echo("Starting OAuth authentication flow...")
    click.echo("Browser will open for Google consent...")
    click.echo("")

    try:
        credentials = run_consent_flow(client_id, client_secret, port=port)
    except Exception as e:
        click.echo(f"❌ Authentication failed: {e}")
        sys.exit(1)

    if not credentials.refresh_token:
        click.echo("❌ Google did not return a refresh token.")
        click.echo("Revoke this app's access in your Google account and try again.")
        sys.exit(1)

    click.echo("✓ Authentication successful!")
    click.echo("")
    click.echo("Add this to the server environment:")
    click.echo(f"  export {REFRESH_TOKEN_ENV}='{credentials.refresh_token}'")


@main.command()
@click.option(
    "--check-token", is_flag=True, help="Exchange the refresh token once to verify it"
)
def doctor(check_token: bool) -> None:
    """Check configuration and, optionally, the refresh token.

    Verifies:
    1. Required environment variables are set
    2. The refresh token can be exchanged (with --check-token)
    """
    from gdrive_upload_mcp.auth import OAuthManager

    click.echo("Google Drive Upload MCP Status:")
    click.echo("")
    click.echo("Configuration:")
    for name in REQUIRED_ENV_VARS:
        value = (os.environ.get(name) or "").strip()
        if value:
            click.echo(f"  ✓ {name} = {_mask(value)}")
        else:
            click.echo(f"  ❌ {name} not set")
    click.echo("")

    try:
        config = load_config()
    except ConfigurationError as e:
        click.echo(f"❌ {e}")
        sys.exit(1)

    if check_token:
        click.echo("Authentication:")
        manager = OAuthManager(config)
        try:
            asyncio.run(manager.get_access_token())
        except Exception as e:
            click.echo(f"  ❌ Token refresh failed: {e}")
            sys.exit(1)
        click.echo("  ✓ Refresh token accepted")
        click.echo("")

    click.echo("✓ Ready to use!")


if __name__ == "__main__":
    main()
