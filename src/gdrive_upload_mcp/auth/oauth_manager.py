"""OAuth credential handling for the Drive upload server.

The server never stores tokens. It holds one google-auth Credentials object
built from the configured refresh token and lets google-auth exchange it for
access tokens on demand. The consent flow used to obtain that refresh token
in the first place lives here too and is driven by the ``authorize`` CLI
command.
"""

import asyncio
import logging

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from gdrive_upload_mcp.config import DriveConfig

logger = logging.getLogger(__name__)

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"  # nosec B105 - public endpoint
GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"

# Files created or opened by the app only
DRIVE_UPLOAD_SCOPES = ["https://www.googleapis.com/auth/drive.file"]


class OAuthManager:
    """Owns the long-lived Google credential for the server process.

    Construction performs no network I/O. A bad refresh token only surfaces
    on the first call to :meth:`get_access_token`.

    Attributes:
        credentials: google-auth Credentials bound to the refresh token.

    Example:
        ```python
        manager = OAuthManager(load_config())
        token = await manager.get_access_token()
        ```
    """

    def __init__(self, config: DriveConfig) -> None:
        """Initialize OAuth manager.

        Args:
            config: Client ID, secret and refresh token.
        """
        # No scopes: the refresh request must not narrow or widen the grant
        self.credentials = Credentials(  # nosec B106 - token_uri is public Google OAuth endpoint
            token=None,
            refresh_token=config.refresh_token,
            token_uri=GOOGLE_TOKEN_URI,
            client_id=config.client_id,
            client_secret=config.client_secret,
        )

    async def get_access_token(self) -> str:
        """Get a valid access token, refreshing if necessary.

        Returns:
            Bearer access token.

        Raises:
            google.auth.exceptions.RefreshError: If the refresh token is rejected.
        """
        if not self.credentials.valid:
            logger.info("Access token missing or expired, refreshing...")
            # Run refresh in executor (blocking)
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, self.credentials.refresh, Request())
        return self.credentials.token


def authorize(
    client_id: str,
    client_secret: str,
    scopes: list[str] | None = None,
    port: int = 0,
) -> Credentials:
    """Run the installed-app consent flow and return the granted credentials.

    Opens a browser for consent and listens on a local port for the redirect.
    ``access_type=offline`` and ``prompt=consent`` make Google issue a refresh
    token even if the user approved this client before.

    Args:
        client_id: Google OAuth client ID.
        client_secret: Google OAuth client secret.
        scopes: OAuth scopes to request. Defaults to DRIVE_UPLOAD_SCOPES.
        port: Local callback port; 0 picks a free one.

    Returns:
        Google OAuth2 credentials including ``refresh_token``.

    Raises:
        ValueError: If client ID/secret not provided.
    """
    if not client_id or not client_secret:
        raise ValueError("Client ID and secret required.")

    client_config = {
        "installed": {
            "client_id": client_id,
            "client_secret": client_secret,
            "auth_uri": GOOGLE_AUTH_URI,
            "token_uri": GOOGLE_TOKEN_URI,
            "redirect_uris": ["http://localhost"],
        }
    }
    flow = InstalledAppFlow.from_client_config(
        client_config, scopes=scopes or DRIVE_UPLOAD_SCOPES
    )
    return flow.run_local_server(port=port, access_type="offline", prompt="consent")
