"""Environment configuration for the Drive upload server.

All three values are secrets obtained ahead of time (see the ``authorize``
CLI command); none of them have defaults.

Environment Variables:
    GOOGLE_CLIENT_ID: Google OAuth client ID (required)
    GOOGLE_CLIENT_SECRET: Google OAuth client secret (required)
    GOOGLE_REFRESH_TOKEN: Long-lived refresh token from user consent (required)
"""

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field

CLIENT_ID_ENV = "GOOGLE_CLIENT_ID"
CLIENT_SECRET_ENV = "GOOGLE_CLIENT_SECRET"  # nosec B105 - variable name, not a secret
REFRESH_TOKEN_ENV = "GOOGLE_REFRESH_TOKEN"  # nosec B105 - variable name, not a secret

REQUIRED_ENV_VARS = (CLIENT_ID_ENV, CLIENT_SECRET_ENV, REFRESH_TOKEN_ENV)


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing at startup."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(
            "Missing required Google OAuth environment variables "
            f"({', '.join(missing)})"
        )


class DriveConfig(BaseModel):
    """OAuth client and refresh token used to talk to Google Drive.

    Attributes:
        client_id: OAuth client identifier.
        client_secret: OAuth client secret.
        refresh_token: Refresh token exchanged for short-lived access tokens.
    """

    client_id: str = Field(..., min_length=1, description="OAuth client ID")
    client_secret: str = Field(..., min_length=1, description="OAuth client secret")
    refresh_token: str = Field(..., min_length=1, description="OAuth refresh token")

    model_config = {"frozen": True}


def load_config(environ: Mapping[str, str] | None = None) -> DriveConfig:
    """Read the required OAuth secrets from the environment.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        Populated DriveConfig.

    Raises:
        ConfigurationError: If any variable is unset, empty or whitespace only.
    """
    if environ is None:
        environ = os.environ

    values = {name: (environ.get(name) or "").strip() for name in REQUIRED_ENV_VARS}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ConfigurationError(missing)

    return DriveConfig(
        client_id=values[CLIENT_ID_ENV],
        client_secret=values[CLIENT_SECRET_ENV],
        refresh_token=values[REFRESH_TOKEN_ENV],
    )
