"""Minimal Google Drive v3 client for multipart uploads.

Only ``files.create`` with media is implemented. Requests are authorized with
the bearer token from :class:`OAuthManager` and sent over a shared
``httpx.AsyncClient``; the file body is streamed from disk, never loaded
into memory whole.
"""

import json
import logging
import secrets
from collections.abc import AsyncIterator
from typing import Any

import anyio
import httpx

from gdrive_upload_mcp.auth import OAuthManager

logger = logging.getLogger(__name__)

DRIVE_UPLOAD_URL = "https://www.googleapis.com/upload/drive/v3/files"
DEFAULT_MEDIA_TYPE = "application/octet-stream"
CHUNK_SIZE = 256 * 1024
UPLOAD_TIMEOUT = 300.0


class DriveApiError(RuntimeError):
    """Raised when Drive answers an upload with an error status.

    Attributes:
        message: Most specific error text found in the response.
        status_code: HTTP status code of the response.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _error_message(response: httpx.Response) -> str:
    """Pull ``error.message`` out of a Drive error body, if there is one."""
    try:
        body = response.json()
        message = body["error"]["message"]
        if isinstance(message, str) and message:
            return message
    except (ValueError, KeyError, TypeError):
        pass
    return response.text or f"HTTP {response.status_code}"


class DriveClient:
    """Drive API client bound to one OAuth credential.

    Attributes:
        oauth: Supplies access tokens, refreshing as needed.
    """

    def __init__(
        self, oauth: OAuthManager, http_client: httpx.AsyncClient | None = None
    ) -> None:
        """Initialize the client.

        Args:
            oauth: OAuthManager providing access tokens.
            http_client: Optional preconfigured client (tests pass one with a
                mock transport). Created lazily when omitted.
        """
        self.oauth = oauth
        self._http_client = http_client

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create shared HTTP client with connection pooling.

        Returns:
            Shared httpx.AsyncClient instance.
        """
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                http2=True,
                limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
                timeout=httpx.Timeout(30.0, connect=10.0),
            )
        return self._http_client

    async def aclose(self) -> None:
        """Close the shared HTTP client and release resources."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def create_file(
        self,
        metadata: dict[str, Any],
        file_path: str,
        mime_type: str | None = None,
        fields: str = "id, name, webViewLink",
    ) -> dict[str, Any]:
        """Create a Drive file from a local file using a multipart upload.

        Args:
            metadata: Drive file resource (``name``, optional ``parents``).
            file_path: Local file whose bytes become the file content.
            mime_type: Declared media type. When None the media part is sent as
                application/octet-stream and Drive detects the type.
            fields: Partial response selector.

        Returns:
            The created file resource restricted to ``fields``.

        Raises:
            DriveApiError: If Drive returns an error status.
            OSError: If the local file cannot be read.
            httpx.HTTPError: On transport failures.
            google.auth.exceptions.RefreshError: If the token refresh fails.
        """
        body_metadata = dict(metadata)
        if mime_type:
            body_metadata["mimeType"] = mime_type

        boundary = f"gdrive_upload_{secrets.token_hex(16)}"
        head = (
            f"--{boundary}\r\n"
            "Content-Type: application/json; charset=UTF-8\r\n"
            "\r\n"
            f"{json.dumps(body_metadata)}\r\n"
            f"--{boundary}\r\n"
            f"Content-Type: {mime_type or DEFAULT_MEDIA_TYPE}\r\n"
            "\r\n"
        ).encode("utf-8")
        tail = f"\r\n--{boundary}--\r\n".encode("utf-8")

        file_size = (await anyio.Path(file_path).stat()).st_size

        async def body() -> AsyncIterator[bytes]:
            yield head
            async with await anyio.open_file(file_path, "rb") as f:
                while chunk := await f.read(CHUNK_SIZE):
                    yield chunk
            yield tail

        access_token = await self.oauth.get_access_token()
        client = await self._get_http_client()

        response = await client.post(
            DRIVE_UPLOAD_URL,
            params={"uploadType": "multipart", "fields": fields},
            content=body(),
            headers={
                "Authorization": f"Bearer {access_token}",
                "Content-Type": f"multipart/related; boundary={boundary}",
                # Explicit length keeps httpx from falling back to chunked encoding
                "Content-Length": str(len(head) + file_size + len(tail)),
                "Accept": "application/json",
            },
            timeout=UPLOAD_TIMEOUT,
        )
        if response.is_error:
            raise DriveApiError(_error_message(response), response.status_code)

        result: dict[str, Any] = response.json()
        return result
