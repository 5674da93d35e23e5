"""Object storage hand-off.

Converted textures are sent to a caller-supplied pre-signed URL with a
single HTTP PUT. The URL is treated as an opaque destination: it is
checked for blankness and otherwise passed through untouched.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx

from .errors import StorageError

logger = logging.getLogger(__name__)

_MAX_BODY_EXCERPT = 500


class Storage(ABC):
    """Uploads a byte buffer to a pre-signed URL."""

    @abstractmethod
    async def upload_file(self, signed_url: str, file_data: bytes) -> None:
        """Upload *file_data*; raise :class:`StorageError` on any failure."""

    async def aclose(self) -> None:  # pragma: no cover
        return None


class HttpStorage(Storage):  # pylint: disable=too-few-public-methods
    """PUT forwarder on top of a shared ``httpx.AsyncClient``."""

    _CONTENT_TYPE = "application/octet-stream"

    def __init__(self, *, timeout: float = 60.0, client: httpx.AsyncClient | None = None) -> None:
        self._client = client or httpx.AsyncClient(timeout=timeout)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def upload_file(self, signed_url: str, file_data: bytes) -> None:
        logger.info("Uploading file to storage (signed_url: %s, size: %d bytes)", signed_url, len(file_data))

        if not signed_url or not signed_url.strip():
            raise StorageError("signed url is missing")
        if not file_data:
            raise StorageError("file data is empty")

        try:
            resp = await self._client.put(
                signed_url,
                content=bytes(file_data),
                headers={"Content-Type": self._CONTENT_TYPE},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise StorageError(f"failed to send request: {exc}") from exc

        if not resp.is_success:
            raise StorageError(
                f"upload failed with status {resp.status_code}: {resp.text[:_MAX_BODY_EXCERPT]}"
            )

        logger.info("Upload succeeded (status: %d)", resp.status_code)

    async def aclose(self) -> None:
        await self._client.aclose()
