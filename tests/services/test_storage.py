"""Tests for HttpStorage using httpx.MockTransport."""

from __future__ import annotations

import httpx
import pytest

from texture_uploader.services import HttpStorage, StorageError

pytestmark = pytest.mark.anyio

SIGNED_URL = "https://storage.example.com/upload/texture.dds?X-Signature=abc"


def _storage(handler) -> tuple[HttpStorage, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def _record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(_record))
    return HttpStorage(client=client), requests


class TestHttpStorage:
    async def test_puts_bytes_with_octet_stream(self) -> None:
        storage, requests = _storage(lambda request: httpx.Response(200))

        await storage.upload_file(SIGNED_URL, b"\x01\x02\x03")

        assert len(requests) == 1
        request = requests[0]
        assert request.method == "PUT"
        assert str(request.url) == SIGNED_URL
        assert request.headers["Content-Type"] == "application/octet-stream"
        assert request.content == b"\x01\x02\x03"
        await storage.aclose()

    @pytest.mark.parametrize("status", [200, 201, 204])
    async def test_any_2xx_succeeds(self, status: int) -> None:
        storage, _ = _storage(lambda request: httpx.Response(status))
        await storage.upload_file(SIGNED_URL, b"data")

    @pytest.mark.parametrize("status", [301, 403, 500])
    async def test_non_2xx_is_storage_error(self, status: int) -> None:
        storage, requests = _storage(lambda request: httpx.Response(status, text="SignatureDoesNotMatch"))

        with pytest.raises(StorageError) as exc_info:
            await storage.upload_file(SIGNED_URL, b"data")

        assert f"status {status}" in str(exc_info.value)
        assert "SignatureDoesNotMatch" in str(exc_info.value)
        assert len(requests) == 1

    async def test_transport_failure_is_storage_error(self) -> None:
        def _refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        storage, requests = _storage(_refuse)
        with pytest.raises(StorageError, match="failed to send request"):
            await storage.upload_file(SIGNED_URL, b"data")
        assert len(requests) == 1

    @pytest.mark.parametrize("url", ["", "   ", "\t\n"])
    async def test_blank_url_checked_before_network(self, url: str) -> None:
        storage, requests = _storage(lambda request: httpx.Response(200))
        with pytest.raises(StorageError, match="signed url is missing"):
            await storage.upload_file(url, b"data")
        assert requests == []

    async def test_empty_data_checked_before_network(self) -> None:
        storage, requests = _storage(lambda request: httpx.Response(200))
        with pytest.raises(StorageError, match="file data is empty"):
            await storage.upload_file(SIGNED_URL, b"")
        assert requests == []

    async def test_unsupported_scheme_is_storage_error(self) -> None:
        storage = HttpStorage()
        with pytest.raises(StorageError):
            await storage.upload_file("not-a-url", b"data")
        await storage.aclose()
