import json

import pytest
from unittest.mock import MagicMock, patch

import httpx

from admissions.core.exceptions import PersistenceError, StorageError
from admissions.services.storage_service import StorageService
from admissions.services.url_service import UrlService


@pytest.fixture
def storage_service():
    return StorageService(url="https://test.supabase.co", service_role_key="service-key", timeout=5)


@pytest.mark.asyncio
async def test_upload_file_success(storage_service):
    with patch("httpx.AsyncClient.post") as mock_post:
        mock_post.return_value = MagicMock(status_code=200, json=lambda: {"Key": "applications/a/nrc.jpg"})

        result = await storage_service.upload_file(b"jpeg-bytes", "applications", "a/nrc.jpg", "image/jpeg")

        assert result == {"Key": "applications/a/nrc.jpg"}
        args, kwargs = mock_post.call_args
        assert args[0] == "https://test.supabase.co/storage/v1/object/applications/a/nrc.jpg"
        assert kwargs["headers"]["Content-Type"] == "image/jpeg"
        assert kwargs["headers"]["x-upsert"] == "false"
        assert kwargs["headers"]["Authorization"] == "Bearer service-key"
        assert kwargs["content"] == b"jpeg-bytes"


@pytest.mark.asyncio
async def test_upload_file_failure(storage_service):
    with patch("httpx.AsyncClient.post") as mock_post:
        mock_post.return_value = MagicMock(status_code=400, text="Bad Request")

        with pytest.raises(StorageError, match="Upload failed: Bad Request"):
            await storage_service.upload_file(b"data", "documents", "test.pdf")


@pytest.mark.asyncio
async def test_upload_file_transport_error(storage_service):
    with patch("httpx.AsyncClient.post", side_effect=httpx.ConnectError("unreachable")):
        with pytest.raises(PersistenceError, match="Storage upload error"):
            await storage_service.upload_file(b"data", "documents", "test.pdf")


def test_public_url(storage_service):
    url = storage_service.get_public_url("assignments", "week 1/foo.pdf")

    assert url == "https://test.supabase.co/storage/v1/object/public/assignments/week%201/foo.pdf"


@pytest.mark.asyncio
async def test_create_signed_url_success(storage_service):
    with patch("httpx.AsyncClient.post") as mock_post:
        mock_post.return_value = MagicMock(
            status_code=200,
            json=lambda: {"signedURL": "/storage/v1/object/sign/private-scans/test.pdf?token=123"}
        )

        url = await storage_service.create_signed_url("private-scans", "test.pdf", expires_in=600)

        assert url == "https://test.supabase.co/storage/v1/object/sign/private-scans/test.pdf?token=123"
        _, kwargs = mock_post.call_args
        assert kwargs["json"] == {"expiresIn": 600}


@pytest.mark.asyncio
async def test_create_signed_url_relative_to_storage_api(storage_service):
    with patch("httpx.AsyncClient.post") as mock_post:
        mock_post.return_value = MagicMock(
            status_code=200,
            json=lambda: {"signedURL": "/object/sign/applications/x.png?token=abc"}
        )

        url = await storage_service.create_signed_url("applications", "x.png")

        assert url == "https://test.supabase.co/storage/v1/object/sign/applications/x.png?token=abc"


@pytest.mark.asyncio
async def test_create_signed_url_failure(storage_service):
    with patch("httpx.AsyncClient.post") as mock_post:
        mock_post.return_value = MagicMock(status_code=500, text="Server Error")

        with pytest.raises(StorageError, match="Signed URL generation failed: Server Error"):
            await storage_service.create_signed_url("applications", "test.pdf")


@pytest.mark.asyncio
async def test_create_signed_url_missing_in_response(storage_service):
    with patch("httpx.AsyncClient.post") as mock_post:
        mock_post.return_value = MagicMock(status_code=200, json=lambda: {})

        with pytest.raises(StorageError, match="did not contain signedURL"):
            await storage_service.create_signed_url("applications", "test.pdf")


@pytest.mark.asyncio
async def test_create_signed_url_non_json_response(storage_service):
    def not_json():
        raise json.JSONDecodeError("Expecting value", "<html>gateway</html>", 0)

    with patch("httpx.AsyncClient.post") as mock_post:
        mock_post.return_value = MagicMock(status_code=200, json=not_json)

        with pytest.raises(StorageError, match="Signed URL generation failed: invalid response body"):
            await storage_service.create_signed_url("applications", "test.pdf")


@pytest.mark.asyncio
async def test_resolve_url_reports_non_json_signing_response(storage_service):
    def not_json():
        raise json.JSONDecodeError("Expecting value", "<html>gateway</html>", 0)

    with patch("httpx.AsyncClient.post") as mock_post:
        mock_post.return_value = MagicMock(status_code=200, json=not_json)

        with pytest.raises(PersistenceError, match="Failed to generate URL: Signed URL generation failed"):
            await UrlService(storage_service).resolve_url("applications", "test.pdf")
