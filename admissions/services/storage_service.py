"""Storage service for handling Supabase storage operations."""

from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from admissions.core.config import settings
from admissions.core.exceptions import StorageError
from admissions.utils.logging import get_logger

LOGGER = get_logger(__name__)


class StorageService:
    """Client for the Supabase Storage REST API.

    Requests use the service-role key, so bucket policies do not apply to
    server-side calls.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        service_role_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.url = (url if url is not None else settings.supabase_url).rstrip("/")
        self.service_role_key = (
            service_role_key if service_role_key is not None else settings.supabase_service_role_key
        )
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self.base_api_url = f"{self.url}/storage/v1"
        self.headers = {
            "Authorization": f"Bearer {self.service_role_key}",
            "apikey": self.service_role_key,
        }

    async def upload_file(
        self,
        content: bytes,
        bucket: str,
        path: str,
        content_type: str = "application/octet-stream",
        upsert: bool = False,
        cache_control: str = "3600",
    ) -> Dict[str, Any]:
        """Upload raw bytes to a bucket.

        Args:
            content: File content.
            bucket: Target bucket name.
            path: Target path within the bucket.
            content_type: MIME type stored with the object.
            upsert: Overwrite an existing object at the same path.
            cache_control: max-age in seconds served with the object.

        Returns:
            Dict containing the upload result.

        Raises:
            StorageError: If the upload fails.
        """
        upload_url = f"{self.base_api_url}/object/{bucket}/{_quote_path(path)}"
        headers = {
            **self.headers,
            "Content-Type": content_type,
            "cache-control": f"max-age={cache_control}",
            "x-upsert": "true" if upsert else "false",
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    upload_url,
                    headers=headers,
                    content=content,
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            LOGGER.error(f"Error uploading file to Supabase: {str(e)}", exc_info=True)
            raise StorageError(f"Storage upload error: {str(e)}", original_error=e)

        if response.status_code != 200:
            LOGGER.error(
                f"Failed to upload file to Supabase: {response.text}",
                extra={"bucket": bucket, "path": path, "status_code": response.status_code}
            )
            raise StorageError(f"Upload failed: {response.text}")

        return _json_body(response, "Upload failed")

    def get_public_url(self, bucket: str, path: str) -> str:
        """Build the public URL of an object.

        No request is made; the URL is only reachable for public buckets.
        """
        return f"{self.base_api_url}/object/public/{bucket}/{_quote_path(path)}"

    async def create_signed_url(self, bucket: str, path: str, expires_in: int = 3600) -> str:
        """Generate a time-limited URL for an object in a private bucket.

        Args:
            bucket: Bucket name.
            path: Object path.
            expires_in: Expiration time in seconds.

        Returns:
            The absolute signed URL.

        Raises:
            StorageError: If URL generation fails.
        """
        url = f"{self.base_api_url}/object/sign/{bucket}/{_quote_path(path)}"

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    url,
                    headers=self.headers,
                    json={"expiresIn": expires_in},
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            LOGGER.error(f"Error generating signed URL: {str(e)}", exc_info=True)
            raise StorageError(f"Signed URL error: {str(e)}", original_error=e)

        if response.status_code != 200:
            LOGGER.error(
                f"Failed to generate signed URL: {response.text}",
                extra={"bucket": bucket, "path": path, "status_code": response.status_code}
            )
            raise StorageError(f"Signed URL generation failed: {response.text}")

        signed_path = _json_body(response, "Signed URL generation failed").get("signedURL")
        if not signed_path:
            raise StorageError("Supabase response did not contain signedURL")

        # Older Storage versions return the path with the /storage/v1 prefix, newer without
        if signed_path.startswith("/storage/v1"):
            return f"{self.url}{signed_path}"
        if signed_path.startswith("/"):
            return f"{self.base_api_url}{signed_path}"
        return signed_path


def _quote_path(path: str) -> str:
    return quote(path.lstrip("/"), safe="/")


def _json_body(response: httpx.Response, failure: str) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError as e:
        LOGGER.error(f"{failure}: response is not JSON", extra={"status_code": response.status_code})
        raise StorageError(f"{failure}: invalid response body", original_error=e)
    if not isinstance(body, dict):
        raise StorageError(f"{failure}: unexpected response body")
    return body
