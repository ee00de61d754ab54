"""Service for uploading files into storage buckets."""

import secrets
import string
import time
from typing import Any, Optional, Sequence

from admissions.core.config import settings
from admissions.core.exceptions import ValidationError
from admissions.schemas.storage import UploadResult
from admissions.services.base_service import BaseService
from admissions.services.storage_service import StorageService
from admissions.services.url_service import UrlService
from admissions.utils.logging import get_logger

LOGGER = get_logger(__name__)

_NAME_ALPHABET = string.ascii_lowercase + string.digits


def generate_object_name(filename: str) -> str:
    """Unique object name: ``<epoch millis>_<13 random chars>.<extension>``."""
    extension = filename.rsplit(".", 1)[-1]
    suffix = "".join(secrets.choice(_NAME_ALPHABET) for _ in range(13))
    return f"{int(time.time() * 1000)}_{suffix}.{extension}"


def _megabytes(size: int) -> str:
    return f"{size / 1024 / 1024:.2f}MB"


class UploadService(BaseService):
    """Validates and stores a file, then resolves the URL it is served from."""

    def __init__(self, storage: StorageService, url_service: UrlService):
        super().__init__()
        self.storage = storage
        self.url_service = url_service

    async def upload(
        self,
        content: Optional[bytes],
        filename: Optional[str],
        content_type: Optional[str],
        bucket: Optional[str],
        folder: Optional[str] = None,
        allowed_types: Optional[Sequence[str]] = None,
        max_size: Optional[int] = None,
    ) -> UploadResult:
        """Upload a file under a generated name.

        Args:
            content: File bytes
            filename: Original file name, used for the extension
            content_type: MIME type reported by the client
            bucket: Target bucket
            folder: Optional folder prefix inside the bucket
            allowed_types: MIME types to accept; any type when empty
            max_size: Size limit in bytes, defaults to the configured limit

        Returns:
            UploadResult with the stored path and its URL

        Raises:
            ValidationError: Missing file or bucket, disallowed type, too large
            PersistenceError: Upload or URL signing failed
        """
        return await self.execute(
            action="upload",
            content=content,
            filename=filename,
            content_type=content_type or "application/octet-stream",
            bucket=bucket,
            folder=folder,
            allowed_types=allowed_types,
            max_size=max_size or settings.storage.upload_max_size,
        )

    def validate(self, *args, **kwargs) -> None:
        if kwargs.get("content") is None or not kwargs.get("filename"):
            raise ValidationError("No file provided")

        if not kwargs.get("bucket"):
            raise ValidationError("No bucket specified")

        allowed_types = kwargs.get("allowed_types")
        content_type = kwargs.get("content_type")
        if allowed_types and content_type not in allowed_types:
            raise ValidationError(
                f"File type {content_type} not allowed. Allowed types: {', '.join(allowed_types)}"
            )

        size = len(kwargs["content"])
        max_size = kwargs["max_size"]
        if size > max_size:
            raise ValidationError(
                f"File size {_megabytes(size)} exceeds maximum allowed size of {_megabytes(max_size)}"
            )

    async def run(self, *args, **kwargs) -> Any:
        content: bytes = kwargs["content"]
        filename: str = kwargs["filename"]
        bucket: str = kwargs["bucket"]
        folder: Optional[str] = kwargs.get("folder")

        object_name = generate_object_name(filename)
        path = f"{folder.strip('/')}/{object_name}" if folder else object_name

        await self.storage.upload_file(
            content,
            bucket=bucket,
            path=path,
            content_type=kwargs["content_type"],
        )
        LOGGER.info(f"File uploaded to storage: filename={filename}, bucket={bucket}, path={path}")

        url = await self.url_service.resolve_url(
            bucket, path, expires_in=settings.storage.upload_signed_url_expiry
        )

        return UploadResult(path=path, url=url, file_name=filename, file_size=len(content))
