"""Resolves download URLs for objects in storage buckets.

Whether a bucket is served through a stable public URL or a signed one is
decided by ``BUCKET_ACCESS_POLICIES``. A bucket missing from the table is
private.
"""

from enum import Enum
from typing import Any, Dict, Optional

from admissions.core.config import settings
from admissions.core.exceptions import ValidationError
from admissions.services.base_service import BaseService
from admissions.services.storage_service import StorageService
from admissions.utils.logging import get_logger

LOGGER = get_logger(__name__)


class BucketAccess(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


BUCKET_ACCESS_POLICIES: Dict[str, BucketAccess] = {
    "assignments": BucketAccess.PUBLIC,
    "updates": BucketAccess.PUBLIC,
    "documents": BucketAccess.PUBLIC,
    "applications": BucketAccess.PRIVATE,
}


def get_bucket_access(bucket: str) -> BucketAccess:
    return BUCKET_ACCESS_POLICIES.get(bucket, BucketAccess.PRIVATE)


class UrlService(BaseService):
    """Returns public URLs for public buckets and signed URLs otherwise."""

    persistence_errors = {"resolve_url": "Failed to generate URL"}

    def __init__(self, storage: StorageService):
        super().__init__()
        self.storage = storage

    async def resolve_url(
        self,
        bucket: Optional[str],
        file_path: Optional[str],
        expires_in: Optional[int] = None,
    ) -> str:
        """Resolve the URL an object can be fetched from.

        Args:
            bucket: Bucket name
            file_path: Object path inside the bucket
            expires_in: Signed URL lifetime in seconds, ignored for public buckets.
                Defaults to the configured signed URL expiry

        Returns:
            The public or signed URL

        Raises:
            ValidationError: Bucket or path missing
            PersistenceError: Signing failed
        """
        return await self.execute(
            action="resolve_url",
            bucket=bucket,
            file_path=file_path,
            expires_in=expires_in,
        )

    def validate(self, *args, **kwargs) -> None:
        if not kwargs.get("bucket") or not kwargs.get("file_path"):
            raise ValidationError("Bucket and filePath are required")

    async def run(self, *args, **kwargs) -> Any:
        bucket = kwargs["bucket"]
        file_path = kwargs["file_path"]

        if get_bucket_access(bucket) is BucketAccess.PUBLIC:
            return self.storage.get_public_url(bucket, file_path)

        expires_in = kwargs.get("expires_in") or settings.storage.signed_url_expiry
        url = await self.storage.create_signed_url(bucket, file_path, expires_in)

        LOGGER.debug(f"Signed URL issued: bucket={bucket}, path={file_path}, expires_in={expires_in}")
        return url
