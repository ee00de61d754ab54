from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UrlRequest(BaseModel):
    """Request body for resolving a storage URL."""

    model_config = ConfigDict(populate_by_name=True)

    bucket: Optional[str] = None
    file_path: Optional[str] = Field(default=None, alias="filePath")
    expires_in: Optional[int] = Field(
        default=None,
        alias="expiresIn",
        gt=0,
        description="Signed URL lifetime in seconds, defaults to SIGNED_URL_EXPIRY",
    )


class UploadResult(BaseModel):
    path: str = Field(..., description="Object path inside the bucket")
    url: str = Field(..., description="Public or signed URL of the object")
    file_name: str = Field(..., description="Original file name")
    file_size: int = Field(..., description="Size in bytes")
