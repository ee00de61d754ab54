import json
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status

from admissions.core.exceptions import ValidationError
from admissions.dependencies import get_upload_service, get_url_service
from admissions.schemas.common import ApiResponse
from admissions.schemas.storage import UrlRequest
from admissions.services.upload_service import UploadService
from admissions.services.url_service import UrlService
from admissions.utils.logging import get_logger
from admissions.utils.responses import create_api_response

LOGGER = get_logger(__name__)

router = APIRouter()


@router.post(
    "/url",
    response_model=ApiResponse,
    summary="Resolve a download URL",
    operation_id="resolve_storage_url",
)
async def resolve_storage_url(
    request: Request,
    payload: UrlRequest,
    url_service: Annotated[UrlService, Depends(get_url_service)],
) -> ApiResponse:
    """Public URL for public buckets, signed URL for everything else."""
    url = await url_service.resolve_url(
        payload.bucket, payload.file_path, expires_in=payload.expires_in
    )

    return create_api_response(
        data={"url": url},
        message="URL generated successfully",
        request=request,
    )


def _parse_allowed_types(raw: Optional[str]) -> Optional[List[str]]:
    if not raw:
        return None
    try:
        allowed = json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError("allowedTypes must be a JSON array of MIME types")
    if not isinstance(allowed, list):
        raise ValidationError("allowedTypes must be a JSON array of MIME types")
    return [str(item) for item in allowed]


def _parse_max_size(raw: Optional[str]) -> Optional[int]:
    # Unparseable values fall back to the configured limit
    try:
        return int(raw) if raw else None
    except ValueError:
        return None


@router.post(
    "/upload",
    response_model=ApiResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a file to a storage bucket",
    operation_id="upload_storage_file",
)
async def upload_storage_file(
    request: Request,
    upload_service: Annotated[UploadService, Depends(get_upload_service)],
    file: Optional[UploadFile] = File(None, description="File to upload"),
    bucket: Optional[str] = Form(None),
    folder: Optional[str] = Form(None),
    allowed_types: Optional[str] = Form(None, alias="allowedTypes"),
    max_size: Optional[str] = Form(None, alias="maxSize"),
) -> ApiResponse:
    """Upload a file under a generated unique name."""
    content = await file.read() if file is not None else None

    result = await upload_service.upload(
        content=content,
        filename=file.filename if file is not None else None,
        content_type=file.content_type if file is not None else None,
        bucket=bucket,
        folder=folder,
        allowed_types=_parse_allowed_types(allowed_types),
        max_size=_parse_max_size(max_size),
    )

    return create_api_response(
        data=result.model_dump(),
        message="File uploaded successfully",
        request=request,
    )
