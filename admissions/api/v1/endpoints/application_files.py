from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from admissions.dependencies import get_application_file_service
from admissions.schemas.application_files import ApplicationFileIngestRequest, ApplicationFileResponse
from admissions.schemas.common import ApiResponse
from admissions.services.application_file_service import ApplicationFileService
from admissions.utils.responses import create_api_response

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record an uploaded application document",
    operation_id="ingest_application_file",
)
async def ingest_application_file(
    request: Request,
    payload: ApplicationFileIngestRequest,
    file_service: Annotated[ApplicationFileService, Depends(get_application_file_service)],
) -> ApiResponse:
    """Record a document already uploaded to storage.

    The file is flagged for review when its authenticity score is below 70
    or any authenticity flag is set.
    """
    application_file = await file_service.ingest_file(payload.model_dump())

    return create_api_response(
        data={"file": ApplicationFileResponse.model_validate(application_file)},
        message="Application file recorded successfully",
        request=request,
    )
