"""Admin endpoints for reviewing applications and their documents.

Access control for these routes is enforced in front of the service.
"""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request

from admissions.dependencies import get_application_file_service, get_application_service
from admissions.schemas.application_files import ApplicationFileResponse
from admissions.schemas.applications import ApplicationResponse, ApplicationStatusUpdateRequest
from admissions.schemas.common import ApiResponse
from admissions.services.application_file_service import ApplicationFileService
from admissions.services.application_service import ApplicationService
from admissions.utils.logging import get_logger
from admissions.utils.responses import create_api_response

LOGGER = get_logger(__name__)

router = APIRouter()


@router.get(
    "/applications",
    response_model=ApiResponse,
    summary="List applications",
    operation_id="list_applications",
)
async def list_applications(
    request: Request,
    application_service: Annotated[ApplicationService, Depends(get_application_service)],
    status: Optional[str] = Query(None, description="Only applications in this status"),
) -> ApiResponse:
    """List applications, newest submission first."""
    applications = await application_service.list_applications(status=status)

    return create_api_response(
        data={"applications": [ApplicationResponse.model_validate(a) for a in applications]},
        message="Applications retrieved successfully",
        request=request,
    )


@router.put(
    "/applications",
    response_model=ApiResponse,
    summary="Update application status",
    operation_id="update_application_status",
)
async def update_application_status(
    request: Request,
    payload: ApplicationStatusUpdateRequest,
    application_service: Annotated[ApplicationService, Depends(get_application_service)],
) -> ApiResponse:
    """Approve, reject or otherwise re-status an application."""
    application = await application_service.update_status(
        application_id=payload.application_id,
        status=payload.status,
        admin_notes=payload.admin_notes,
        reviewed_by=payload.reviewed_by,
    )

    return create_api_response(
        data={"application": ApplicationResponse.model_validate(application)},
        message="Application status updated successfully",
        request=request,
    )


@router.get(
    "/applications/{application_id}/files",
    response_model=ApiResponse,
    summary="List application files",
    operation_id="list_application_files",
)
async def list_application_files(
    request: Request,
    application_id: UUID,
    file_service: Annotated[ApplicationFileService, Depends(get_application_file_service)],
) -> ApiResponse:
    """List the supporting documents of an application, newest first."""
    files = await file_service.list_files(application_id)

    return create_api_response(
        data={"files": [ApplicationFileResponse.model_validate(f) for f in files]},
        message="Application files retrieved successfully",
        request=request,
    )
