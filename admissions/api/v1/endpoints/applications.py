"""Public application submission endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from admissions.dependencies import get_application_service
from admissions.schemas.applications import ApplicationResponse, ApplicationSubmitRequest
from admissions.schemas.common import ApiResponse
from admissions.services.application_service import ApplicationService
from admissions.utils.logging import get_logger
from admissions.utils.responses import create_api_response

LOGGER = get_logger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit an application",
    operation_id="submit_application",
)
async def submit_application(
    request: Request,
    payload: ApplicationSubmitRequest,
    application_service: Annotated[ApplicationService, Depends(get_application_service)],
) -> ApiResponse:
    """Submit a new admissions application. It starts in ``pending`` status."""
    application = await application_service.submit_application(payload.model_dump())

    return create_api_response(
        data={"application": ApplicationResponse.model_validate(application)},
        message="Application submitted successfully",
        request=request,
    )
