"""Response envelope shared by every endpoint."""

from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, Field


class ResponseMeta(BaseModel):
    timestamp: datetime = Field(..., description="Server time the response was built")
    request_id: str = Field(..., description="Correlation ID of the request")
    api_version: str = Field(default="v1", description="API version")


class ApiResponse(BaseModel):
    """Successful response envelope."""

    success: bool = Field(default=True)
    message: str = Field(default="Operation successful")
    data: Dict[str, Any] = Field(default_factory=dict)
    meta: ResponseMeta


class ErrorResponse(BaseModel):
    """Failed response envelope."""

    success: bool = Field(default=False)
    error: str = Field(..., description="Human-readable error message")
    meta: ResponseMeta
