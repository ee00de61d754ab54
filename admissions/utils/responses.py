from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from fastapi import Request

from admissions.schemas.common import ApiResponse, ErrorResponse, ResponseMeta


def _build_meta(request: Optional[Request], api_version: str) -> ResponseMeta:
    request_id = str(uuid4())
    if request is not None and hasattr(request.state, "correlation_id"):
        request_id = request.state.correlation_id

    return ResponseMeta(
        timestamp=datetime.now(timezone.utc),
        request_id=request_id,
        api_version=api_version,
    )


def _to_jsonable(value: Any) -> Any:
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_to_jsonable(item) for item in value]
    return value


def create_api_response(
    data: Optional[Dict[str, Any]],
    message: str = "Operation successful",
    request: Optional[Request] = None,
    api_version: str = "v1",
) -> Dict[str, Any]:
    """Create a standardized success response as a dictionary.

    ``data`` maps payload keys (``application``, ``files``, ``url`` ...) to
    pydantic models, lists of them or plain values.
    """
    payload = {key: _to_jsonable(value) for key, value in (data or {}).items()}

    response = ApiResponse(
        success=True,
        message=message,
        data=payload,
        meta=_build_meta(request, api_version),
    )
    return response.model_dump(mode="json")


def create_error_response(
    error: str,
    request: Optional[Request] = None,
    api_version: str = "v1",
) -> Dict[str, Any]:
    """Create a standardized error response as a dictionary."""
    response = ErrorResponse(
        success=False,
        error=error,
        meta=_build_meta(request, api_version),
    )
    return response.model_dump(mode="json")
