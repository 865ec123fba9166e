"""Unified API response format and error handling."""

from typing import Any
from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, Field

from core.models import FormState
from utils.request_context import get_current_request_id
from utils.timezone import now_utc


class APIError(BaseModel):
    """Error details in API response."""

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class APIMeta(BaseModel):
    """Metadata included in every API response."""

    timestamp: datetime = Field(..., description="Response timestamp (UTC)")
    request_id: str = Field(..., description="Unique request identifier for tracing")


class APIResponse(BaseModel):
    """
    Unified response format for all API endpoints.

    Every endpoint returns this structure, making client parsing predictable.
    """

    success: bool
    data: Any | None = None
    error: APIError | None = None
    meta: APIMeta


def _meta() -> APIMeta:
    return APIMeta(
        timestamp=now_utc(),
        request_id=get_current_request_id() or str(uuid4()),
    )


def success_response(data: Any) -> APIResponse:
    """Create a success response."""
    return APIResponse(success=True, data=data, error=None, meta=_meta())


def error_response(code: str, message: str, data: Any | None = None) -> APIResponse:
    """Create an error response, optionally carrying data for the client to render."""
    return APIResponse(
        success=False,
        data=data,
        error=APIError(code=code, message=message),
        meta=_meta(),
    )


def form_state_response(state: FormState) -> tuple[int, APIResponse]:
    """
    Status code and body for a rejected form submission.

    Field errors are the client's to fix (422); a bare message means the
    store refused the write (503).
    """
    if state.errors:
        code, status = ErrorCodes.VALIDATION_ERROR, 422
    else:
        code, status = ErrorCodes.SERVICE_UNAVAILABLE, 503
    body = error_response(code, state.message or "", data=state.model_dump(mode="json"))
    return status, body


class ErrorCodes:
    """Standard error codes for consistent error handling."""

    # Resource Errors
    NOT_FOUND = "NOT_FOUND"

    # Validation Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"

    # Infrastructure
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
