"""
Common API schemas.
"""

from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error body produced by the exception handlers."""

    error: str
    message: str
    type: str
    details: Dict[str, Any] = {}


# Documented on every router that can reject a workflow operation
WORKFLOW_ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
    403: {"model": ErrorResponse, "description": "Caller may not perform this action"},
    404: {"model": ErrorResponse, "description": "Unknown request or invoice"},
    409: {"model": ErrorResponse, "description": "Not allowed from the current state"},
}


class TimestampMixin(BaseModel):
    """Mixin for timestamp fields."""

    created_at: datetime
    updated_at: datetime
