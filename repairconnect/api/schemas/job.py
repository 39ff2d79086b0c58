"""
Service request API schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from repairconnect.domain.entities.service_request import ServiceRequest

from .common import TimestampMixin
from .invoice import InvoiceResponse
from .update import JobUpdateResponse


class JobCreateRequest(BaseModel):
    """Service request creation schema."""

    title: Optional[str] = Field(None, max_length=255)
    category: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    preferred_at: Optional[datetime] = Field(
        None, description="Preferred visit date and time"
    )
    preferred_timezone: Optional[str] = Field(
        None, max_length=64, description="IANA time zone of the preferred time"
    )


class JobEditRequest(BaseModel):
    """Owner edit of a pending request. Only fields sent are changed."""

    title: Optional[str] = Field(None, max_length=255)
    category: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    preferred_at: Optional[datetime] = None
    preferred_timezone: Optional[str] = Field(None, max_length=64)
    expected_updated_at: Optional[datetime] = Field(
        None,
        description="updated_at the client last saw; the edit fails if it changed",
    )


class StatusChangeRequest(BaseModel):
    status: str = Field(..., description="Target status")


class JobResponse(TimestampMixin):
    """Service request response schema."""

    id: int
    title: str
    category: str
    description: str
    customer_id: int
    assigned_provider_id: Optional[int] = None
    status: str
    preferred_at: Optional[datetime] = None
    preferred_timezone: Optional[str] = None

    @classmethod
    def from_entity(cls, request: ServiceRequest) -> "JobResponse":
        return cls(
            id=request.id,
            title=request.title,
            category=request.category,
            description=request.description,
            customer_id=request.customer_id,
            assigned_provider_id=request.assigned_provider_id,
            status=request.status.value,
            preferred_at=request.preferred_at,
            preferred_timezone=request.preferred_timezone,
            created_at=request.created_at,
            updated_at=request.updated_at,
        )


class JobDetailResponse(JobResponse):
    """Service request with its update feed and invoices."""

    updates: List[JobUpdateResponse] = []
    invoices: List[InvoiceResponse] = []
