"""Service request domain entity."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from repairconnect.domain.exceptions.validation_error import (
    InvalidFormatError,
    RequiredFieldError,
)
from repairconnect.domain.value_objects.job_status import JobStatus

EDITABLE_FIELDS = (
    "title",
    "category",
    "description",
    "preferred_at",
    "preferred_timezone",
)


@dataclass
class ServiceRequest:
    """A customer's repair job."""

    title: str
    category: str
    description: str
    customer_id: int
    id: Optional[int] = None
    status: JobStatus = JobStatus.PENDING
    assigned_provider_id: Optional[int] = None
    preferred_at: Optional[datetime] = None
    preferred_timezone: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate request data."""
        self.status = JobStatus.parse(self.status)
        self.validate_details(
            self.title, self.category, self.description, self.preferred_timezone
        )

        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
        if not self.updated_at:
            self.updated_at = self.created_at

    @staticmethod
    def validate_details(
        title: Optional[str],
        category: Optional[str],
        description: Optional[str],
        preferred_timezone: Optional[str] = None,
    ) -> None:
        """Check the customer-editable fields."""
        if not title or not title.strip():
            raise RequiredFieldError("title")
        if not category or not category.strip():
            raise RequiredFieldError("category")
        if not description or not description.strip():
            raise RequiredFieldError("description")
        if preferred_timezone:
            try:
                ZoneInfo(preferred_timezone)
            except (ZoneInfoNotFoundError, ValueError):
                raise InvalidFormatError("preferred_timezone", "IANA time zone name")

    def is_owned_by(self, user_id: int) -> bool:
        return self.customer_id == user_id

    def is_assigned_to(self, user_id: int) -> bool:
        return self.assigned_provider_id is not None and self.assigned_provider_id == user_id

    @property
    def is_unclaimed(self) -> bool:
        return self.assigned_provider_id is None
