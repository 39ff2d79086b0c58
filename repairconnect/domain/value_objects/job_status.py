"""
Job status value object.
"""

from enum import Enum

from ..exceptions.validation_error import ValidationError


class JobStatus(str, Enum):
    """Service request lifecycle status enumeration."""

    PENDING = "pending"
    TAKEN = "taken"
    ONGOING = "ongoing"
    PAUSED = "paused"
    DONE = "done"
    CLOSED = "closed"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value: str) -> "JobStatus":
        """Parse a client-supplied status, case-insensitively."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(
                f"Unknown status '{value}'",
                {"field": "status", "allowed": [s.value for s in cls]},
            )

    def is_terminal(self) -> bool:
        """Check if no further transitions are expected."""
        return self in [self.CLOSED, self.CANCELLED]

    def is_active(self) -> bool:
        """Check if a provider is working the job."""
        return self in [self.TAKEN, self.ONGOING, self.PAUSED]

    def is_editable(self) -> bool:
        """Check if the owner may still edit the request details."""
        return self == self.PENDING

    def can_be_invoiced(self) -> bool:
        return self == self.DONE
