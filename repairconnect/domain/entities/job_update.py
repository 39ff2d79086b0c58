"""Job update domain entity."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from repairconnect.domain.exceptions.validation_error import ValidationError


@dataclass
class JobUpdate:
    """A provider's progress note on a job."""

    request_id: int
    provider_id: int
    message: Optional[str] = None
    image_url: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if self.message is not None:
            self.message = self.message.strip() or None
        if self.image_url is not None:
            self.image_url = self.image_url.strip() or None
        if not self.message and not self.image_url:
            raise ValidationError(
                "A job update needs a message or an image",
                {"fields": ["message", "image_url"]},
            )
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
