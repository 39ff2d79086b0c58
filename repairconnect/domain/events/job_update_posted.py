"""
Job update posted domain event.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from repairconnect.domain.value_objects.notification_type import NotificationType


@dataclass
class JobUpdatePosted:
    """Event raised when the assigned provider posts a progress note."""

    request_id: int
    customer_id: int
    message: Optional[str]
    image_url: Optional[str]

    notification_type = NotificationType.JOB_UPDATE

    def recipients(self) -> List[int]:
        return [self.customer_id]

    def to_payload(self) -> Dict[str, Any]:
        return {
            "requestId": self.request_id,
            "message": self.message,
            "imageUrl": self.image_url,
        }
