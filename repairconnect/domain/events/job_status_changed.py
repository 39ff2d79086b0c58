"""
Job status changed domain event.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from repairconnect.domain.value_objects.actor import ActorRole
from repairconnect.domain.value_objects.job_status import JobStatus
from repairconnect.domain.value_objects.notification_type import NotificationType


@dataclass
class JobStatusChanged:
    """Event raised after a service request changes status."""

    request_id: int
    previous_status: JobStatus
    new_status: JobStatus
    actor_id: int
    actor_role: ActorRole
    customer_id: int
    assigned_provider_id: Optional[int]
    changed_at: datetime

    notification_type = NotificationType.JOB_STATUS

    def recipients(self) -> List[int]:
        """Counterpart parties that must hear about the change."""
        if self.actor_role == ActorRole.PROVIDER:
            candidates = [self.customer_id]
        elif self.actor_role == ActorRole.CUSTOMER:
            candidates = [self.assigned_provider_id]
        else:
            candidates = [self.customer_id, self.assigned_provider_id]

        recipients = []
        for user_id in candidates:
            if user_id is not None and user_id != self.actor_id and user_id not in recipients:
                recipients.append(user_id)
        return recipients

    def to_payload(self) -> Dict[str, Any]:
        return {
            "requestId": self.request_id,
            "newStatus": self.new_status.value,
            "actorId": self.actor_id,
            "actorRole": self.actor_role.value,
        }
