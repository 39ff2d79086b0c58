"""Notification domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from repairconnect.domain.value_objects.notification_type import NotificationType


@dataclass
class Notification:
    """Inbox entry for a user."""

    user_id: int
    type: NotificationType
    payload: Dict[str, Any] = field(default_factory=dict)
    read: bool = False
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        self.type = NotificationType(self.type)
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
