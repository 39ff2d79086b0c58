"""
Notification API schemas.
"""

from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel

from repairconnect.domain.entities.notification import Notification


class NotificationResponse(BaseModel):
    id: int
    type: str
    payload: Dict[str, Any]
    read: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationResponse":
        return cls(
            id=notification.id,
            type=notification.type.value,
            payload=notification.payload,
            read=notification.read,
            created_at=notification.created_at,
        )


class MarkReadResponse(BaseModel):
    updated: bool
