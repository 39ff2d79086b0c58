"""
Application services package.
"""

from .notification_dispatcher import NotificationDispatcher
from .notification_outbox import (
    NotificationOutbox,
    PendingNotification,
    get_notification_outbox,
)

__all__ = [
    "NotificationDispatcher",
    "NotificationOutbox",
    "PendingNotification",
    "get_notification_outbox",
]
