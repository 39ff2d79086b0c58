"""
In-memory retry queue for notifications whose first write failed.
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

from repairconnect.config.logging import get_logger
from repairconnect.config.settings import settings
from repairconnect.domain.entities.notification import Notification
from repairconnect.infrastructure.monitoring.metrics import record_notification_dropped

logger = get_logger(__name__)


@dataclass
class PendingNotification:
    """A notification waiting for another delivery attempt."""

    notification: Notification
    attempts: int = 1
    last_error: Optional[str] = None


class NotificationOutbox:
    """Bounded FIFO of undelivered notifications."""

    def __init__(self, max_size: int = None):
        self.max_size = max_size or settings.NOTIFICATION_OUTBOX_MAX_SIZE
        self._queue: Deque[PendingNotification] = deque()

    def __len__(self) -> int:
        return len(self._queue)

    def enqueue(self, entry: PendingNotification) -> None:
        """Queue an entry, evicting the oldest one when full."""
        if len(self._queue) >= self.max_size:
            evicted = self._queue.popleft()
            record_notification_dropped("outbox_full")
            logger.error(
                "Notification outbox full, dropping oldest entry",
                user_id=evicted.notification.user_id,
                type=evicted.notification.type.value,
                max_size=self.max_size,
            )
        self._queue.append(entry)

    def drain(self, limit: int = 100) -> List[PendingNotification]:
        """Take up to ``limit`` entries off the front of the queue."""
        entries = []
        while self._queue and len(entries) < limit:
            entries.append(self._queue.popleft())
        return entries

    def clear(self) -> None:
        self._queue.clear()


_outbox: Optional[NotificationOutbox] = None


def get_notification_outbox() -> NotificationOutbox:
    """Process-wide outbox shared by request handlers and the retry worker."""
    global _outbox
    if _outbox is None:
        _outbox = NotificationOutbox()
    return _outbox
