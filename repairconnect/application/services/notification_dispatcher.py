"""
Notification dispatcher.

Turns domain events into per-recipient notifications. ``stage`` writes them
inside the caller's transaction; ``dispatch`` writes them after the caller
has committed and never lets a failure reach the caller.
"""

from typing import List, Optional

from repairconnect.application.interfaces.repositories import (
    NotificationRepositoryInterface,
)
from repairconnect.application.services.notification_outbox import (
    NotificationOutbox,
    PendingNotification,
    get_notification_outbox,
)
from repairconnect.config.logging import get_logger
from repairconnect.domain.entities.notification import Notification
from repairconnect.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from repairconnect.infrastructure.monitoring.metrics import record_notification

logger = get_logger(__name__)


class NotificationDispatcher:
    """Emits notifications for domain events."""

    def __init__(
        self,
        notification_repo: NotificationRepositoryInterface,
        transaction_service: TransactionService,
        outbox: Optional[NotificationOutbox] = None,
    ):
        self.notification_repo = notification_repo
        self.transaction_service = transaction_service
        self.outbox = outbox if outbox is not None else get_notification_outbox()

    @staticmethod
    def build_notifications(event) -> List[Notification]:
        """One notification per recipient of the event."""
        payload = event.to_payload()
        return [
            Notification(
                user_id=user_id,
                type=event.notification_type,
                payload=dict(payload),
            )
            for user_id in event.recipients()
        ]

    async def stage(self, event) -> List[Notification]:
        """Write the event's notifications without committing."""
        created = []
        for notification in self.build_notifications(event):
            created.append(await self.notification_repo.create(notification))
        return created

    async def dispatch(self, event) -> List[Notification]:
        """
        Write and commit the event's notifications.

        Failures are logged, counted and handed to the outbox for a later
        attempt. The primary change the event describes is already durable.
        """
        notifications = self.build_notifications(event)
        if not notifications:
            return []

        try:
            created = []
            for notification in notifications:
                created.append(await self.notification_repo.create(notification))
            await self.transaction_service.commit()
        except Exception as e:
            await self._safe_rollback()
            for notification in notifications:
                record_notification(notification.type.value, "failed")
                self.outbox.enqueue(
                    PendingNotification(notification=notification, last_error=str(e))
                )
            logger.warning(
                "Notification write failed, queued for retry",
                type=event.notification_type.value,
                recipients=[n.user_id for n in notifications],
                error=str(e),
            )
            return []

        for notification in created:
            record_notification(notification.type.value, "success")
        logger.debug(
            "Notifications dispatched",
            type=event.notification_type.value,
            count=len(created),
        )
        return created

    async def _safe_rollback(self) -> None:
        try:
            await self.transaction_service.rollback()
        except Exception as e:
            logger.error("Rollback after notification failure failed", error=str(e))
