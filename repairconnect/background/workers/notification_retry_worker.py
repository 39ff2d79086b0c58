"""
Worker that retries notifications whose first write failed.
"""

import asyncio

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from repairconnect.application.services.notification_outbox import (
    NotificationOutbox,
    get_notification_outbox,
)
from repairconnect.config.logging import get_logger
from repairconnect.config.settings import settings
from repairconnect.infrastructure.database.repositories.notification_repository import (
    NotificationRepository,
)
from repairconnect.infrastructure.monitoring.metrics import (
    record_notification,
    record_notification_dropped,
    record_notification_retry,
)

logger = get_logger(__name__)


class NotificationRetryWorker:
    """Drains the notification outbox into the database."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        outbox: NotificationOutbox = None,
        max_retries: int = None,
    ):
        self.session_factory = session_factory
        self.outbox = outbox if outbox is not None else get_notification_outbox()
        self.max_retries = (
            settings.NOTIFICATION_MAX_RETRIES if max_retries is None else max_retries
        )
        self.is_running = False
        self.delivered_count = 0
        self.error_count = 0
        self.dropped_count = 0

    async def process_pending(self, batch_size: int = 100) -> int:
        """Retry one batch; returns how many were delivered."""
        entries = self.outbox.drain(batch_size)
        if not entries:
            return 0

        delivered = 0
        for entry in entries:
            try:
                async with self.session_factory() as session:
                    await NotificationRepository(session).create(entry.notification)
                    await session.commit()
            except Exception as e:
                entry.attempts += 1
                entry.last_error = str(e)
                self.error_count += 1
                record_notification_retry("failed")

                if entry.attempts > self.max_retries:
                    self.dropped_count += 1
                    record_notification_dropped("max_retries")
                    logger.error(
                        "Giving up on notification",
                        user_id=entry.notification.user_id,
                        type=entry.notification.type.value,
                        payload=entry.notification.payload,
                        attempts=entry.attempts,
                        error=str(e),
                    )
                else:
                    self.outbox.enqueue(entry)
                continue

            delivered += 1
            self.delivered_count += 1
            record_notification_retry("success")
            record_notification(entry.notification.type.value, "success")

        logger.info(
            "Notification retry batch processed",
            attempted=len(entries),
            delivered=delivered,
            remaining=len(self.outbox),
        )
        return delivered

    async def start_continuous_processing(self, interval_seconds: int = 30):
        """
        Start continuous processing of the outbox.

        Args:
            interval_seconds: Interval between batches
        """
        logger.info("Starting notification retry worker", interval_seconds=interval_seconds)
        self.is_running = True

        while self.is_running:
            try:
                await self.process_pending()
            except Exception as e:
                logger.error(
                    "Error in notification retry processing", error=str(e), exc_info=True
                )
            await asyncio.sleep(interval_seconds)

    def stop_continuous_processing(self):
        """Stop continuous processing."""
        logger.info("Stopping notification retry worker")
        self.is_running = False

    def get_stats(self) -> dict:
        """Get worker statistics."""
        return {
            "is_running": self.is_running,
            "total_delivered": self.delivered_count,
            "total_errors": self.error_count,
            "total_dropped": self.dropped_count,
            "queued": len(self.outbox),
        }
