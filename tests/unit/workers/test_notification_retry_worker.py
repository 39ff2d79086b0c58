"""
Unit tests for NotificationRetryWorker.
"""

from unittest.mock import MagicMock

import pytest

from repairconnect.application.services.notification_outbox import (
    NotificationOutbox,
    PendingNotification,
)
from repairconnect.background.workers.notification_retry_worker import (
    NotificationRetryWorker,
)
from repairconnect.domain.entities.notification import Notification
from repairconnect.domain.value_objects.notification_type import NotificationType


def pending(attempts: int = 1) -> PendingNotification:
    return PendingNotification(
        notification=Notification(
            user_id=1, type=NotificationType.INVOICE, payload={"invoiceId": 3}
        ),
        attempts=attempts,
    )


@pytest.fixture
def failing_session_factory():
    return MagicMock(side_effect=RuntimeError("database unavailable"))


class TestNotificationRetryWorker:
    @pytest.mark.asyncio
    async def test_empty_outbox(self, failing_session_factory):
        worker = NotificationRetryWorker(failing_session_factory, NotificationOutbox(10))

        assert await worker.process_pending() == 0
        failing_session_factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_failed_retry_is_requeued(self, failing_session_factory):
        outbox = NotificationOutbox(10)
        outbox.enqueue(pending())
        worker = NotificationRetryWorker(failing_session_factory, outbox, max_retries=3)

        assert await worker.process_pending() == 0

        [entry] = outbox.drain()
        assert entry.attempts == 2
        assert entry.last_error == "database unavailable"
        assert worker.get_stats()["total_errors"] == 1

    @pytest.mark.asyncio
    async def test_dropped_after_max_retries(self, failing_session_factory):
        outbox = NotificationOutbox(10)
        outbox.enqueue(pending(attempts=3))
        worker = NotificationRetryWorker(failing_session_factory, outbox, max_retries=3)

        await worker.process_pending()

        assert len(outbox) == 0
        assert worker.get_stats()["total_dropped"] == 1

    def test_stop(self, failing_session_factory):
        worker = NotificationRetryWorker(failing_session_factory, NotificationOutbox(10))
        worker.is_running = True

        worker.stop_continuous_processing()

        assert worker.get_stats()["is_running"] is False

    def test_keeps_the_given_empty_outbox(self, failing_session_factory):
        outbox = NotificationOutbox(10)

        worker = NotificationRetryWorker(failing_session_factory, outbox, max_retries=0)

        assert worker.outbox is outbox
        assert worker.max_retries == 0

    @pytest.mark.asyncio
    async def test_zero_retries_drops_on_first_failure(self, failing_session_factory):
        outbox = NotificationOutbox(10)
        outbox.enqueue(pending(attempts=0))
        worker = NotificationRetryWorker(failing_session_factory, outbox, max_retries=0)

        await worker.process_pending()

        assert len(outbox) == 0
        assert worker.get_stats()["total_dropped"] == 1
