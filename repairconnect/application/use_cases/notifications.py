"""Notification inbox use cases."""

from typing import List

from repairconnect.application.interfaces.repositories import (
    NotificationRepositoryInterface,
)
from repairconnect.config.logging import get_logger
from repairconnect.domain.entities.notification import Notification
from repairconnect.domain.value_objects.actor import Actor
from repairconnect.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)

logger = get_logger(__name__)


class ListNotificationsUseCase:
    def __init__(self, notification_repo: NotificationRepositoryInterface):
        self.notification_repo = notification_repo

    async def execute(
        self, actor: Actor, unread_only: bool = False, limit: int = 100
    ) -> List[Notification]:
        """The caller's notifications, newest first."""
        return await self.notification_repo.list_for_user(
            actor.id, unread_only=unread_only, limit=limit
        )


class MarkNotificationReadUseCase:
    """Mark one of the caller's notifications read."""

    def __init__(
        self,
        notification_repo: NotificationRepositoryInterface,
        transaction_service: TransactionService,
    ):
        self.notification_repo = notification_repo
        self.transaction_service = transaction_service

    async def execute(self, actor: Actor, notification_id: int) -> bool:
        """
        Returns whether a row changed. Someone else's notification, or one
        that does not exist, yields False rather than an error.
        """
        affected = await self.transaction_service.execute_in_transaction(
            lambda: self.notification_repo.mark_read(notification_id, actor.id)
        )
        if not affected:
            logger.debug(
                "Mark read matched nothing",
                notification_id=notification_id,
                user_id=actor.id,
            )
        return affected > 0
