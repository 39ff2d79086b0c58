"""
Notification repository implementation.
"""

from typing import List

from sqlalchemy import and_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from repairconnect.application.interfaces.repositories import (
    NotificationRepositoryInterface,
)
from repairconnect.config.logging import get_logger
from repairconnect.domain.entities.notification import Notification
from repairconnect.infrastructure.database.models.base import as_utc
from repairconnect.infrastructure.database.models.notification import NotificationModel

logger = get_logger(__name__)


class NotificationRepository(NotificationRepositoryInterface):
    """Notification repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, notification: Notification) -> Notification:
        """Create a new notification."""
        model = NotificationModel(
            user_id=notification.user_id,
            type=notification.type.value,
            payload=notification.payload,
            read=notification.read,
            created_at=notification.created_at,
        )

        self.db.add(model)
        await self.db.flush()
        await self.db.refresh(model)

        logger.debug(
            "Notification created",
            notification_id=model.id,
            user_id=notification.user_id,
            type=notification.type.value,
        )
        return self._model_to_entity(model)

    async def list_for_user(
        self, user_id: int, unread_only: bool = False, limit: int = 100
    ) -> List[Notification]:
        """Get a user's notifications, newest first."""
        conditions = [NotificationModel.user_id == user_id]
        if unread_only:
            conditions.append(NotificationModel.read.is_(False))

        stmt = (
            select(NotificationModel)
            .where(and_(*conditions))
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .limit(limit)
        )
        result = await self.db.execute(stmt.execution_options(populate_existing=True))
        models = result.scalars().all()

        return [self._model_to_entity(model) for model in models]

    async def mark_read(self, notification_id: int, user_id: int) -> int:
        """Mark a notification read; scoped to its owner."""
        stmt = (
            update(NotificationModel)
            .where(
                and_(
                    NotificationModel.id == notification_id,
                    NotificationModel.user_id == user_id,
                )
            )
            .values(read=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        await self.db.flush()
        return result.rowcount

    def _model_to_entity(self, model: NotificationModel) -> Notification:
        """Convert SQLAlchemy model to domain entity."""
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=model.type,
            payload=dict(model.payload or {}),
            read=model.read,
            created_at=as_utc(model.created_at),
        )
