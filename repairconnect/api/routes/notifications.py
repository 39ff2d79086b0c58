"""Notification inbox endpoints."""

from typing import List

from fastapi import APIRouter

from repairconnect.api.dependencies import (
    CurrentActorDep,
    NotificationRepositoryDep,
    TransactionServiceDep,
)
from repairconnect.api.schemas.notification import MarkReadResponse, NotificationResponse
from repairconnect.application.use_cases.notifications import (
    ListNotificationsUseCase,
    MarkNotificationReadUseCase,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=List[NotificationResponse])
async def list_notifications(
    actor: CurrentActorDep,
    notification_repository: NotificationRepositoryDep,
    unread_only: bool = False,
    limit: int = 100,
):
    """The caller's notifications, newest first."""
    notifications = await ListNotificationsUseCase(notification_repository).execute(
        actor, unread_only=unread_only, limit=limit
    )
    return [NotificationResponse.from_entity(n) for n in notifications]


@router.post("/{notification_id}/read", response_model=MarkReadResponse)
async def mark_notification_read(
    notification_id: int,
    actor: CurrentActorDep,
    notification_repository: NotificationRepositoryDep,
    transaction_service: TransactionServiceDep,
):
    """Always 200; ``updated`` is false for notifications that are not the caller's."""
    updated = await MarkNotificationReadUseCase(
        notification_repository, transaction_service
    ).execute(actor, notification_id)
    return MarkReadResponse(updated=updated)
