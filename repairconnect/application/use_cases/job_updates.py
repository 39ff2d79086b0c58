"""Update feed use cases."""

from dataclasses import dataclass
from typing import List, Optional

from repairconnect.application.interfaces.repositories import (
    JobUpdateRepositoryInterface,
    ServiceRequestRepositoryInterface,
)
from repairconnect.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from repairconnect.config.logging import get_logger
from repairconnect.domain.entities.job_update import JobUpdate
from repairconnect.domain.events.job_update_posted import JobUpdatePosted
from repairconnect.domain.exceptions.workflow_error import ForbiddenError, NotFoundError
from repairconnect.domain.value_objects.actor import Actor
from repairconnect.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)

logger = get_logger(__name__)


@dataclass
class PostJobUpdateRequest:
    """A progress note from the assigned provider."""

    actor: Actor
    request_id: int
    message: Optional[str] = None
    image_url: Optional[str] = None


class PostJobUpdateUseCase:
    """Use case for posting to a job's update feed. Status is not affected."""

    def __init__(
        self,
        request_repo: ServiceRequestRepositoryInterface,
        update_repo: JobUpdateRepositoryInterface,
        dispatcher: NotificationDispatcher,
        transaction_service: TransactionService,
    ):
        self.request_repo = request_repo
        self.update_repo = update_repo
        self.dispatcher = dispatcher
        self.transaction_service = transaction_service

    async def execute(self, request: PostJobUpdateRequest) -> JobUpdate:
        service_request = await self.request_repo.get_by_id(request.request_id)
        if not service_request:
            raise NotFoundError("ServiceRequest", request.request_id)

        if not (
            request.actor.is_provider
            and service_request.is_assigned_to(request.actor.id)
        ):
            raise ForbiddenError(
                "Only the assigned provider can post updates",
                actor_role=request.actor.role.value,
                request_id=request.request_id,
            )

        update = JobUpdate(
            request_id=service_request.id,
            provider_id=request.actor.id,
            message=request.message,
            image_url=request.image_url,
        )
        created = await self.transaction_service.execute_in_transaction(
            lambda: self.update_repo.create(update)
        )

        logger.info(
            "Job update posted",
            request_id=created.request_id,
            update_id=created.id,
            has_image=bool(created.image_url),
        )

        await self.dispatcher.dispatch(
            JobUpdatePosted(
                request_id=created.request_id,
                customer_id=service_request.customer_id,
                message=created.message,
                image_url=created.image_url,
            )
        )
        return created


class ListJobUpdatesUseCase:
    """Feed entries for a request the caller can see."""

    def __init__(
        self,
        request_repo: ServiceRequestRepositoryInterface,
        update_repo: JobUpdateRepositoryInterface,
    ):
        self.request_repo = request_repo
        self.update_repo = update_repo

    async def execute(self, actor: Actor, request_id: int) -> List[JobUpdate]:
        service_request = await self.request_repo.get_by_id(request_id)
        if not service_request:
            raise NotFoundError("ServiceRequest", request_id)

        if not (
            actor.is_admin
            or service_request.is_owned_by(actor.id)
            or service_request.is_assigned_to(actor.id)
        ):
            raise ForbiddenError(
                f"Updates for request {request_id} are not visible to this caller",
                actor_role=actor.role.value,
                request_id=request_id,
            )
        return await self.update_repo.list_by_request(request_id)
