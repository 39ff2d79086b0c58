"""Create service request use case."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from repairconnect.application.interfaces.repositories import (
    ServiceRequestRepositoryInterface,
)
from repairconnect.config.logging import get_logger
from repairconnect.domain.entities.service_request import ServiceRequest
from repairconnect.domain.exceptions.workflow_error import ForbiddenError
from repairconnect.domain.value_objects.actor import Actor
from repairconnect.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)

logger = get_logger(__name__)


@dataclass
class CreateServiceRequestRequest:
    """Request for creating a service request."""

    actor: Actor
    title: str
    category: str
    description: str
    preferred_at: Optional[datetime] = None
    preferred_timezone: Optional[str] = None


class CreateServiceRequestUseCase:
    """Use case for a customer opening a new repair job."""

    def __init__(
        self,
        request_repo: ServiceRequestRepositoryInterface,
        transaction_service: TransactionService,
    ):
        self.request_repo = request_repo
        self.transaction_service = transaction_service

    async def execute(self, request: CreateServiceRequestRequest) -> ServiceRequest:
        if not request.actor.is_customer:
            raise ForbiddenError(
                "Only customers can open service requests",
                actor_role=request.actor.role.value,
            )

        # Validates title, category, description and timezone
        service_request = ServiceRequest(
            title=request.title.strip() if request.title else request.title,
            category=request.category.strip() if request.category else request.category,
            description=request.description,
            customer_id=request.actor.id,
            preferred_at=request.preferred_at,
            preferred_timezone=request.preferred_timezone,
        )

        created = await self.transaction_service.execute_in_transaction(
            lambda: self.request_repo.create(service_request)
        )

        logger.info(
            "Service request opened",
            request_id=created.id,
            customer_id=created.customer_id,
            category=created.category,
        )
        return created
