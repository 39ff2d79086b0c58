"""
Job status transition use case.

Every status change goes through ``TransitionJobUseCase.execute``: the
transition table is consulted, the write is applied conditionally on the
status that was read, and the counterpart party is notified afterwards.
"""

from datetime import datetime, timezone
from typing import Optional, Union

from repairconnect.application.interfaces.repositories import (
    ServiceRequestRepositoryInterface,
)
from repairconnect.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from repairconnect.config.logging import get_logger
from repairconnect.domain.entities.service_request import ServiceRequest
from repairconnect.domain.events.job_status_changed import JobStatusChanged
from repairconnect.domain.exceptions.workflow_error import (
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
)
from repairconnect.domain.state_machine import authorize_transition
from repairconnect.domain.value_objects.actor import Actor
from repairconnect.domain.value_objects.job_status import JobStatus
from repairconnect.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from repairconnect.infrastructure.monitoring.metrics import (
    record_rejected_transition,
    record_transition,
)

logger = get_logger(__name__)


class TransitionJobUseCase:
    """Use case for moving a service request through its lifecycle."""

    def __init__(
        self,
        request_repo: ServiceRequestRepositoryInterface,
        dispatcher: NotificationDispatcher,
        transaction_service: TransactionService,
    ):
        self.request_repo = request_repo
        self.dispatcher = dispatcher
        self.transaction_service = transaction_service

    async def execute(
        self, actor: Actor, request_id: int, target: Union[JobStatus, str]
    ) -> ServiceRequest:
        """
        Move request ``request_id`` to ``target`` on behalf of ``actor``.

        Raises:
            ValidationError: unknown target status.
            NotFoundError: no such request.
            ForbiddenError: actor is not a party to the request.
            InvalidTransitionError: move not allowed from the stored status,
                including losing a race to another writer.
        """
        target = JobStatus.parse(target)

        request = await self.request_repo.get_by_id(request_id)
        if not request:
            raise NotFoundError("ServiceRequest", request_id)

        try:
            assign_provider_id = authorize_transition(actor, request, target)
        except (ForbiddenError, InvalidTransitionError) as e:
            record_rejected_transition(type(e).__name__)
            logger.info(
                "Status transition rejected",
                request_id=request_id,
                actor_id=actor.id,
                actor_role=actor.role.value,
                current_status=request.status.value,
                requested_status=target.value,
                reason=type(e).__name__,
            )
            raise

        if actor.is_admin:
            logger.warning(
                "Admin status override",
                request_id=request_id,
                actor_id=actor.id,
                current_status=request.status.value,
                requested_status=target.value,
            )

        updated = await self.transaction_service.execute_in_transaction(
            lambda: self._apply(actor, request, target, assign_provider_id)
        )

        record_transition(target.value, actor.role.value)
        logger.info(
            "Service request status changed",
            request_id=request_id,
            previous_status=request.status.value,
            new_status=updated.status.value,
            actor_id=actor.id,
            actor_role=actor.role.value,
            assigned_provider_id=updated.assigned_provider_id,
        )

        await self.dispatcher.dispatch(
            JobStatusChanged(
                request_id=updated.id,
                previous_status=request.status,
                new_status=updated.status,
                actor_id=actor.id,
                actor_role=actor.role,
                customer_id=updated.customer_id,
                assigned_provider_id=updated.assigned_provider_id,
                changed_at=updated.updated_at or datetime.now(timezone.utc),
            )
        )
        return updated

    async def _apply(
        self,
        actor: Actor,
        request: ServiceRequest,
        target: JobStatus,
        assign_provider_id: Optional[int],
    ) -> ServiceRequest:
        applied = await self.request_repo.transition_status(
            request.id, request.status, target, assign_provider_id=assign_provider_id
        )
        current = await self.request_repo.get_by_id(request.id)
        if current is None:
            raise NotFoundError("ServiceRequest", request.id)

        if not applied:
            # Someone else changed the request between our read and write
            record_rejected_transition("ConcurrentModification")
            logger.info(
                "Status transition lost a concurrent update",
                request_id=request.id,
                observed_status=request.status.value,
                stored_status=current.status.value,
                requested_status=target.value,
            )
            raise InvalidTransitionError(
                current.status.value, target.value, actor_role=actor.role.value
            )
        return current

    async def take(self, actor: Actor, request_id: int) -> ServiceRequest:
        """Claim an unassigned pending request."""
        return await self.execute(actor, request_id, JobStatus.TAKEN)

    async def start(self, actor: Actor, request_id: int) -> ServiceRequest:
        """Start or resume work."""
        return await self.execute(actor, request_id, JobStatus.ONGOING)

    async def pause(self, actor: Actor, request_id: int) -> ServiceRequest:
        return await self.execute(actor, request_id, JobStatus.PAUSED)

    async def finish(self, actor: Actor, request_id: int) -> ServiceRequest:
        return await self.execute(actor, request_id, JobStatus.DONE)

    async def close(self, actor: Actor, request_id: int) -> ServiceRequest:
        """Archive a finished job; the sweep deletes it later."""
        return await self.execute(actor, request_id, JobStatus.CLOSED)

    async def cancel(self, actor: Actor, request_id: int) -> ServiceRequest:
        return await self.execute(actor, request_id, JobStatus.CANCELLED)
