"""Edit service request use case."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from repairconnect.application.interfaces.repositories import (
    ServiceRequestRepositoryInterface,
)
from repairconnect.config.logging import get_logger
from repairconnect.domain.entities.service_request import (
    EDITABLE_FIELDS,
    ServiceRequest,
)
from repairconnect.domain.exceptions.validation_error import ValidationError
from repairconnect.domain.exceptions.workflow_error import (
    ForbiddenError,
    NotFoundError,
    StaleRequestError,
)
from repairconnect.domain.value_objects.actor import Actor
from repairconnect.infrastructure.database.models.base import as_utc
from repairconnect.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)

logger = get_logger(__name__)


@dataclass
class EditServiceRequestRequest:
    """Owner edit of a pending request."""

    actor: Actor
    request_id: int
    changes: Dict[str, Any] = field(default_factory=dict)
    expected_updated_at: Optional[datetime] = None


class EditServiceRequestUseCase:
    """Use case for the owning customer editing a request before it is claimed."""

    def __init__(
        self,
        request_repo: ServiceRequestRepositoryInterface,
        transaction_service: TransactionService,
    ):
        self.request_repo = request_repo
        self.transaction_service = transaction_service

    async def execute(self, request: EditServiceRequestRequest) -> ServiceRequest:
        unknown = set(request.changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(
                "Only the request details can be edited",
                {"fields": sorted(unknown), "editable": list(EDITABLE_FIELDS)},
            )
        if not request.changes:
            raise ValidationError(
                "Nothing to update", {"editable": list(EDITABLE_FIELDS)}
            )

        current = await self.request_repo.get_by_id(request.request_id)
        if not current:
            raise NotFoundError("ServiceRequest", request.request_id)

        if not current.is_owned_by(request.actor.id) or not request.actor.is_customer:
            raise ForbiddenError(
                "Only the customer who opened the request can edit it",
                actor_role=request.actor.role.value,
                request_id=request.request_id,
            )
        self._ensure_editable(current)

        if request.expected_updated_at is not None and as_utc(
            request.expected_updated_at
        ) != as_utc(current.updated_at):
            raise StaleRequestError(
                current.id, request.expected_updated_at, current.updated_at
            )

        changes = dict(request.changes)
        for name in ("title", "category"):
            if isinstance(changes.get(name), str):
                changes[name] = changes[name].strip()

        ServiceRequest.validate_details(
            changes.get("title", current.title),
            changes.get("category", current.category),
            changes.get("description", current.description),
            changes.get("preferred_timezone", current.preferred_timezone),
        )

        updated = await self.transaction_service.execute_in_transaction(
            lambda: self._apply(current, changes)
        )

        logger.info(
            "Service request edited",
            request_id=updated.id,
            fields=sorted(changes),
        )
        return updated

    async def _apply(self, current: ServiceRequest, changes: Dict[str, Any]) -> ServiceRequest:
        applied = await self.request_repo.update_details(
            current.id, changes, expected_updated_at=current.updated_at
        )
        latest = await self.request_repo.get_by_id(current.id)
        if latest is None:
            raise NotFoundError("ServiceRequest", current.id)

        if not applied:
            self._ensure_editable(latest)
            raise StaleRequestError(current.id, current.updated_at, latest.updated_at)
        return latest

    @staticmethod
    def _ensure_editable(request: ServiceRequest) -> None:
        if not request.status.is_editable():
            raise ForbiddenError(
                f"Request {request.id} can only be edited while pending",
                current_status=request.status.value,
                request_id=request.id,
            )
