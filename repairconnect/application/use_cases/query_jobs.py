"""Service request read use cases."""

from dataclasses import dataclass, field
from typing import List

from repairconnect.application.interfaces.repositories import (
    InvoiceRepositoryInterface,
    JobUpdateRepositoryInterface,
    ServiceRequestRepositoryInterface,
)
from repairconnect.domain.entities.invoice import Invoice
from repairconnect.domain.entities.job_update import JobUpdate
from repairconnect.domain.entities.service_request import ServiceRequest
from repairconnect.domain.exceptions.workflow_error import ForbiddenError, NotFoundError
from repairconnect.domain.state_machine import is_party_to
from repairconnect.domain.value_objects.actor import Actor


@dataclass
class JobDetail:
    """A request together with its feed and invoices."""

    request: ServiceRequest
    updates: List[JobUpdate] = field(default_factory=list)
    invoices: List[Invoice] = field(default_factory=list)


class ListJobsUseCase:
    """Role-scoped job listings."""

    def __init__(self, request_repo: ServiceRequestRepositoryInterface):
        self.request_repo = request_repo

    async def list_open(self, actor: Actor, limit: int = 100) -> List[ServiceRequest]:
        """Unclaimed pending requests, for providers to pick from."""
        if not (actor.is_provider or actor.is_admin):
            raise ForbiddenError(
                "Only providers can browse open requests", actor_role=actor.role.value
            )
        return await self.request_repo.list_open(limit=limit)

    async def list_mine(self, actor: Actor) -> List[ServiceRequest]:
        """Requests the actor owns (customer), works (provider) or all (admin)."""
        if actor.is_customer:
            return await self.request_repo.list_by_customer(actor.id)
        if actor.is_provider:
            return await self.request_repo.list_by_provider(actor.id)
        if actor.is_admin:
            return await self.request_repo.list_all()
        raise ForbiddenError("No job listing for this caller", actor_role=actor.role.value)


class GetJobDetailUseCase:
    """Fetch one request with its updates and invoices."""

    def __init__(
        self,
        request_repo: ServiceRequestRepositoryInterface,
        update_repo: JobUpdateRepositoryInterface,
        invoice_repo: InvoiceRepositoryInterface,
    ):
        self.request_repo = request_repo
        self.update_repo = update_repo
        self.invoice_repo = invoice_repo

    async def execute(self, actor: Actor, request_id: int) -> JobDetail:
        request = await self.request_repo.get_by_id(request_id)
        if not request:
            raise NotFoundError("ServiceRequest", request_id)
        if not is_party_to(actor, request):
            raise ForbiddenError(
                f"Request {request_id} is not visible to this caller",
                actor_role=actor.role.value,
                request_id=request_id,
            )

        return JobDetail(
            request=request,
            updates=await self.update_repo.list_by_request(request_id),
            invoices=await self.invoice_repo.list_by_request(request_id),
        )
