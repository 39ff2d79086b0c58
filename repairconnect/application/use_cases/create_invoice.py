"""Create invoice use case."""

from dataclasses import dataclass
from typing import Any, Optional

from repairconnect.application.interfaces.repositories import (
    InvoiceRepositoryInterface,
    ServiceRequestRepositoryInterface,
)
from repairconnect.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from repairconnect.config.logging import get_logger
from repairconnect.config.settings import settings
from repairconnect.domain.entities.invoice import Invoice
from repairconnect.domain.events.invoice_issued import InvoiceIssued
from repairconnect.domain.exceptions.workflow_error import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
)
from repairconnect.domain.value_objects.actor import Actor
from repairconnect.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from repairconnect.infrastructure.monitoring.metrics import (
    record_invoice_created,
    record_notification,
)

logger = get_logger(__name__)


@dataclass
class CreateInvoiceRequest:
    """Request for billing a finished job."""

    actor: Actor
    request_id: int
    amount: Any
    currency: Optional[str] = None
    notes: Optional[str] = None


class CreateInvoiceUseCase:
    """
    Use case for the assigned provider invoicing a ``done`` request.

    The invoice and the customer's ``invoice`` notification are committed
    together: either both are visible or neither is.
    """

    def __init__(
        self,
        request_repo: ServiceRequestRepositoryInterface,
        invoice_repo: InvoiceRepositoryInterface,
        dispatcher: NotificationDispatcher,
        transaction_service: TransactionService,
    ):
        self.request_repo = request_repo
        self.invoice_repo = invoice_repo
        self.dispatcher = dispatcher
        self.transaction_service = transaction_service

    async def execute(self, request: CreateInvoiceRequest) -> Invoice:
        service_request = await self.request_repo.get_by_id(request.request_id)
        if not service_request:
            raise NotFoundError("ServiceRequest", request.request_id)

        if not (
            request.actor.is_provider
            and service_request.is_assigned_to(request.actor.id)
        ):
            raise ForbiddenError(
                "Only the assigned provider can invoice this request",
                actor_role=request.actor.role.value,
                request_id=request.request_id,
            )

        if not service_request.status.can_be_invoiced():
            raise ConflictError(
                f"Request {request.request_id} must be done before it can be invoiced",
                {
                    "request_id": request.request_id,
                    "current_status": service_request.status.value,
                    "required_status": "done",
                },
            )

        # Amount and currency are validated here
        invoice = Invoice(
            request_id=service_request.id,
            provider_id=service_request.assigned_provider_id,
            customer_id=service_request.customer_id,
            amount=request.amount,
            currency=request.currency or settings.INVOICE_DEFAULT_CURRENCY,
            notes=request.notes,
        )

        async def _create():
            created = await self.invoice_repo.create(invoice)
            notifications = await self.dispatcher.stage(
                InvoiceIssued(
                    invoice_id=created.id,
                    request_id=created.request_id,
                    customer_id=created.customer_id,
                    amount=created.amount,
                    currency=created.currency,
                )
            )
            return created, notifications

        created, notifications = await self.transaction_service.execute_in_transaction(
            _create
        )

        record_invoice_created(created.currency)
        for notification in notifications:
            record_notification(notification.type.value, "success")
        logger.info(
            "Invoice issued",
            invoice_id=created.id,
            request_id=created.request_id,
            provider_id=created.provider_id,
            customer_id=created.customer_id,
            amount=str(created.amount),
            currency=created.currency,
        )
        return created
