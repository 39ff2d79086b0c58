"""Mark invoice paid use case."""

from datetime import datetime, timezone

from repairconnect.application.interfaces.repositories import InvoiceRepositoryInterface
from repairconnect.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from repairconnect.config.logging import get_logger
from repairconnect.domain.entities.invoice import Invoice
from repairconnect.domain.events.invoice_paid import InvoicePaid
from repairconnect.domain.exceptions.workflow_error import (
    ForbiddenError,
    InvoiceAlreadyPaidError,
    NotFoundError,
)
from repairconnect.domain.value_objects.actor import Actor
from repairconnect.domain.value_objects.payment_method import PaymentMethod
from repairconnect.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from repairconnect.infrastructure.monitoring.metrics import record_invoice_paid

logger = get_logger(__name__)


def can_settle(actor: Actor, invoice: Invoice) -> bool:
    """Customer, provider, admin or an internal caller may settle an invoice."""
    if actor.is_admin or actor.is_system:
        return True
    if actor.is_customer:
        return invoice.customer_id == actor.id
    if actor.is_provider:
        return invoice.provider_id == actor.id
    return False


class MarkInvoicePaidUseCase:
    """Use case for settling an invoice exactly once."""

    def __init__(
        self,
        invoice_repo: InvoiceRepositoryInterface,
        dispatcher: NotificationDispatcher,
        transaction_service: TransactionService,
    ):
        self.invoice_repo = invoice_repo
        self.dispatcher = dispatcher
        self.transaction_service = transaction_service

    async def execute(
        self,
        actor: Actor,
        invoice_id: int,
        method: PaymentMethod = PaymentMethod.MANUAL,
    ) -> Invoice:
        """
        Mark the invoice paid.

        Raises:
            NotFoundError: no such invoice.
            ForbiddenError: actor is not a party to the invoice.
            InvoiceAlreadyPaidError: the invoice was already settled, possibly
                by a concurrent caller.
        """
        invoice = await self.invoice_repo.get_by_id(invoice_id)
        if not invoice:
            raise NotFoundError("Invoice", invoice_id)

        if not can_settle(actor, invoice):
            raise ForbiddenError(
                f"Invoice {invoice_id} cannot be settled by this caller",
                actor_role=actor.role.value,
                invoice_id=invoice_id,
            )

        # Raises InvoiceAlreadyPaidError before touching storage
        invoice.mark_paid(method, datetime.now(timezone.utc))

        async def _mark():
            applied = await self.invoice_repo.mark_paid(
                invoice_id, method, invoice.paid_at
            )
            if not applied:
                raise InvoiceAlreadyPaidError(invoice_id)
            return await self.invoice_repo.get_by_id(invoice_id)

        paid = await self.transaction_service.execute_in_transaction(_mark)

        record_invoice_paid(method.value)
        logger.info(
            "Invoice paid",
            invoice_id=invoice_id,
            request_id=paid.request_id,
            paid_via=method.value,
            actor_id=actor.id,
            actor_role=actor.role.value,
        )

        await self.dispatcher.dispatch(
            InvoicePaid(
                invoice_id=paid.id,
                request_id=paid.request_id,
                provider_id=paid.provider_id,
                amount=paid.amount,
            )
        )
        return paid
