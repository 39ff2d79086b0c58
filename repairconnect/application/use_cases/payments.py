"""Payment use cases: checkout, gateway callback and the debug pay link."""

from dataclasses import dataclass
from typing import Optional

from repairconnect.application.interfaces.gateways import (
    CheckoutSession,
    PaymentGatewayInterface,
)
from repairconnect.application.interfaces.repositories import InvoiceRepositoryInterface
from repairconnect.application.use_cases.mark_invoice_paid import (
    MarkInvoicePaidUseCase,
    can_settle,
)
from repairconnect.config.logging import get_logger
from repairconnect.config.settings import settings
from repairconnect.domain.entities.invoice import Invoice
from repairconnect.domain.exceptions.workflow_error import (
    ForbiddenError,
    InvoiceAlreadyPaidError,
    NotFoundError,
)
from repairconnect.domain.value_objects.actor import Actor
from repairconnect.domain.value_objects.payment_method import PaymentMethod
from repairconnect.infrastructure.payments.debug_links import verify_debug_token

logger = get_logger(__name__)


class CreateCheckoutUseCase:
    """Use case for starting an online payment of an invoice."""

    def __init__(
        self,
        invoice_repo: InvoiceRepositoryInterface,
        gateway: PaymentGatewayInterface,
    ):
        self.invoice_repo = invoice_repo
        self.gateway = gateway

    async def execute(self, actor: Actor, invoice_id: int) -> CheckoutSession:
        """
        Ask the configured gateway for a checkout link.

        Raises:
            TransientError: gateway unreachable or timed out; nothing changed locally.
            GatewayUnavailableError: no gateway configured; confirm manually instead.
        """
        invoice = await self.invoice_repo.get_by_id(invoice_id)
        if not invoice:
            raise NotFoundError("Invoice", invoice_id)
        if actor.is_system or not can_settle(actor, invoice):
            raise ForbiddenError(
                f"Invoice {invoice_id} is not payable by this caller",
                actor_role=actor.role.value,
                invoice_id=invoice_id,
            )
        if invoice.paid:
            raise InvoiceAlreadyPaidError(invoice_id)

        session = await self.gateway.create_checkout_session(invoice)
        logger.info(
            "Checkout session created",
            invoice_id=invoice_id,
            gateway=self.gateway.name,
            is_debug=session.is_debug,
        )
        return session


@dataclass
class CallbackResult:
    """What a verified gateway callback led to."""

    status: str
    invoice_id: Optional[int] = None
    event_type: Optional[str] = None


class HandlePaymentCallbackUseCase:
    """Use case for applying a gateway completion event."""

    def __init__(
        self,
        gateway: PaymentGatewayInterface,
        mark_paid: MarkInvoicePaidUseCase,
    ):
        self.gateway = gateway
        self.mark_paid = mark_paid

    async def execute(self, payload: bytes, signature: Optional[str]) -> CallbackResult:
        # Raises CallbackVerificationError; nothing is applied unverified
        event = self.gateway.verify_callback(payload, signature)

        if not event.is_payment_completed:
            logger.debug("Ignoring gateway event", event_type=event.event_type)
            return CallbackResult(status="ignored", event_type=event.event_type)

        if event.invoice_id is None:
            logger.warning(
                "Completed checkout without invoice correlation",
                event_type=event.event_type,
                external_id=event.external_id,
            )
            return CallbackResult(status="ignored", event_type=event.event_type)

        try:
            await self.mark_paid.execute(
                Actor.system(), event.invoice_id, PaymentMethod.GATEWAY
            )
        except InvoiceAlreadyPaidError:
            # Gateways redeliver; an already-settled invoice is acknowledged
            logger.info("Duplicate payment callback", invoice_id=event.invoice_id)
            return CallbackResult(
                status="duplicate", invoice_id=event.invoice_id, event_type=event.event_type
            )
        except NotFoundError:
            logger.warning(
                "Payment callback for unknown invoice", invoice_id=event.invoice_id
            )
            return CallbackResult(
                status="ignored", invoice_id=event.invoice_id, event_type=event.event_type
            )

        return CallbackResult(
            status="paid", invoice_id=event.invoice_id, event_type=event.event_type
        )


class DebugPayUseCase:
    """Local-testing shortcut that settles an invoice from a debug link."""

    def __init__(self, mark_paid: MarkInvoicePaidUseCase):
        self.mark_paid = mark_paid

    async def execute(self, invoice_id: int, token: Optional[str]) -> Invoice:
        if not settings.debug_payments_allowed:
            logger.warning("Debug payment refused", invoice_id=invoice_id)
            raise ForbiddenError("Debug payments are disabled in this environment")

        if not verify_debug_token(invoice_id, token):
            logger.warning("Debug payment with bad token", invoice_id=invoice_id)
            raise ForbiddenError("Invalid debug payment token", invoice_id=invoice_id)

        return await self.mark_paid.execute(
            Actor.system(), invoice_id, PaymentMethod.DEBUG
        )
