"""Payment endpoints: checkout, gateway webhook and the debug pay link."""

from typing import Optional

from fastapi import APIRouter, Request

from repairconnect.api.dependencies import (
    CurrentActorDep,
    InvoiceRepositoryDep,
    MarkInvoicePaidUseCaseDep,
    PaymentGatewayDep,
)
from repairconnect.api.schemas.common import WORKFLOW_ERROR_RESPONSES
from repairconnect.api.schemas.invoice import (
    CheckoutResponse,
    InvoiceResponse,
    WebhookAckResponse,
)
from repairconnect.application.use_cases.payments import (
    CreateCheckoutUseCase,
    DebugPayUseCase,
    HandlePaymentCallbackUseCase,
)
from repairconnect.config.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(
    prefix="/payments", tags=["payments"], responses=WORKFLOW_ERROR_RESPONSES
)


@router.post("/invoices/{invoice_id}/checkout", response_model=CheckoutResponse)
async def create_checkout(
    invoice_id: int,
    actor: CurrentActorDep,
    invoice_repository: InvoiceRepositoryDep,
    gateway: PaymentGatewayDep,
):
    """Get a link where the invoice can be paid."""
    session = await CreateCheckoutUseCase(invoice_repository, gateway).execute(
        actor, invoice_id
    )
    return CheckoutResponse(
        invoice_id=session.invoice_id, url=session.url, is_debug=session.is_debug
    )


@router.post("/webhook", response_model=WebhookAckResponse)
async def payment_webhook(
    request: Request,
    gateway: PaymentGatewayDep,
    mark_paid: MarkInvoicePaidUseCaseDep,
):
    """Gateway completion callback; the signature is checked before anything is applied."""
    payload = await request.body()
    signature = request.headers.get("stripe-signature")

    result = await HandlePaymentCallbackUseCase(gateway, mark_paid).execute(
        payload, signature
    )
    return WebhookAckResponse(status=result.status, invoice_id=result.invoice_id)


@router.get("/debug/invoices/{invoice_id}/pay", response_model=InvoiceResponse)
async def debug_pay_invoice(
    invoice_id: int,
    mark_paid: MarkInvoicePaidUseCaseDep,
    token: Optional[str] = None,
):
    """Settle an invoice from a debug link. Refused unless explicitly enabled."""
    invoice = await DebugPayUseCase(mark_paid).execute(invoice_id, token)
    return InvoiceResponse.from_entity(invoice)
