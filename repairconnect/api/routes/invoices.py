"""Invoice endpoints."""

from typing import List, Optional

from fastapi import APIRouter, status

from repairconnect.api.dependencies import (
    CurrentActorDep,
    InvoiceRepositoryDep,
    MarkInvoicePaidUseCaseDep,
    NotificationDispatcherDep,
    ServiceRequestRepositoryDep,
    TransactionServiceDep,
)
from repairconnect.api.schemas.common import WORKFLOW_ERROR_RESPONSES
from repairconnect.api.schemas.invoice import InvoiceCreateRequest, InvoiceResponse
from repairconnect.application.use_cases.create_invoice import (
    CreateInvoiceRequest,
    CreateInvoiceUseCase,
)
from repairconnect.application.use_cases.list_invoices import (
    GetInvoiceUseCase,
    ListInvoicesUseCase,
)
from repairconnect.domain.value_objects.payment_method import PaymentMethod

router = APIRouter(
    prefix="/invoices", tags=["invoices"], responses=WORKFLOW_ERROR_RESPONSES
)


@router.post("", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    invoice_data: InvoiceCreateRequest,
    actor: CurrentActorDep,
    request_repository: ServiceRequestRepositoryDep,
    invoice_repository: InvoiceRepositoryDep,
    dispatcher: NotificationDispatcherDep,
    transaction_service: TransactionServiceDep,
):
    """Bill a finished job (assigned provider only)."""
    use_case = CreateInvoiceUseCase(
        request_repository, invoice_repository, dispatcher, transaction_service
    )
    invoice = await use_case.execute(
        CreateInvoiceRequest(
            actor=actor,
            request_id=invoice_data.request_id,
            amount=invoice_data.amount,
            currency=invoice_data.currency,
            notes=invoice_data.notes,
        )
    )
    return InvoiceResponse.from_entity(invoice)


@router.get("", response_model=List[InvoiceResponse])
async def list_invoices(
    actor: CurrentActorDep,
    invoice_repository: InvoiceRepositoryDep,
    paid: Optional[bool] = None,
):
    """Invoices the caller issued (provider), received (customer) or all (admin)."""
    invoices = await ListInvoicesUseCase(invoice_repository).execute(actor, paid=paid)
    return [InvoiceResponse.from_entity(i) for i in invoices]


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: int,
    actor: CurrentActorDep,
    invoice_repository: InvoiceRepositoryDep,
):
    invoice = await GetInvoiceUseCase(invoice_repository).execute(actor, invoice_id)
    return InvoiceResponse.from_entity(invoice)


@router.post("/{invoice_id}/pay", response_model=InvoiceResponse)
async def mark_invoice_paid(
    invoice_id: int,
    actor: CurrentActorDep,
    use_case: MarkInvoicePaidUseCaseDep,
):
    """Confirm payment received outside the gateway."""
    invoice = await use_case.execute(actor, invoice_id, PaymentMethod.MANUAL)
    return InvoiceResponse.from_entity(invoice)
