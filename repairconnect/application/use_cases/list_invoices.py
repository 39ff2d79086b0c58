"""Invoice read use cases."""

from typing import List, Optional

from repairconnect.application.interfaces.repositories import InvoiceRepositoryInterface
from repairconnect.domain.entities.invoice import Invoice
from repairconnect.domain.exceptions.workflow_error import ForbiddenError, NotFoundError
from repairconnect.domain.value_objects.actor import Actor


class ListInvoicesUseCase:
    """Invoices scoped to the caller's role."""

    def __init__(self, invoice_repo: InvoiceRepositoryInterface):
        self.invoice_repo = invoice_repo

    async def execute(self, actor: Actor, paid: Optional[bool] = None) -> List[Invoice]:
        if actor.is_provider:
            return await self.invoice_repo.list_by_provider(actor.id, paid=paid)
        if actor.is_customer:
            return await self.invoice_repo.list_by_customer(actor.id, paid=paid)
        if actor.is_admin:
            return await self.invoice_repo.list_all(paid=paid)
        raise ForbiddenError("No invoice listing for this caller", actor_role=actor.role.value)


class GetInvoiceUseCase:
    """Fetch a single invoice visible to the caller."""

    def __init__(self, invoice_repo: InvoiceRepositoryInterface):
        self.invoice_repo = invoice_repo

    async def execute(self, actor: Actor, invoice_id: int) -> Invoice:
        invoice = await self.invoice_repo.get_by_id(invoice_id)
        if not invoice:
            raise NotFoundError("Invoice", invoice_id)
        if not (actor.is_admin or invoice.is_visible_to(actor.id)):
            raise ForbiddenError(
                f"Invoice {invoice_id} is not visible to this caller",
                actor_role=actor.role.value,
                invoice_id=invoice_id,
            )
        return invoice
