"""
Invoice repository implementation.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import and_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from repairconnect.application.interfaces.repositories import InvoiceRepositoryInterface
from repairconnect.config.logging import get_logger
from repairconnect.domain.entities.invoice import Invoice
from repairconnect.domain.value_objects.payment_method import PaymentMethod
from repairconnect.infrastructure.database.models.base import as_utc
from repairconnect.infrastructure.database.models.invoice import InvoiceModel

logger = get_logger(__name__)


class InvoiceRepository(InvoiceRepositoryInterface):
    """Invoice repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, invoice: Invoice) -> Invoice:
        """Create a new invoice."""
        model = InvoiceModel(
            request_id=invoice.request_id,
            provider_id=invoice.provider_id,
            customer_id=invoice.customer_id,
            amount=invoice.amount,
            currency=invoice.currency,
            notes=invoice.notes,
            paid=invoice.paid,
            paid_at=invoice.paid_at,
            paid_via=invoice.paid_via.value if invoice.paid_via else None,
            created_at=invoice.created_at,
        )

        self.db.add(model)
        await self.db.flush()
        await self.db.refresh(model)

        logger.info(
            "Invoice created", invoice_id=model.id, request_id=invoice.request_id
        )
        return self._model_to_entity(model)

    async def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        """Get invoice by ID."""
        stmt = (
            select(InvoiceModel)
            .where(InvoiceModel.id == invoice_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def mark_paid(
        self, invoice_id: int, method: PaymentMethod, paid_at: datetime
    ) -> bool:
        """Flip paid exactly once; a second caller sees False."""
        stmt = (
            update(InvoiceModel)
            .where(and_(InvoiceModel.id == invoice_id, InvoiceModel.paid.is_(False)))
            .values(paid=True, paid_at=paid_at, paid_via=method.value)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        await self.db.flush()
        return result.rowcount == 1

    async def list_by_provider(
        self, provider_id: int, paid: Optional[bool] = None
    ) -> List[Invoice]:
        return await self._list(InvoiceModel.provider_id == provider_id, paid)

    async def list_by_customer(
        self, customer_id: int, paid: Optional[bool] = None
    ) -> List[Invoice]:
        return await self._list(InvoiceModel.customer_id == customer_id, paid)

    async def list_all(self, paid: Optional[bool] = None) -> List[Invoice]:
        return await self._list(None, paid)

    async def list_by_request(self, request_id: int) -> List[Invoice]:
        return await self._list(InvoiceModel.request_id == request_id, None)

    async def _list(self, owner_clause, paid: Optional[bool]) -> List[Invoice]:
        conditions = []
        if owner_clause is not None:
            conditions.append(owner_clause)
        if paid is not None:
            conditions.append(InvoiceModel.paid.is_(paid))

        stmt = select(InvoiceModel).order_by(
            InvoiceModel.created_at.desc(), InvoiceModel.id.desc()
        )
        if conditions:
            stmt = stmt.where(and_(*conditions))

        result = await self.db.execute(stmt.execution_options(populate_existing=True))
        models = result.scalars().all()

        return [self._model_to_entity(model) for model in models]

    def _model_to_entity(self, model: InvoiceModel) -> Invoice:
        """Convert SQLAlchemy model to domain entity."""
        return Invoice(
            id=model.id,
            request_id=model.request_id,
            provider_id=model.provider_id,
            customer_id=model.customer_id,
            amount=model.amount,
            currency=model.currency,
            notes=model.notes,
            paid=model.paid,
            paid_at=as_utc(model.paid_at),
            paid_via=model.paid_via,
            created_at=as_utc(model.created_at),
        )
