"""
Invoice and payment API schemas.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, Field

from repairconnect.domain.entities.invoice import Invoice


class InvoiceCreateRequest(BaseModel):
    """Invoice creation schema."""

    request_id: int
    # Checked by the domain so malformed amounts get the same 400 as missing ones
    amount: Optional[Union[Decimal, str]] = None
    currency: Optional[str] = Field(None, description="ISO 4217 code, defaults to USD")
    notes: Optional[str] = None


class InvoiceResponse(BaseModel):
    """Invoice response schema."""

    id: int
    request_id: int
    provider_id: int
    customer_id: int
    amount: Decimal
    currency: str
    notes: Optional[str] = None
    paid: bool
    paid_at: Optional[datetime] = None
    paid_via: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, invoice: Invoice) -> "InvoiceResponse":
        return cls(
            id=invoice.id,
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


class CheckoutResponse(BaseModel):
    invoice_id: int
    url: str
    is_debug: bool = False


class WebhookAckResponse(BaseModel):
    received: bool = True
    status: str
    invoice_id: Optional[int] = None
