"""Invoice domain entity."""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

from repairconnect.domain.exceptions.validation_error import (
    InvalidFormatError,
    RequiredFieldError,
    ValidationError,
)
from repairconnect.domain.exceptions.workflow_error import InvoiceAlreadyPaidError
from repairconnect.domain.value_objects.payment_method import PaymentMethod

CENTS = Decimal("0.01")
# Largest value a Numeric(12, 2) column holds
MAX_AMOUNT = Decimal("9999999999.99")


def parse_amount(value) -> Decimal:
    """Normalise a client-supplied amount to a positive two-place decimal."""
    if value is None or value == "":
        raise RequiredFieldError("amount")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidFormatError("amount", "decimal number")
    if not amount.is_finite():
        raise InvalidFormatError("amount", "decimal number")
    try:
        amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidFormatError("amount", "decimal number with at most two places")
    if amount <= 0:
        raise ValidationError(
            "Invoice amount must be greater than zero", {"field": "amount"}
        )
    if amount > MAX_AMOUNT:
        raise ValidationError(
            "Invoice amount is too large",
            {"field": "amount", "max_amount": str(MAX_AMOUNT)},
        )
    return amount


def parse_currency(value: Optional[str]) -> str:
    if not value or len(value.strip()) != 3 or not value.strip().isalpha():
        raise InvalidFormatError("currency", "three-letter ISO 4217 code")
    return value.strip().upper()


@dataclass
class Invoice:
    """Billing instrument for one completed job."""

    request_id: int
    provider_id: int
    customer_id: int
    amount: Decimal
    currency: str = "USD"
    notes: Optional[str] = None
    paid: bool = False
    paid_at: Optional[datetime] = None
    paid_via: Optional[PaymentMethod] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate invoice data."""
        self.amount = parse_amount(self.amount)
        self.currency = parse_currency(self.currency)
        if self.paid_via is not None:
            self.paid_via = PaymentMethod(self.paid_via)
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)

    def mark_paid(
        self, method: PaymentMethod, paid_at: Optional[datetime] = None
    ) -> None:
        """Mark invoice as paid; an invoice is never paid twice."""
        if self.paid:
            raise InvoiceAlreadyPaidError(self.id)

        self.paid = True
        self.paid_at = paid_at or datetime.now(timezone.utc)
        self.paid_via = method

    def is_visible_to(self, user_id: int) -> bool:
        return user_id in (self.customer_id, self.provider_id)

    @property
    def amount_minor_units(self) -> int:
        """Amount in cents, as payment gateways expect it."""
        return int((self.amount * 100).to_integral_value(rounding=ROUND_HALF_UP))
