"""
Invoice issued domain event.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List

from repairconnect.domain.value_objects.notification_type import NotificationType


@dataclass
class InvoiceIssued:
    """Event raised when a provider bills a completed job."""

    invoice_id: int
    request_id: int
    customer_id: int
    amount: Decimal
    currency: str

    notification_type = NotificationType.INVOICE

    def recipients(self) -> List[int]:
        return [self.customer_id]

    def to_payload(self) -> Dict[str, Any]:
        return {
            "invoiceId": self.invoice_id,
            "requestId": self.request_id,
            "amount": str(self.amount),
            "currency": self.currency,
        }
