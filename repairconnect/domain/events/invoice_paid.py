"""
Invoice paid domain event.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List

from repairconnect.domain.value_objects.notification_type import NotificationType


@dataclass
class InvoicePaid:
    """Event raised when an invoice is settled."""

    invoice_id: int
    request_id: int
    provider_id: int
    amount: Decimal

    notification_type = NotificationType.INVOICE_PAID

    def recipients(self) -> List[int]:
        return [self.provider_id]

    def to_payload(self) -> Dict[str, Any]:
        return {
            "invoiceId": self.invoice_id,
            "requestId": self.request_id,
            "amount": str(self.amount),
        }
