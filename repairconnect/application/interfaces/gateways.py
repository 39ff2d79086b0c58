"""
External collaborator interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from repairconnect.domain.entities.invoice import Invoice


@dataclass
class CheckoutSession:
    """Result of asking a gateway to collect payment for an invoice."""

    invoice_id: int
    url: str
    is_debug: bool = False
    external_id: Optional[str] = None


@dataclass
class PaymentCallback:
    """A verified, translated gateway completion event."""

    event_type: str
    invoice_id: Optional[int]
    external_id: Optional[str] = None
    payment_status: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_payment_completed(self) -> bool:
        """True only once funds have actually been collected."""
        if self.event_type == "checkout.session.async_payment_succeeded":
            return True
        # Delayed methods complete the session while payment_status is still unpaid
        return (
            self.event_type == "checkout.session.completed"
            and self.payment_status == "paid"
        )


class PaymentGatewayInterface(ABC):
    """Capability interface for collecting invoice payments."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Gateway name."""
        pass

    @property
    @abstractmethod
    def is_live(self) -> bool:
        """Whether real payments can be collected."""
        pass

    @abstractmethod
    async def create_checkout_session(self, invoice: Invoice) -> CheckoutSession:
        """Create a checkout for the invoice and return where to send the payer."""
        pass

    @abstractmethod
    def verify_callback(self, payload: bytes, signature: Optional[str]) -> PaymentCallback:
        """Check callback authenticity and translate it; raise when unverifiable."""
        pass


class MediaStorageInterface(ABC):
    """Stores uploaded media and hands back a stable reference."""

    @abstractmethod
    async def store(self, data: bytes, content_type: Optional[str] = None) -> str:
        pass
