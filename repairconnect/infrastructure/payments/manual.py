"""
Payment gateway used when no online gateway is configured.
"""

from typing import Optional

from repairconnect.application.interfaces.gateways import (
    CheckoutSession,
    PaymentCallback,
    PaymentGatewayInterface,
)
from repairconnect.config.logging import get_logger
from repairconnect.config.settings import settings
from repairconnect.domain.entities.invoice import Invoice
from repairconnect.domain.exceptions.gateway_error import (
    CallbackVerificationError,
    GatewayUnavailableError,
)
from repairconnect.infrastructure.payments.debug_links import (
    build_debug_url,
    manual_confirmation_path,
)

logger = get_logger(__name__)


class ManualPaymentGateway(PaymentGatewayInterface):
    """
    Offline payment path.

    Checkout either fails with manual-confirmation instructions or, when debug
    payments are explicitly enabled outside production, returns a link that
    settles the invoice directly.
    """

    def __init__(self, debug_enabled: bool = None):
        self.debug_enabled = (
            settings.debug_payments_allowed if debug_enabled is None else debug_enabled
        )

    @property
    def name(self) -> str:
        return "debug" if self.debug_enabled else "manual"

    @property
    def is_live(self) -> bool:
        return False

    async def create_checkout_session(self, invoice: Invoice) -> CheckoutSession:
        if not self.debug_enabled:
            raise GatewayUnavailableError(invoice.id, manual_confirmation_path(invoice.id))

        logger.warning("Issuing debug pay link", invoice_id=invoice.id)
        return CheckoutSession(
            invoice_id=invoice.id, url=build_debug_url(invoice.id), is_debug=True
        )

    def verify_callback(self, payload: bytes, signature: Optional[str]) -> PaymentCallback:
        # Nothing can vouch for a callback without a gateway secret
        raise CallbackVerificationError(
            "No payment gateway is configured to accept callbacks"
        )
