"""
Payment gateway factory.
"""

from typing import Callable, Dict, Optional

from repairconnect.application.interfaces.gateways import PaymentGatewayInterface
from repairconnect.config.logging import get_logger
from repairconnect.config.settings import settings
from repairconnect.infrastructure.payments.manual import ManualPaymentGateway
from repairconnect.infrastructure.payments.stripe_gateway import StripePaymentGateway

logger = get_logger(__name__)


class PaymentGatewayFactory:
    """Chooses the payment gateway for this deployment."""

    def __init__(self):
        self._gateways: Dict[str, Callable[[], PaymentGatewayInterface]] = {
            "stripe": StripePaymentGateway,
            "manual": ManualPaymentGateway,
        }

    def create_gateway(self, name: Optional[str] = None) -> PaymentGatewayInterface:
        """Create the named gateway, or pick one from configuration."""
        if name is None:
            name = "stripe" if settings.payment_gateway_configured else "manual"

        gateway_class = self._gateways.get(name)
        if not gateway_class:
            raise ValueError(f"Payment gateway '{name}' not supported")

        gateway = gateway_class()
        logger.info("Payment gateway selected", gateway=gateway.name, live=gateway.is_live)
        return gateway

    def register_gateway(
        self, name: str, gateway_class: Callable[[], PaymentGatewayInterface]
    ) -> None:
        self._gateways[name] = gateway_class

    def get_available_gateways(self) -> list[str]:
        return list(self._gateways.keys())


_gateway: Optional[PaymentGatewayInterface] = None


def get_payment_gateway() -> PaymentGatewayInterface:
    """Process-wide gateway, selected once."""
    global _gateway
    if _gateway is None:
        _gateway = PaymentGatewayFactory().create_gateway()
    return _gateway


def set_payment_gateway(gateway: Optional[PaymentGatewayInterface]) -> None:
    global _gateway
    _gateway = gateway
