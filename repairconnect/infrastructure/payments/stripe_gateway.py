"""
Stripe Checkout payment gateway.
"""

import asyncio
import json
import time
from typing import Any, Dict, Optional

import stripe

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
    PaymentGatewayError,
    TransientError,
)
from repairconnect.infrastructure.payments.debug_links import manual_confirmation_path
from repairconnect.infrastructure.monitoring.metrics import GATEWAY_REQUEST_DURATION

logger = get_logger(__name__)

INVOICE_METADATA_KEY = "invoice_id"


class StripePaymentGateway(PaymentGatewayInterface):
    """Collects invoice payments through Stripe Checkout."""

    def __init__(
        self,
        api_key: str = None,
        webhook_secret: str = None,
        timeout: float = None,
    ):
        self.api_key = api_key or settings.STRIPE_SECRET_KEY
        self.webhook_secret = webhook_secret or settings.STRIPE_WEBHOOK_SECRET
        self.timeout = timeout or settings.PAYMENT_GATEWAY_TIMEOUT_SECONDS

    @property
    def name(self) -> str:
        return "stripe"

    @property
    def is_live(self) -> bool:
        return True

    def _checkout_params(self, invoice: Invoice) -> Dict[str, Any]:
        return_url = (
            f"{settings.FRONTEND_BASE_URL.rstrip('/')}/invoices/{invoice.id}"
        )
        return {
            "mode": "payment",
            "line_items": [
                {
                    "price_data": {
                        "currency": invoice.currency.lower(),
                        "product_data": {
                            "name": f"Invoice #{invoice.id} for request #{invoice.request_id}"
                        },
                        "unit_amount": invoice.amount_minor_units,
                    },
                    "quantity": 1,
                }
            ],
            "metadata": {
                INVOICE_METADATA_KEY: str(invoice.id),
                "request_id": str(invoice.request_id),
            },
            "success_url": f"{return_url}?paid=1",
            "cancel_url": return_url,
        }

    async def create_checkout_session(self, invoice: Invoice) -> CheckoutSession:
        """Create a Checkout Session; bounded by the configured timeout."""
        params = self._checkout_params(invoice)
        start_time = time.time()

        try:
            session = await asyncio.wait_for(
                asyncio.to_thread(
                    stripe.checkout.Session.create, api_key=self.api_key, **params
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Stripe checkout timed out", invoice_id=invoice.id, timeout=self.timeout
            )
            raise TransientError(
                "Payment gateway timed out",
                retry_after=settings.PAYMENT_RETRY_AFTER_SECONDS,
                manual_path=manual_confirmation_path(invoice.id),
            )
        except (stripe.APIConnectionError, stripe.RateLimitError, stripe.APIError) as e:
            logger.warning(
                "Stripe unreachable", invoice_id=invoice.id, error=str(e)
            )
            raise TransientError(
                "Payment gateway is unreachable",
                retry_after=settings.PAYMENT_RETRY_AFTER_SECONDS,
                manual_path=manual_confirmation_path(invoice.id),
            )
        except stripe.StripeError as e:
            # Bad key, rejected parameters, unsupported currency
            logger.error(
                "Stripe rejected checkout",
                invoice_id=invoice.id,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise PaymentGatewayError(
                "Payment gateway rejected the checkout request",
                manual_path=manual_confirmation_path(invoice.id),
                gateway_code=getattr(e, "code", None),
            )
        finally:
            GATEWAY_REQUEST_DURATION.labels(
                gateway=self.name, operation="create_checkout"
            ).observe(time.time() - start_time)

        return CheckoutSession(
            invoice_id=invoice.id, url=session.url, external_id=session.id
        )

    def verify_callback(self, payload: bytes, signature: Optional[str]) -> PaymentCallback:
        """Check the Stripe-Signature header, then translate the event."""
        if not self.webhook_secret:
            raise CallbackVerificationError("Webhook secret is not configured")
        if not signature:
            raise CallbackVerificationError("Missing webhook signature")

        try:
            stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        except stripe.SignatureVerificationError:
            raise CallbackVerificationError("Invalid webhook signature")
        except ValueError:
            raise CallbackVerificationError("Malformed webhook payload")

        return self.translate_event(json.loads(payload))

    @staticmethod
    def translate_event(event: Dict[str, Any]) -> PaymentCallback:
        obj = event.get("data", {}).get("object", {}) or {}
        metadata = obj.get("metadata") or {}
        raw_invoice_id = metadata.get(INVOICE_METADATA_KEY)

        invoice_id = None
        if raw_invoice_id is not None:
            try:
                invoice_id = int(raw_invoice_id)
            except (TypeError, ValueError):
                logger.warning("Unparseable invoice id in webhook", value=raw_invoice_id)

        return PaymentCallback(
            event_type=event.get("type", ""),
            invoice_id=invoice_id,
            external_id=obj.get("id"),
            payment_status=obj.get("payment_status"),
            raw=event,
        )
