"""
Payment gateway domain exceptions.

Every failure to start an online payment names the manual confirmation path,
so the caller always has a way to settle the invoice.
"""

from typing import Optional

from .workflow_error import WorkflowError


def _with_manual_fallback(message: str, manual_path: Optional[str]) -> str:
    if not manual_path:
        return message
    return (
        f"{message}. Confirm the payment manually with POST {manual_path} "
        "once the customer has paid."
    )


class TransientError(WorkflowError):
    """Raised when the payment gateway is unreachable; safe to retry."""

    def __init__(
        self,
        message: str,
        retry_after: Optional[int] = None,
        manual_path: Optional[str] = None,
    ):
        self.retry_after = retry_after
        self.manual_path = manual_path
        details = {"retryable": True}
        if retry_after:
            details["retry_after"] = retry_after
        if manual_path:
            details["manual_confirmation"] = manual_path
        super().__init__(_with_manual_fallback(message, manual_path), details)


class PaymentGatewayError(WorkflowError):
    """Raised when the gateway refuses a request; retrying will not help."""

    def __init__(self, message: str, manual_path: str, gateway_code: Optional[str] = None):
        self.manual_path = manual_path
        details = {"retryable": False, "manual_confirmation": manual_path}
        if gateway_code:
            details["gateway_code"] = gateway_code
        super().__init__(_with_manual_fallback(message, manual_path), details)


class GatewayUnavailableError(WorkflowError):
    """Raised when no payment gateway is configured for this deployment."""

    def __init__(self, invoice_id: int, manual_path: str):
        self.invoice_id = invoice_id
        self.manual_path = manual_path
        super().__init__(
            _with_manual_fallback("Online payment is not configured", manual_path),
            {"invoice_id": invoice_id, "manual_confirmation": manual_path},
        )


class CallbackVerificationError(WorkflowError):
    """Raised when a gateway callback fails authenticity checks."""

    pass
