"""
Domain exceptions package.
"""

from .gateway_error import (
    CallbackVerificationError,
    GatewayUnavailableError,
    PaymentGatewayError,
    TransientError,
)
from .validation_error import InvalidFormatError, RequiredFieldError, ValidationError
from .workflow_error import (
    ConflictError,
    ForbiddenError,
    InvalidTransitionError,
    InvoiceAlreadyPaidError,
    NotFoundError,
    StaleRequestError,
    WorkflowError,
)

__all__ = [
    "WorkflowError",
    "ValidationError",
    "RequiredFieldError",
    "InvalidFormatError",
    "ForbiddenError",
    "ConflictError",
    "InvalidTransitionError",
    "StaleRequestError",
    "InvoiceAlreadyPaidError",
    "NotFoundError",
    "TransientError",
    "GatewayUnavailableError",
    "PaymentGatewayError",
    "CallbackVerificationError",
]
