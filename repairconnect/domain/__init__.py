"""
Domain package.
"""

from .entities import *
from .events import *
from .exceptions import *
from .value_objects import *

__all__ = [
    # Entities
    "Invoice",
    "JobUpdate",
    "Notification",
    "ServiceRequest",

    # Events
    "InvoiceIssued",
    "InvoicePaid",
    "JobStatusChanged",
    "JobUpdatePosted",

    # Exceptions
    "WorkflowError",
    "ValidationError",
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

    # Value Objects
    "Actor",
    "ActorRole",
    "JobStatus",
    "NotificationType",
    "PaymentMethod",
]
