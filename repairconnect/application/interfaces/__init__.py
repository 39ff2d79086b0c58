"""
Application interfaces package.
"""

from .gateways import (
    CheckoutSession,
    MediaStorageInterface,
    PaymentCallback,
    PaymentGatewayInterface,
)
from .repositories import (
    InvoiceRepositoryInterface,
    JobUpdateRepositoryInterface,
    NotificationRepositoryInterface,
    ServiceRequestRepositoryInterface,
)

__all__ = [
    "CheckoutSession",
    "MediaStorageInterface",
    "PaymentCallback",
    "PaymentGatewayInterface",
    "InvoiceRepositoryInterface",
    "JobUpdateRepositoryInterface",
    "NotificationRepositoryInterface",
    "ServiceRequestRepositoryInterface",
]
