"""
Database repositories package.
"""

from .invoice_repository import InvoiceRepository
from .job_update_repository import JobUpdateRepository
from .notification_repository import NotificationRepository
from .service_request_repository import ServiceRequestRepository
from .transaction_repository import TransactionService

__all__ = [
    "InvoiceRepository",
    "JobUpdateRepository",
    "NotificationRepository",
    "ServiceRequestRepository",
    "TransactionService",
]
