"""
Domain entities package.
"""

from .invoice import Invoice
from .job_update import JobUpdate
from .notification import Notification
from .service_request import ServiceRequest

__all__ = [
    "Invoice",
    "JobUpdate",
    "Notification",
    "ServiceRequest",
]
