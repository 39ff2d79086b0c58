"""
Domain events package.
"""

from .invoice_issued import InvoiceIssued
from .invoice_paid import InvoicePaid
from .job_status_changed import JobStatusChanged
from .job_update_posted import JobUpdatePosted

__all__ = [
    "InvoiceIssued",
    "InvoicePaid",
    "JobStatusChanged",
    "JobUpdatePosted",
]
