"""
Notification type value object.
"""

from enum import Enum


class NotificationType(str, Enum):
    """Tags identifying the event that produced a notification."""

    JOB_STATUS = "job_status"
    JOB_UPDATE = "job_update"
    INVOICE = "invoice"
    INVOICE_PAID = "invoice_paid"
