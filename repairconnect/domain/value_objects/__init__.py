"""
Domain value objects package.
"""

from .actor import Actor, ActorRole
from .job_status import JobStatus
from .notification_type import NotificationType
from .payment_method import PaymentMethod

__all__ = [
    "Actor",
    "ActorRole",
    "JobStatus",
    "NotificationType",
    "PaymentMethod",
]
