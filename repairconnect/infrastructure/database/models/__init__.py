"""
Database models package.
"""

from .base import Base, BaseModel
from .invoice import InvoiceModel
from .job_update import JobUpdateModel
from .notification import NotificationModel
from .service_request import ServiceRequestModel
from .user import UserModel

__all__ = [
    "Base",
    "BaseModel",
    "InvoiceModel",
    "JobUpdateModel",
    "NotificationModel",
    "ServiceRequestModel",
    "UserModel",
]
