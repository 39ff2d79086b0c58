"""
Repository interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from repairconnect.domain.entities.invoice import Invoice
from repairconnect.domain.entities.job_update import JobUpdate
from repairconnect.domain.entities.notification import Notification
from repairconnect.domain.entities.service_request import ServiceRequest
from repairconnect.domain.value_objects.job_status import JobStatus
from repairconnect.domain.value_objects.payment_method import PaymentMethod


class ServiceRequestRepositoryInterface(ABC):
    """Service request repository interface."""

    @abstractmethod
    async def create(self, request: ServiceRequest) -> ServiceRequest:
        """Create a new service request."""
        pass

    @abstractmethod
    async def get_by_id(self, request_id: int) -> Optional[ServiceRequest]:
        """Get service request by ID."""
        pass

    @abstractmethod
    async def list_by_customer(self, customer_id: int) -> List[ServiceRequest]:
        pass

    @abstractmethod
    async def list_by_provider(self, provider_id: int) -> List[ServiceRequest]:
        pass

    @abstractmethod
    async def list_open(self, limit: int = 100) -> List[ServiceRequest]:
        """List unclaimed pending requests."""
        pass

    @abstractmethod
    async def list_all(self, skip: int = 0, limit: int = 100) -> List[ServiceRequest]:
        pass

    @abstractmethod
    async def transition_status(
        self,
        request_id: int,
        expected_status: JobStatus,
        new_status: JobStatus,
        assign_provider_id: Optional[int] = None,
    ) -> bool:
        """
        Conditionally move a request to a new status.

        The write only applies if the stored status still equals
        ``expected_status`` (and, when assigning, the request is unassigned).
        Returns False when another writer got there first.
        """
        pass

    @abstractmethod
    async def update_details(
        self,
        request_id: int,
        changes: Dict[str, Any],
        expected_updated_at: datetime,
    ) -> bool:
        """Apply owner edits if the request is still pending and unchanged."""
        pass

    @abstractmethod
    async def find_reclaimable_ids(
        self, statuses: Sequence[JobStatus], older_than: datetime, limit: int
    ) -> List[int]:
        pass

    @abstractmethod
    async def delete_reclaimable(
        self, request_ids: Sequence[int], statuses: Sequence[JobStatus], older_than: datetime
    ) -> int:
        """Hard-delete the given requests and everything they own."""
        pass


class InvoiceRepositoryInterface(ABC):
    """Invoice repository interface."""

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        pass

    @abstractmethod
    async def mark_paid(
        self, invoice_id: int, method: PaymentMethod, paid_at: datetime
    ) -> bool:
        """Set paid only if the invoice is still unpaid; False otherwise."""
        pass

    @abstractmethod
    async def list_by_provider(self, provider_id: int, paid: Optional[bool] = None) -> List[Invoice]:
        pass

    @abstractmethod
    async def list_by_customer(self, customer_id: int, paid: Optional[bool] = None) -> List[Invoice]:
        pass

    @abstractmethod
    async def list_all(self, paid: Optional[bool] = None) -> List[Invoice]:
        pass

    @abstractmethod
    async def list_by_request(self, request_id: int) -> List[Invoice]:
        pass


class JobUpdateRepositoryInterface(ABC):
    """Job update repository interface."""

    @abstractmethod
    async def create(self, update: JobUpdate) -> JobUpdate:
        pass

    @abstractmethod
    async def list_by_request(self, request_id: int) -> List[JobUpdate]:
        pass


class NotificationRepositoryInterface(ABC):
    """Notification repository interface."""

    @abstractmethod
    async def create(self, notification: Notification) -> Notification:
        pass

    @abstractmethod
    async def list_for_user(
        self, user_id: int, unread_only: bool = False, limit: int = 100
    ) -> List[Notification]:
        """Newest first."""
        pass

    @abstractmethod
    async def mark_read(self, notification_id: int, user_id: int) -> int:
        """Mark one of the user's notifications read; returns rows affected."""
        pass
