"""
Service request repository implementation.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import and_, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from repairconnect.application.interfaces.repositories import (
    ServiceRequestRepositoryInterface,
)
from repairconnect.config.logging import get_logger
from repairconnect.domain.entities.service_request import ServiceRequest
from repairconnect.domain.value_objects.job_status import JobStatus
from repairconnect.infrastructure.database.models.base import as_utc, utcnow
from repairconnect.infrastructure.database.models.invoice import InvoiceModel
from repairconnect.infrastructure.database.models.job_update import JobUpdateModel
from repairconnect.infrastructure.database.models.service_request import (
    ServiceRequestModel,
)

logger = get_logger(__name__)


class ServiceRequestRepository(ServiceRequestRepositoryInterface):
    """Service request repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, request: ServiceRequest) -> ServiceRequest:
        """Create a new service request."""
        model = ServiceRequestModel(
            customer_id=request.customer_id,
            title=request.title,
            category=request.category,
            description=request.description,
            preferred_at=request.preferred_at,
            preferred_timezone=request.preferred_timezone,
            status=request.status.value,
            assigned_provider_id=request.assigned_provider_id,
            created_at=request.created_at,
            updated_at=request.updated_at,
        )

        self.db.add(model)
        # Use flush instead of commit to maintain transaction atomicity
        await self.db.flush()
        await self.db.refresh(model)

        logger.info("Service request created", request_id=model.id)
        return self._model_to_entity(model)

    async def get_by_id(self, request_id: int) -> Optional[ServiceRequest]:
        """Get service request by ID."""
        stmt = (
            select(ServiceRequestModel)
            .where(ServiceRequestModel.id == request_id)
            # Conditional updates bypass the identity map
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def list_by_customer(self, customer_id: int) -> List[ServiceRequest]:
        stmt = (
            select(ServiceRequestModel)
            .where(ServiceRequestModel.customer_id == customer_id)
            .order_by(ServiceRequestModel.created_at.desc(), ServiceRequestModel.id.desc())
        )
        return await self._fetch(stmt)

    async def list_by_provider(self, provider_id: int) -> List[ServiceRequest]:
        stmt = (
            select(ServiceRequestModel)
            .where(ServiceRequestModel.assigned_provider_id == provider_id)
            .order_by(ServiceRequestModel.updated_at.desc(), ServiceRequestModel.id.desc())
        )
        return await self._fetch(stmt)

    async def list_open(self, limit: int = 100) -> List[ServiceRequest]:
        """List unclaimed pending requests, oldest first."""
        stmt = (
            select(ServiceRequestModel)
            .where(
                and_(
                    ServiceRequestModel.status == JobStatus.PENDING.value,
                    ServiceRequestModel.assigned_provider_id.is_(None),
                )
            )
            .order_by(ServiceRequestModel.created_at.asc(), ServiceRequestModel.id.asc())
            .limit(limit)
        )
        return await self._fetch(stmt)

    async def list_all(self, skip: int = 0, limit: int = 100) -> List[ServiceRequest]:
        stmt = (
            select(ServiceRequestModel)
            .order_by(ServiceRequestModel.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return await self._fetch(stmt)

    async def transition_status(
        self,
        request_id: int,
        expected_status: JobStatus,
        new_status: JobStatus,
        assign_provider_id: Optional[int] = None,
    ) -> bool:
        """Compare-and-set the status; only one concurrent writer can win."""
        conditions = [
            ServiceRequestModel.id == request_id,
            ServiceRequestModel.status == expected_status.value,
        ]
        values: Dict[str, Any] = {"status": new_status.value, "updated_at": utcnow()}

        if assign_provider_id is not None:
            conditions.append(ServiceRequestModel.assigned_provider_id.is_(None))
            values["assigned_provider_id"] = assign_provider_id

        stmt = (
            update(ServiceRequestModel)
            .where(and_(*conditions))
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        await self.db.flush()

        applied = result.rowcount == 1
        logger.debug(
            "Status transition attempted",
            request_id=request_id,
            expected_status=expected_status.value,
            new_status=new_status.value,
            applied=applied,
        )
        return applied

    async def update_details(
        self,
        request_id: int,
        changes: Dict[str, Any],
        expected_updated_at: datetime,
    ) -> bool:
        stmt = (
            update(ServiceRequestModel)
            .where(
                and_(
                    ServiceRequestModel.id == request_id,
                    ServiceRequestModel.status == JobStatus.PENDING.value,
                    ServiceRequestModel.updated_at == expected_updated_at,
                )
            )
            .values(**changes, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        await self.db.flush()
        return result.rowcount == 1

    async def find_reclaimable_ids(
        self, statuses: Sequence[JobStatus], older_than: datetime, limit: int
    ) -> List[int]:
        """Find requests in a retired status untouched since the cutoff."""
        stmt = (
            select(ServiceRequestModel.id)
            .where(
                and_(
                    ServiceRequestModel.status.in_([s.value for s in statuses]),
                    ServiceRequestModel.updated_at < older_than,
                )
            )
            .order_by(ServiceRequestModel.updated_at.asc())  # Oldest first
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [row[0] for row in result.fetchall()]

    async def delete_reclaimable(
        self, request_ids: Sequence[int], statuses: Sequence[JobStatus], older_than: datetime
    ) -> int:
        """
        Delete requests together with their job updates and invoices.

        The status and age conditions are re-checked in the delete itself so a
        request that was touched after it was selected survives the sweep.
        """
        if not request_ids:
            return 0

        eligible = and_(
            ServiceRequestModel.id.in_(list(request_ids)),
            ServiceRequestModel.status.in_([s.value for s in statuses]),
            ServiceRequestModel.updated_at < older_than,
        )
        eligible_ids = select(ServiceRequestModel.id).where(eligible)

        await self.db.execute(
            delete(JobUpdateModel)
            .where(JobUpdateModel.request_id.in_(eligible_ids))
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(
            delete(InvoiceModel)
            .where(InvoiceModel.request_id.in_(eligible_ids))
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(
            delete(ServiceRequestModel)
            .where(eligible)
            .execution_options(synchronize_session=False)
        )
        await self.db.flush()
        return result.rowcount or 0

    async def _fetch(self, stmt) -> List[ServiceRequest]:
        result = await self.db.execute(stmt.execution_options(populate_existing=True))
        models = result.scalars().all()

        return [self._model_to_entity(model) for model in models]

    def _model_to_entity(self, model: ServiceRequestModel) -> ServiceRequest:
        """Convert SQLAlchemy model to domain entity."""
        return ServiceRequest(
            id=model.id,
            title=model.title,
            category=model.category,
            description=model.description,
            customer_id=model.customer_id,
            status=model.status,
            assigned_provider_id=model.assigned_provider_id,
            preferred_at=as_utc(model.preferred_at),
            preferred_timezone=model.preferred_timezone,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )
