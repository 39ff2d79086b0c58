"""
Job update repository implementation.
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from repairconnect.application.interfaces.repositories import (
    JobUpdateRepositoryInterface,
)
from repairconnect.domain.entities.job_update import JobUpdate
from repairconnect.infrastructure.database.models.base import as_utc
from repairconnect.infrastructure.database.models.job_update import JobUpdateModel


class JobUpdateRepository(JobUpdateRepositoryInterface):
    """Job update repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, update: JobUpdate) -> JobUpdate:
        model = JobUpdateModel(
            request_id=update.request_id,
            provider_id=update.provider_id,
            message=update.message,
            image_url=update.image_url,
            created_at=update.created_at,
        )

        self.db.add(model)
        await self.db.flush()
        await self.db.refresh(model)

        return self._model_to_entity(model)

    async def list_by_request(self, request_id: int) -> List[JobUpdate]:
        """Feed entries for a request, oldest first."""
        stmt = (
            select(JobUpdateModel)
            .where(JobUpdateModel.request_id == request_id)
            .order_by(JobUpdateModel.created_at.asc(), JobUpdateModel.id.asc())
        )
        result = await self.db.execute(stmt)
        models = result.scalars().all()

        return [self._model_to_entity(model) for model in models]

    def _model_to_entity(self, model: JobUpdateModel) -> JobUpdate:
        return JobUpdate(
            id=model.id,
            request_id=model.request_id,
            provider_id=model.provider_id,
            message=model.message,
            image_url=model.image_url,
            created_at=as_utc(model.created_at),
        )
