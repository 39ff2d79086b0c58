"""Scheduled reclamation of archived service requests."""

from datetime import datetime, timedelta, timezone
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from repairconnect.config.logging import get_logger
from repairconnect.config.settings import settings
from repairconnect.domain.value_objects.job_status import JobStatus
from repairconnect.infrastructure.database.repositories.service_request_repository import (
    ServiceRequestRepository,
)
from repairconnect.infrastructure.monitoring.metrics import (
    record_sweep,
    record_sweep_failure,
)

logger = get_logger(__name__)


def reclaimable_statuses(include_cancelled: bool = None) -> List[JobStatus]:
    if include_cancelled is None:
        include_cancelled = settings.SWEEP_INCLUDE_CANCELLED
    statuses = [JobStatus.CLOSED]
    if include_cancelled:
        statuses.append(JobStatus.CANCELLED)
    return statuses


class ReclaimArchivedRequestsUseCase:
    """
    Hard-delete requests retired for longer than the retention window.

    Works in small batches, each in its own short transaction, so normal
    traffic is never blocked for long. A failing batch ends the run; the
    next scheduled run picks up where this one stopped.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        retention_hours: int = None,
        batch_size: int = None,
        include_cancelled: bool = None,
    ):
        self.session_factory = session_factory
        self.retention_hours = (
            settings.SWEEP_RETENTION_HOURS if retention_hours is None else retention_hours
        )
        self.batch_size = batch_size or settings.SWEEP_BATCH_SIZE
        self.statuses = reclaimable_statuses(include_cancelled)

    async def execute(self, now: datetime = None) -> int:
        """Run one sweep and return the number of requests deleted."""
        now = now or datetime.now(timezone.utc)
        cutoff = now - timedelta(hours=self.retention_hours)
        total_deleted = 0

        while True:
            try:
                async with self.session_factory() as session:
                    repo = ServiceRequestRepository(session)
                    ids = await repo.find_reclaimable_ids(
                        self.statuses, cutoff, self.batch_size
                    )
                    if not ids:
                        break
                    deleted = await repo.delete_reclaimable(ids, self.statuses, cutoff)
                    await session.commit()
            except Exception as e:
                record_sweep_failure()
                logger.error(
                    "Sweep batch failed",
                    error=str(e),
                    deleted_so_far=total_deleted,
                    exc_info=True,
                )
                break

            total_deleted += deleted
            record_sweep(deleted)
            if deleted == 0 or len(ids) < self.batch_size:
                break

        logger.info(
            "Sweep finished",
            deleted=total_deleted,
            cutoff=cutoff.isoformat(),
            statuses=[s.value for s in self.statuses],
        )
        return total_deleted
