"""
Sweep worker that reclaims archived service requests.
"""

import asyncio
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from repairconnect.application.use_cases.reclaim_archived_requests import (
    ReclaimArchivedRequestsUseCase,
)
from repairconnect.config.logging import get_logger
from repairconnect.infrastructure.monitoring.metrics import record_sweep_failure

logger = get_logger(__name__)


class SweepWorker:
    """Runs the reclamation sweep once at start and then on a fixed interval."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.use_case = ReclaimArchivedRequestsUseCase(session_factory)
        self.is_running = False
        self.run_count = 0
        self.deleted_count = 0
        self.error_count = 0
        self.last_deleted: Optional[int] = None

    async def run_once(self) -> int:
        """Run a single sweep; never raises."""
        try:
            deleted = await self.use_case.execute()
        except Exception as e:
            self.error_count += 1
            record_sweep_failure()
            logger.error("Sweep run failed", error=str(e), exc_info=True)
            return 0

        self.run_count += 1
        self.deleted_count += deleted
        self.last_deleted = deleted
        return deleted

    async def start_continuous_processing(self, interval_seconds: int = 3600):
        """
        Start the periodic sweep.

        Args:
            interval_seconds: Interval between sweeps
        """
        logger.info("Starting sweep worker", interval_seconds=interval_seconds)
        self.is_running = True

        while self.is_running:
            await self.run_once()
            await asyncio.sleep(interval_seconds)

    def stop_continuous_processing(self):
        """Stop continuous processing."""
        logger.info("Stopping sweep worker")
        self.is_running = False

    def get_stats(self) -> dict:
        """Get worker statistics."""
        return {
            "is_running": self.is_running,
            "runs": self.run_count,
            "total_deleted": self.deleted_count,
            "last_deleted": self.last_deleted,
            "total_errors": self.error_count,
        }
