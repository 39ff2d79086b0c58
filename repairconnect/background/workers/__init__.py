"""
Worker management and coordination.
"""

import asyncio
from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from repairconnect.config.logging import get_logger
from repairconnect.config.settings import settings

from .notification_retry_worker import NotificationRetryWorker
from .sweep_worker import SweepWorker

logger = get_logger(__name__)


class WorkerManager:
    """Manages and coordinates all background workers."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory
        self.logger = logger

        self.sweep_worker = SweepWorker(session_factory)
        self.notification_worker = NotificationRetryWorker(session_factory)

        # Worker tasks
        self.worker_tasks: Dict[str, asyncio.Task] = {}
        self.is_running = False

    async def start_all_workers(self):
        """Start all background workers."""
        self.logger.info("Starting all background workers")

        # The first sweep runs immediately, then every SWEEP_INTERVAL_SECONDS
        self.worker_tasks["sweep"] = asyncio.create_task(
            self.sweep_worker.start_continuous_processing(
                interval_seconds=settings.SWEEP_INTERVAL_SECONDS
            )
        )
        self.worker_tasks["notifications"] = asyncio.create_task(
            self.notification_worker.start_continuous_processing(
                interval_seconds=settings.NOTIFICATION_RETRY_INTERVAL_SECONDS
            )
        )

        self.is_running = True
        self.logger.info("All background workers started successfully")

    async def stop_all_workers(self):
        """Stop all background workers."""
        self.logger.info("Stopping all background workers")

        self.sweep_worker.stop_continuous_processing()
        self.notification_worker.stop_continuous_processing()

        for task_name, task in self.worker_tasks.items():
            if not task.done():
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass

        self.worker_tasks.clear()
        self.is_running = False
        self.logger.info("All background workers stopped successfully")

    def get_worker_stats(self) -> Dict[str, Any]:
        """Get statistics from all workers."""
        return {
            "manager": {
                "is_running": self.is_running,
                "active_workers": len(self.worker_tasks),
            },
            "sweep_worker": self.sweep_worker.get_stats(),
            "notification_worker": self.notification_worker.get_stats(),
        }


__all__ = ["NotificationRetryWorker", "SweepWorker", "WorkerManager"]
