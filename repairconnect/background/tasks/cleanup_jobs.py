"""
Cleanup tasks for archived service requests.
"""

import asyncio

from repairconnect.application.use_cases.reclaim_archived_requests import (
    ReclaimArchivedRequestsUseCase,
)
from repairconnect.background.celery_app import celery_app
from repairconnect.config.database import get_async_session_factory
from repairconnect.config.logging import get_logger

logger = get_logger(__name__)


async def _reclaim() -> int:
    session_factory = get_async_session_factory()
    try:
        return await ReclaimArchivedRequestsUseCase(session_factory).execute()
    finally:
        await session_factory.kw["bind"].dispose()


@celery_app.task(bind=True, max_retries=2, name="reclaim_archived_requests_task")
def reclaim_archived_requests_task(self):
    """Delete closed requests past the retention window."""
    logger.info(
        "Starting archived requests sweep",
        attempt=self.request.retries + 1,
        max_retries=self.max_retries,
    )
    try:
        deleted = asyncio.run(_reclaim())
    except Exception as e:
        logger.error(
            "Archived requests sweep failed",
            error=str(e),
            attempt=self.request.retries + 1,
        )
        if self.request.retries < self.max_retries:
            raise self.retry(countdown=300)
        return {"status": "failed", "error": str(e)}

    return {"status": "success", "requests_deleted": deleted}
