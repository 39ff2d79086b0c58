"""
Integration tests for the archived request sweep.
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select, update

from repairconnect.application.use_cases.create_invoice import CreateInvoiceRequest
from repairconnect.application.use_cases.job_updates import PostJobUpdateRequest
from repairconnect.application.use_cases.reclaim_archived_requests import (
    ReclaimArchivedRequestsUseCase,
)
from repairconnect.background.workers.sweep_worker import SweepWorker
from repairconnect.infrastructure.database.models import (
    InvoiceModel,
    JobUpdateModel,
    ServiceRequestModel,
)

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


async def age(session, request_id, hours):
    await session.execute(
        update(ServiceRequestModel)
        .where(ServiceRequestModel.id == request_id)
        .values(updated_at=NOW - timedelta(hours=hours))
    )
    await session.commit()


async def count(session, model, **filters):
    stmt = select(func.count()).select_from(model).filter_by(**filters)
    return (await session.execute(stmt)).scalar_one()


@pytest.fixture
def closed_request(services, open_request, provider):
    """Factory producing a closed request with one update and one invoice."""

    async def _close():
        request = await open_request()
        await services.transition.take(provider, request.id)
        await services.transition.start(provider, request.id)
        await services.post_update.execute(
            PostJobUpdateRequest(actor=provider, request_id=request.id, message="Fixed")
        )
        await services.transition.finish(provider, request.id)
        await services.create_invoice.execute(
            CreateInvoiceRequest(actor=provider, request_id=request.id, amount="80")
        )
        return await services.transition.close(provider, request.id)

    return _close


class TestReclaimArchivedRequests:
    @pytest.mark.asyncio
    async def test_deletes_old_closed_requests_with_children(
        self, db_session, session_factory, closed_request
    ):
        old = await closed_request()
        recent = await closed_request()
        await age(db_session, old.id, hours=25)
        await age(db_session, recent.id, hours=23)

        deleted = await ReclaimArchivedRequestsUseCase(
            session_factory, retention_hours=24, batch_size=10
        ).execute(now=NOW)

        assert deleted == 1
        assert await count(db_session, ServiceRequestModel, id=old.id) == 0
        assert await count(db_session, JobUpdateModel, request_id=old.id) == 0
        assert await count(db_session, InvoiceModel, request_id=old.id) == 0
        assert await count(db_session, ServiceRequestModel, id=recent.id) == 1
        assert await count(db_session, InvoiceModel, request_id=recent.id) == 1

    @pytest.mark.asyncio
    async def test_active_requests_survive(
        self, db_session, session_factory, services, open_request, provider
    ):
        request = await open_request()
        await services.transition.take(provider, request.id)
        await age(db_session, request.id, hours=500)

        deleted = await ReclaimArchivedRequestsUseCase(
            session_factory, retention_hours=24
        ).execute(now=NOW)

        assert deleted == 0
        assert await count(db_session, ServiceRequestModel, id=request.id) == 1

    @pytest.mark.asyncio
    async def test_cancelled_requests_only_when_configured(
        self, db_session, session_factory, services, open_request, customer
    ):
        request = await open_request()
        await services.transition.cancel(customer, request.id)
        await age(db_session, request.id, hours=48)

        kept = await ReclaimArchivedRequestsUseCase(
            session_factory, retention_hours=24, include_cancelled=False
        ).execute(now=NOW)
        assert kept == 0

        deleted = await ReclaimArchivedRequestsUseCase(
            session_factory, retention_hours=24, include_cancelled=True
        ).execute(now=NOW)
        assert deleted == 1

    @pytest.mark.asyncio
    async def test_works_in_batches(self, db_session, session_factory, closed_request):
        requests = [await closed_request() for _ in range(5)]
        for request in requests:
            await age(db_session, request.id, hours=30)

        deleted = await ReclaimArchivedRequestsUseCase(
            session_factory, retention_hours=24, batch_size=2
        ).execute(now=NOW)

        assert deleted == 5
        assert await count(db_session, ServiceRequestModel) == 0

    @pytest.mark.asyncio
    async def test_worker_run(self, db_session, session_factory, closed_request):
        request = await closed_request()
        await db_session.execute(
            update(ServiceRequestModel)
            .where(ServiceRequestModel.id == request.id)
            .values(updated_at=datetime.now(timezone.utc) - timedelta(days=3))
        )
        await db_session.commit()

        worker = SweepWorker(session_factory)

        assert await worker.run_once() == 1
        assert worker.get_stats()["total_deleted"] == 1
