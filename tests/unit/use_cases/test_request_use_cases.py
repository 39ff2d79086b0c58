"""
Unit tests for opening, editing and reading service requests.
"""

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from repairconnect.application.use_cases.create_request import (
    CreateServiceRequestRequest,
    CreateServiceRequestUseCase,
)
from repairconnect.application.use_cases.edit_request import (
    EditServiceRequestRequest,
    EditServiceRequestUseCase,
)
from repairconnect.application.use_cases.job_updates import (
    ListJobUpdatesUseCase,
    PostJobUpdateRequest,
    PostJobUpdateUseCase,
)
from repairconnect.application.use_cases.query_jobs import ListJobsUseCase
from repairconnect.domain.entities.service_request import ServiceRequest
from repairconnect.domain.events.job_update_posted import JobUpdatePosted
from repairconnect.domain.exceptions.validation_error import ValidationError
from repairconnect.domain.exceptions.workflow_error import (
    ForbiddenError,
    StaleRequestError,
)
from repairconnect.domain.value_objects.actor import Actor, ActorRole
from repairconnect.domain.value_objects.job_status import JobStatus

CUSTOMER = Actor(id=1, role=ActorRole.CUSTOMER)
OTHER_CUSTOMER = Actor(id=5, role=ActorRole.CUSTOMER)
PROVIDER = Actor(id=2, role=ActorRole.PROVIDER)
OTHER_PROVIDER = Actor(id=3, role=ActorRole.PROVIDER)
ADMIN = Actor(id=4, role=ActorRole.ADMIN)

UPDATED_AT = datetime(2026, 10, 17, 9, 0, tzinfo=timezone.utc)


def make_request(status=JobStatus.PENDING, assigned=None) -> ServiceRequest:
    return ServiceRequest(
        id=7,
        title="Leaking tap",
        category="plumbing",
        description="Kitchen tap drips",
        customer_id=1,
        status=status,
        assigned_provider_id=assigned,
        created_at=UPDATED_AT,
        updated_at=UPDATED_AT,
    )


class TestCreateServiceRequestUseCase:
    @pytest.mark.asyncio
    async def test_customer_opens_pending_request(
        self, mock_request_repository, mock_transaction_service
    ):
        mock_request_repository.create.side_effect = lambda request: replace(request, id=7)
        use_case = CreateServiceRequestUseCase(mock_request_repository, mock_transaction_service)

        created = await use_case.execute(
            CreateServiceRequestRequest(
                actor=CUSTOMER,
                title="  Leaking tap ",
                category="plumbing",
                description="Kitchen tap drips",
            )
        )

        assert created.id == 7
        assert created.title == "Leaking tap"
        assert created.status is JobStatus.PENDING
        assert created.customer_id == 1
        assert created.assigned_provider_id is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("actor", [PROVIDER, ADMIN])
    async def test_only_customers(self, mock_request_repository, mock_transaction_service, actor):
        use_case = CreateServiceRequestUseCase(mock_request_repository, mock_transaction_service)

        with pytest.raises(ForbiddenError):
            await use_case.execute(
                CreateServiceRequestRequest(
                    actor=actor, title="t", category="c", description="d"
                )
            )
        mock_request_repository.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_title(self, mock_request_repository, mock_transaction_service):
        use_case = CreateServiceRequestUseCase(mock_request_repository, mock_transaction_service)

        with pytest.raises(ValidationError):
            await use_case.execute(
                CreateServiceRequestRequest(
                    actor=CUSTOMER, title=None, category="c", description="d"
                )
            )


class TestEditServiceRequestUseCase:
    @pytest.fixture
    def use_case(self, mock_request_repository, mock_transaction_service):
        return EditServiceRequestUseCase(mock_request_repository, mock_transaction_service)

    @pytest.mark.asyncio
    async def test_edit_pending_request(self, use_case, mock_request_repository):
        current = make_request()
        edited = replace(current, title="Dripping tap")
        mock_request_repository.get_by_id.side_effect = [current, edited]
        mock_request_repository.update_details.return_value = True

        result = await use_case.execute(
            EditServiceRequestRequest(
                actor=CUSTOMER,
                request_id=7,
                changes={"title": " Dripping tap "},
                expected_updated_at=UPDATED_AT,
            )
        )

        assert result.title == "Dripping tap"
        mock_request_repository.update_details.assert_awaited_once_with(
            7, {"title": "Dripping tap"}, expected_updated_at=UPDATED_AT
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status", [s for s in JobStatus if s is not JobStatus.PENDING]
    )
    async def test_non_pending_is_forbidden(self, use_case, mock_request_repository, status):
        mock_request_repository.get_by_id.return_value = make_request(status, assigned=2)

        with pytest.raises(ForbiddenError) as exc_info:
            await use_case.execute(
                EditServiceRequestRequest(
                    actor=CUSTOMER, request_id=7, changes={"title": "New"}
                )
            )
        assert exc_info.value.details["current_status"] == status.value

    @pytest.mark.asyncio
    @pytest.mark.parametrize("actor", [OTHER_CUSTOMER, PROVIDER, ADMIN])
    async def test_only_owner(self, use_case, mock_request_repository, actor):
        mock_request_repository.get_by_id.return_value = make_request()

        with pytest.raises(ForbiddenError):
            await use_case.execute(
                EditServiceRequestRequest(actor=actor, request_id=7, changes={"title": "New"})
            )

    @pytest.mark.asyncio
    async def test_stale_expected_updated_at(self, use_case, mock_request_repository):
        mock_request_repository.get_by_id.return_value = make_request()

        with pytest.raises(StaleRequestError):
            await use_case.execute(
                EditServiceRequestRequest(
                    actor=CUSTOMER,
                    request_id=7,
                    changes={"title": "New"},
                    expected_updated_at=UPDATED_AT - timedelta(seconds=1),
                )
            )
        mock_request_repository.update_details.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_taken_between_read_and_write(self, use_case, mock_request_repository):
        current = make_request()
        mock_request_repository.get_by_id.side_effect = [
            current,
            replace(current, status=JobStatus.TAKEN, assigned_provider_id=2),
        ]
        mock_request_repository.update_details.return_value = False

        with pytest.raises(ForbiddenError):
            await use_case.execute(
                EditServiceRequestRequest(actor=CUSTOMER, request_id=7, changes={"title": "New"})
            )

    @pytest.mark.asyncio
    async def test_edited_between_read_and_write(self, use_case, mock_request_repository):
        current = make_request()
        mock_request_repository.get_by_id.side_effect = [
            current,
            replace(current, updated_at=UPDATED_AT + timedelta(seconds=5)),
        ]
        mock_request_repository.update_details.return_value = False

        with pytest.raises(StaleRequestError):
            await use_case.execute(
                EditServiceRequestRequest(actor=CUSTOMER, request_id=7, changes={"title": "New"})
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "changes", [{}, {"status": "done"}, {"assigned_provider_id": 2}, {"title": ""}]
    )
    async def test_invalid_changes(self, use_case, mock_request_repository, changes):
        mock_request_repository.get_by_id.return_value = make_request()

        with pytest.raises(ValidationError):
            await use_case.execute(
                EditServiceRequestRequest(actor=CUSTOMER, request_id=7, changes=changes)
            )
        mock_request_repository.update_details.assert_not_awaited()


class TestJobUpdateUseCases:
    @pytest.mark.asyncio
    async def test_assigned_provider_posts_and_customer_is_notified(
        self,
        mock_request_repository,
        mock_update_repository,
        mock_dispatcher,
        mock_transaction_service,
    ):
        mock_request_repository.get_by_id.return_value = make_request(
            JobStatus.ONGOING, assigned=2
        )
        mock_update_repository.create.side_effect = lambda update: replace(update, id=1)
        use_case = PostJobUpdateUseCase(
            mock_request_repository,
            mock_update_repository,
            mock_dispatcher,
            mock_transaction_service,
        )

        update = await use_case.execute(
            PostJobUpdateRequest(
                actor=PROVIDER, request_id=7, message="Parts ordered", image_url="/uploads/a.jpg"
            )
        )

        assert update.id == 1
        event = mock_dispatcher.dispatch.await_args.args[0]
        assert isinstance(event, JobUpdatePosted)
        assert event.to_payload() == {
            "requestId": 7,
            "message": "Parts ordered",
            "imageUrl": "/uploads/a.jpg",
        }
        mock_request_repository.transition_status.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("actor", [OTHER_PROVIDER, CUSTOMER, ADMIN])
    async def test_only_assigned_provider_posts(
        self,
        mock_request_repository,
        mock_update_repository,
        mock_dispatcher,
        mock_transaction_service,
        actor,
    ):
        mock_request_repository.get_by_id.return_value = make_request(
            JobStatus.ONGOING, assigned=2
        )
        use_case = PostJobUpdateUseCase(
            mock_request_repository,
            mock_update_repository,
            mock_dispatcher,
            mock_transaction_service,
        )

        with pytest.raises(ForbiddenError):
            await use_case.execute(
                PostJobUpdateRequest(actor=actor, request_id=7, message="hello")
            )

    @pytest.mark.asyncio
    async def test_feed_visibility(self, mock_request_repository, mock_update_repository):
        mock_request_repository.get_by_id.return_value = make_request(
            JobStatus.ONGOING, assigned=2
        )
        mock_update_repository.list_by_request.return_value = []
        use_case = ListJobUpdatesUseCase(mock_request_repository, mock_update_repository)

        for actor in (CUSTOMER, PROVIDER, ADMIN):
            assert await use_case.execute(actor, 7) == []
        for actor in (OTHER_CUSTOMER, OTHER_PROVIDER):
            with pytest.raises(ForbiddenError):
                await use_case.execute(actor, 7)


class TestListJobsUseCase:
    @pytest.mark.asyncio
    async def test_open_requests_for_providers_only(self, mock_request_repository):
        mock_request_repository.list_open.return_value = []
        use_case = ListJobsUseCase(mock_request_repository)

        assert await use_case.list_open(PROVIDER) == []
        with pytest.raises(ForbiddenError):
            await use_case.list_open(CUSTOMER)

    @pytest.mark.asyncio
    async def test_mine_by_role(self, mock_request_repository):
        use_case = ListJobsUseCase(mock_request_repository)

        await use_case.list_mine(CUSTOMER)
        mock_request_repository.list_by_customer.assert_awaited_once_with(1)

        await use_case.list_mine(PROVIDER)
        mock_request_repository.list_by_provider.assert_awaited_once_with(2)

        await use_case.list_mine(ADMIN)
        mock_request_repository.list_all.assert_awaited_once()
