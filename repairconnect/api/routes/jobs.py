"""Service request endpoints: creation, listing, editing and status changes."""

from typing import List

from fastapi import APIRouter, status

from repairconnect.api.dependencies import (
    CurrentActorDep,
    InvoiceRepositoryDep,
    JobUpdateRepositoryDep,
    NotificationDispatcherDep,
    ServiceRequestRepositoryDep,
    TransactionServiceDep,
    TransitionJobUseCaseDep,
)
from repairconnect.api.schemas.common import WORKFLOW_ERROR_RESPONSES
from repairconnect.api.schemas.invoice import InvoiceResponse
from repairconnect.api.schemas.job import (
    JobCreateRequest,
    JobDetailResponse,
    JobEditRequest,
    JobResponse,
    StatusChangeRequest,
)
from repairconnect.api.schemas.update import JobUpdateCreateRequest, JobUpdateResponse
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
from repairconnect.application.use_cases.query_jobs import (
    GetJobDetailUseCase,
    ListJobsUseCase,
)

router = APIRouter(
    prefix="/jobs", tags=["jobs"], responses=WORKFLOW_ERROR_RESPONSES
)


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    job_data: JobCreateRequest,
    actor: CurrentActorDep,
    request_repository: ServiceRequestRepositoryDep,
    transaction_service: TransactionServiceDep,
):
    """Open a new service request (customers only)."""
    use_case = CreateServiceRequestUseCase(request_repository, transaction_service)
    created = await use_case.execute(
        CreateServiceRequestRequest(
            actor=actor,
            title=job_data.title,
            category=job_data.category,
            description=job_data.description,
            preferred_at=job_data.preferred_at,
            preferred_timezone=job_data.preferred_timezone,
        )
    )
    return JobResponse.from_entity(created)


@router.get("/open", response_model=List[JobResponse])
async def list_open_jobs(
    actor: CurrentActorDep,
    request_repository: ServiceRequestRepositoryDep,
    limit: int = 100,
):
    """Unclaimed pending requests."""
    requests = await ListJobsUseCase(request_repository).list_open(actor, limit=limit)
    return [JobResponse.from_entity(r) for r in requests]


@router.get("/mine", response_model=List[JobResponse])
async def list_my_jobs(
    actor: CurrentActorDep,
    request_repository: ServiceRequestRepositoryDep,
):
    requests = await ListJobsUseCase(request_repository).list_mine(actor)
    return [JobResponse.from_entity(r) for r in requests]


@router.get("/{request_id}", response_model=JobDetailResponse)
async def get_job(
    request_id: int,
    actor: CurrentActorDep,
    request_repository: ServiceRequestRepositoryDep,
    update_repository: JobUpdateRepositoryDep,
    invoice_repository: InvoiceRepositoryDep,
):
    use_case = GetJobDetailUseCase(
        request_repository, update_repository, invoice_repository
    )
    detail = await use_case.execute(actor, request_id)
    return JobDetailResponse(
        **JobResponse.from_entity(detail.request).model_dump(),
        updates=[JobUpdateResponse.from_entity(u) for u in detail.updates],
        invoices=[InvoiceResponse.from_entity(i) for i in detail.invoices],
    )


@router.patch("/{request_id}", response_model=JobResponse)
async def edit_job(
    request_id: int,
    edit: JobEditRequest,
    actor: CurrentActorDep,
    request_repository: ServiceRequestRepositoryDep,
    transaction_service: TransactionServiceDep,
):
    """Edit a request while it is still pending."""
    changes = edit.model_dump(exclude_unset=True)
    expected_updated_at = changes.pop("expected_updated_at", None)

    use_case = EditServiceRequestUseCase(request_repository, transaction_service)
    updated = await use_case.execute(
        EditServiceRequestRequest(
            actor=actor,
            request_id=request_id,
            changes=changes,
            expected_updated_at=expected_updated_at,
        )
    )
    return JobResponse.from_entity(updated)


@router.post("/{request_id}/take", response_model=JobResponse)
async def take_job(request_id: int, actor: CurrentActorDep, use_case: TransitionJobUseCaseDep):
    return JobResponse.from_entity(await use_case.take(actor, request_id))


@router.post("/{request_id}/start", response_model=JobResponse)
async def start_job(request_id: int, actor: CurrentActorDep, use_case: TransitionJobUseCaseDep):
    return JobResponse.from_entity(await use_case.start(actor, request_id))


@router.post("/{request_id}/pause", response_model=JobResponse)
async def pause_job(request_id: int, actor: CurrentActorDep, use_case: TransitionJobUseCaseDep):
    return JobResponse.from_entity(await use_case.pause(actor, request_id))


@router.post("/{request_id}/finish", response_model=JobResponse)
async def finish_job(request_id: int, actor: CurrentActorDep, use_case: TransitionJobUseCaseDep):
    return JobResponse.from_entity(await use_case.finish(actor, request_id))


@router.post("/{request_id}/close", response_model=JobResponse)
async def close_job(request_id: int, actor: CurrentActorDep, use_case: TransitionJobUseCaseDep):
    return JobResponse.from_entity(await use_case.close(actor, request_id))


@router.post("/{request_id}/cancel", response_model=JobResponse)
async def cancel_job(request_id: int, actor: CurrentActorDep, use_case: TransitionJobUseCaseDep):
    return JobResponse.from_entity(await use_case.cancel(actor, request_id))


@router.post("/{request_id}/status", response_model=JobResponse)
async def change_job_status(
    request_id: int,
    change: StatusChangeRequest,
    actor: CurrentActorDep,
    use_case: TransitionJobUseCaseDep,
):
    """Generic transition; the same table applies, admins may override."""
    return JobResponse.from_entity(await use_case.execute(actor, request_id, change.status))


@router.post(
    "/{request_id}/updates",
    response_model=JobUpdateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def post_job_update(
    request_id: int,
    update: JobUpdateCreateRequest,
    actor: CurrentActorDep,
    request_repository: ServiceRequestRepositoryDep,
    update_repository: JobUpdateRepositoryDep,
    dispatcher: NotificationDispatcherDep,
    transaction_service: TransactionServiceDep,
):
    use_case = PostJobUpdateUseCase(
        request_repository, update_repository, dispatcher, transaction_service
    )
    created = await use_case.execute(
        PostJobUpdateRequest(
            actor=actor,
            request_id=request_id,
            message=update.message,
            image_url=update.image_url,
        )
    )
    return JobUpdateResponse.from_entity(created)


@router.get("/{request_id}/updates", response_model=List[JobUpdateResponse])
async def list_job_updates(
    request_id: int,
    actor: CurrentActorDep,
    request_repository: ServiceRequestRepositoryDep,
    update_repository: JobUpdateRepositoryDep,
):
    updates = await ListJobUpdatesUseCase(request_repository, update_repository).execute(
        actor, request_id
    )
    return [JobUpdateResponse.from_entity(u) for u in updates]
