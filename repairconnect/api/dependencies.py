"""
FastAPI dependency injection container.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from repairconnect.api.auth import get_current_actor
from repairconnect.application.interfaces.gateways import (
    MediaStorageInterface,
    PaymentGatewayInterface,
)
from repairconnect.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from repairconnect.application.use_cases.mark_invoice_paid import MarkInvoicePaidUseCase
from repairconnect.application.use_cases.transition_job import TransitionJobUseCase
from repairconnect.config.database import get_db_session
from repairconnect.domain.value_objects.actor import Actor
from repairconnect.infrastructure.database.repositories.invoice_repository import (
    InvoiceRepository,
)
from repairconnect.infrastructure.database.repositories.job_update_repository import (
    JobUpdateRepository,
)
from repairconnect.infrastructure.database.repositories.notification_repository import (
    NotificationRepository,
)
from repairconnect.infrastructure.database.repositories.service_request_repository import (
    ServiceRequestRepository,
)
from repairconnect.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from repairconnect.infrastructure.payments.factory import get_payment_gateway
from repairconnect.infrastructure.storage.local import LocalMediaStorage


# Database Dependencies
async def get_service_request_repository(
    db: AsyncSession = Depends(get_db_session),
) -> ServiceRequestRepository:
    """Get service request repository instance."""
    return ServiceRequestRepository(db)


async def get_invoice_repository(
    db: AsyncSession = Depends(get_db_session),
) -> InvoiceRepository:
    """Get invoice repository instance."""
    return InvoiceRepository(db)


async def get_job_update_repository(
    db: AsyncSession = Depends(get_db_session),
) -> JobUpdateRepository:
    return JobUpdateRepository(db)


async def get_notification_repository(
    db: AsyncSession = Depends(get_db_session),
) -> NotificationRepository:
    return NotificationRepository(db)


async def get_transaction_service(
    db: AsyncSession = Depends(get_db_session),
) -> TransactionService:
    """Get transaction service instance."""
    return TransactionService(db)


# Service Dependencies
async def get_notification_dispatcher(
    notification_repo: NotificationRepository = Depends(get_notification_repository),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> NotificationDispatcher:
    return NotificationDispatcher(notification_repo, transaction_service)


async def get_gateway() -> PaymentGatewayInterface:
    """Get the payment gateway selected at startup."""
    return get_payment_gateway()


async def get_media_storage() -> MediaStorageInterface:
    return LocalMediaStorage()


async def get_transition_use_case(
    request_repo: ServiceRequestRepository = Depends(get_service_request_repository),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> TransitionJobUseCase:
    return TransitionJobUseCase(request_repo, dispatcher, transaction_service)


async def get_mark_paid_use_case(
    invoice_repo: InvoiceRepository = Depends(get_invoice_repository),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> MarkInvoicePaidUseCase:
    return MarkInvoicePaidUseCase(invoice_repo, dispatcher, transaction_service)


# Type aliases for cleaner dependency injection
CurrentActorDep = Annotated[Actor, Depends(get_current_actor)]
ServiceRequestRepositoryDep = Annotated[
    ServiceRequestRepository, Depends(get_service_request_repository)
]
InvoiceRepositoryDep = Annotated[InvoiceRepository, Depends(get_invoice_repository)]
JobUpdateRepositoryDep = Annotated[JobUpdateRepository, Depends(get_job_update_repository)]
NotificationRepositoryDep = Annotated[
    NotificationRepository, Depends(get_notification_repository)
]
TransactionServiceDep = Annotated[TransactionService, Depends(get_transaction_service)]
NotificationDispatcherDep = Annotated[
    NotificationDispatcher, Depends(get_notification_dispatcher)
]
PaymentGatewayDep = Annotated[PaymentGatewayInterface, Depends(get_gateway)]
MediaStorageDep = Annotated[MediaStorageInterface, Depends(get_media_storage)]
TransitionJobUseCaseDep = Annotated[TransitionJobUseCase, Depends(get_transition_use_case)]
MarkInvoicePaidUseCaseDep = Annotated[
    MarkInvoicePaidUseCase, Depends(get_mark_paid_use_case)
]
