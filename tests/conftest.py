"""
Pytest configuration and fixtures.
"""

from types import SimpleNamespace
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from repairconnect.api.auth import create_access_token
from repairconnect.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from repairconnect.application.services.notification_outbox import (
    get_notification_outbox,
)
from repairconnect.application.use_cases.create_invoice import CreateInvoiceUseCase
from repairconnect.application.use_cases.create_request import (
    CreateServiceRequestRequest,
    CreateServiceRequestUseCase,
)
from repairconnect.application.use_cases.edit_request import EditServiceRequestUseCase
from repairconnect.application.use_cases.job_updates import (
    ListJobUpdatesUseCase,
    PostJobUpdateUseCase,
)
from repairconnect.application.use_cases.list_invoices import ListInvoicesUseCase
from repairconnect.application.use_cases.mark_invoice_paid import MarkInvoicePaidUseCase
from repairconnect.application.use_cases.notifications import (
    ListNotificationsUseCase,
    MarkNotificationReadUseCase,
)
from repairconnect.application.use_cases.transition_job import TransitionJobUseCase
from repairconnect.config.database import get_async_session_factory
from repairconnect.domain.value_objects.actor import Actor, ActorRole
from repairconnect.infrastructure.database.models import Base, UserModel
from repairconnect.infrastructure.database.repositories import (
    InvoiceRepository,
    JobUpdateRepository,
    NotificationRepository,
    ServiceRequestRepository,
    TransactionService,
)

CUSTOMER_ID = 1
PROVIDER_ID = 2
OTHER_PROVIDER_ID = 3
ADMIN_ID = 4
OTHER_CUSTOMER_ID = 5

SEED_USERS = [
    (CUSTOMER_ID, "customer@example.com", "customer"),
    (PROVIDER_ID, "provider@example.com", "provider"),
    (OTHER_PROVIDER_ID, "provider2@example.com", "provider"),
    (ADMIN_ID, "admin@example.com", "admin"),
    (OTHER_CUSTOMER_ID, "customer2@example.com", "customer"),
]


@pytest.fixture
def database_url(tmp_path):
    """File-backed SQLite database with the schema and seed users in place."""
    db_file = tmp_path / "repairconnect-test.db"

    engine = create_engine(f"sqlite:///{db_file}")
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        session.add_all(
            [
                UserModel(id=user_id, email=email, name=email.split("@")[0], role=role)
                for user_id, email, role in SEED_USERS
            ]
        )
        session.commit()
    engine.dispose()

    return f"sqlite+aiosqlite:///{db_file}"


@pytest.fixture
def session_factory(database_url):
    """Async session factory bound to the test database."""
    factory = get_async_session_factory(database_url)
    yield factory
    factory.kw["bind"].sync_engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture(autouse=True)
def clean_outbox():
    """The notification outbox is process-wide; isolate it per test."""
    outbox = get_notification_outbox()
    outbox.clear()
    yield outbox
    outbox.clear()


@pytest.fixture
def customer():
    return Actor(id=CUSTOMER_ID, role=ActorRole.CUSTOMER)


@pytest.fixture
def other_customer():
    return Actor(id=OTHER_CUSTOMER_ID, role=ActorRole.CUSTOMER)


@pytest.fixture
def provider():
    return Actor(id=PROVIDER_ID, role=ActorRole.PROVIDER)


@pytest.fixture
def other_provider():
    return Actor(id=OTHER_PROVIDER_ID, role=ActorRole.PROVIDER)


@pytest.fixture
def admin():
    return Actor(id=ADMIN_ID, role=ActorRole.ADMIN)


def build_services(session: AsyncSession) -> SimpleNamespace:
    """Build repositories and use cases on one session, the way a request does."""
    requests = ServiceRequestRepository(session)
    invoices = InvoiceRepository(session)
    updates = JobUpdateRepository(session)
    notification_repo = NotificationRepository(session)
    tx = TransactionService(session)
    dispatcher = NotificationDispatcher(notification_repo, tx)
    mark_paid = MarkInvoicePaidUseCase(invoices, dispatcher, tx)

    return SimpleNamespace(
        requests=requests,
        invoices=invoices,
        updates=updates,
        notifications=notification_repo,
        tx=tx,
        dispatcher=dispatcher,
        create_request=CreateServiceRequestUseCase(requests, tx),
        edit_request=EditServiceRequestUseCase(requests, tx),
        transition=TransitionJobUseCase(requests, dispatcher, tx),
        create_invoice=CreateInvoiceUseCase(requests, invoices, dispatcher, tx),
        mark_paid=mark_paid,
        list_invoices=ListInvoicesUseCase(invoices),
        post_update=PostJobUpdateUseCase(requests, updates, dispatcher, tx),
        list_updates=ListJobUpdatesUseCase(requests, updates),
        list_notifications=ListNotificationsUseCase(notification_repo),
        mark_read=MarkNotificationReadUseCase(notification_repo, tx),
    )


@pytest.fixture
def wire():
    """Factory wiring use cases onto a session of the caller's choosing."""
    return build_services


@pytest.fixture
def services(db_session):
    return build_services(db_session)


@pytest.fixture
def open_request(services, customer):
    """Factory opening a pending request for the seeded customer."""

    async def _open(actor: Actor = None, **overrides):
        fields = {
            "title": "Leaking kitchen tap",
            "category": "plumbing",
            "description": "Drips constantly, worse at night",
        }
        fields.update(overrides)
        return await services.create_request.execute(
            CreateServiceRequestRequest(actor=actor or customer, **fields)
        )

    return _open


def bearer(user_id: int, role: str) -> dict:
    """Authorization header as the authentication service would issue it."""
    return {"Authorization": f"Bearer {create_access_token(user_id, role)}"}


@pytest.fixture
def auth():
    return bearer


@pytest.fixture
def client(session_factory, tmp_path, monkeypatch):
    """Create test FastAPI client."""
    from fastapi.testclient import TestClient

    from repairconnect.api.app import create_app
    from repairconnect.config.database import set_session_factory
    from repairconnect.config.settings import settings
    from repairconnect.infrastructure.payments.factory import set_payment_gateway
    from repairconnect.infrastructure.payments.manual import ManualPaymentGateway

    monkeypatch.setattr(settings, "BACKGROUND_WORKERS_ENABLED", False)
    monkeypatch.setattr(settings, "MEDIA_ROOT", str(tmp_path / "uploads"))
    set_session_factory(session_factory)
    set_payment_gateway(ManualPaymentGateway(debug_enabled=False))

    with TestClient(create_app()) as test_client:
        yield test_client

    set_payment_gateway(None)
    set_session_factory(None)
