"""
Shared mocks for use case tests.
"""

from unittest.mock import AsyncMock

import pytest

from repairconnect.application.interfaces.repositories import (
    InvoiceRepositoryInterface,
    JobUpdateRepositoryInterface,
    ServiceRequestRepositoryInterface,
)


@pytest.fixture
def mock_transaction_service():
    """Transaction service that runs the operation and records commits."""

    async def run(operation):
        return await operation()

    service = AsyncMock()
    service.execute_in_transaction = AsyncMock(side_effect=run)
    service.commit = AsyncMock()
    service.rollback = AsyncMock()
    return service


@pytest.fixture
def mock_request_repository():
    return AsyncMock(spec=ServiceRequestRepositoryInterface)


@pytest.fixture
def mock_invoice_repository():
    return AsyncMock(spec=InvoiceRepositoryInterface)


@pytest.fixture
def mock_update_repository():
    return AsyncMock(spec=JobUpdateRepositoryInterface)


@pytest.fixture
def mock_dispatcher():
    dispatcher = AsyncMock()
    dispatcher.dispatch = AsyncMock(return_value=[])
    dispatcher.stage = AsyncMock(return_value=[])
    return dispatcher
