"""
Integration tests for invoicing and payment against a real database.
"""

from unittest.mock import AsyncMock

import pytest

from repairconnect.application.use_cases.create_invoice import CreateInvoiceRequest
from repairconnect.domain.exceptions.workflow_error import (
    ConflictError,
    InvoiceAlreadyPaidError,
)
from repairconnect.domain.value_objects.notification_type import NotificationType
from repairconnect.domain.value_objects.payment_method import PaymentMethod


@pytest.fixture
def finished_request(services, open_request, provider):
    """Factory producing a request that the seeded provider has finished."""

    async def _finish():
        request = await open_request()
        await services.transition.take(provider, request.id)
        await services.transition.start(provider, request.id)
        return await services.transition.finish(provider, request.id)

    return _finish


@pytest.fixture
def issue_invoice(services, provider):
    async def _issue(request_id, amount="150.00", currency="USD"):
        return await services.create_invoice.execute(
            CreateInvoiceRequest(
                actor=provider, request_id=request_id, amount=amount, currency=currency
            )
        )

    return _issue


class TestMarkPaid:
    @pytest.mark.asyncio
    async def test_second_payment_conflicts_and_paid_at_is_kept(
        self, services, finished_request, issue_invoice, customer, provider
    ):
        request = await finished_request()
        invoice = await issue_invoice(request.id)

        first = await services.mark_paid.execute(customer, invoice.id)

        with pytest.raises(InvoiceAlreadyPaidError) as exc_info:
            await services.mark_paid.execute(provider, invoice.id)
        assert isinstance(exc_info.value, ConflictError)

        stored = await services.invoices.get_by_id(invoice.id)
        assert stored.paid is True
        assert stored.paid_at == first.paid_at
        assert stored.paid_via is PaymentMethod.MANUAL

        paid_notes = [
            n
            for n in await services.notifications.list_for_user(provider.id)
            if n.type is NotificationType.INVOICE_PAID
        ]
        assert len(paid_notes) == 1

    @pytest.mark.asyncio
    async def test_stale_reader_cannot_pay_twice(
        self, session_factory, wire, finished_request, issue_invoice, customer, admin
    ):
        request = await finished_request()
        invoice = await issue_invoice(request.id)

        async with session_factory() as session_b:
            services_b = wire(session_b)
            unpaid_snapshot = await services_b.invoices.get_by_id(invoice.id)

            async with session_factory() as session_a:
                await wire(session_a).mark_paid.execute(customer, invoice.id)

            services_b.invoices.get_by_id = AsyncMock(return_value=unpaid_snapshot)
            with pytest.raises(InvoiceAlreadyPaidError):
                await services_b.mark_paid.execute(admin, invoice.id)


class TestInvoiceCreation:
    @pytest.mark.asyncio
    async def test_each_role_sees_the_invoice_once(
        self, services, finished_request, issue_invoice, customer, provider, admin,
        other_customer, other_provider,
    ):
        request = await finished_request()
        invoice = await issue_invoice(request.id, amount="150.00")

        for actor in (provider, customer, admin):
            listed = [i for i in await services.list_invoices.execute(actor) if i.id == invoice.id]
            assert len(listed) == 1
            assert str(listed[0].amount) == "150.00"
            assert listed[0].currency == "USD"

        for actor in (other_customer, other_provider):
            assert await services.list_invoices.execute(actor) == []

    @pytest.mark.asyncio
    async def test_paid_filter(self, services, finished_request, issue_invoice, customer):
        request = await finished_request()
        unpaid = await issue_invoice(request.id, amount="40")
        paid = await issue_invoice(request.id, amount="60")
        await services.mark_paid.execute(customer, paid.id)

        assert [i.id for i in await services.list_invoices.execute(customer, paid=False)] == [
            unpaid.id
        ]
        assert [i.id for i in await services.list_invoices.execute(customer, paid=True)] == [
            paid.id
        ]

    @pytest.mark.asyncio
    async def test_multiple_unpaid_invoices_per_job(
        self, services, finished_request, issue_invoice
    ):
        request = await finished_request()
        await issue_invoice(request.id, amount="100")
        await issue_invoice(request.id, amount="25.50")

        invoices = await services.invoices.list_by_request(request.id)
        assert sorted(str(i.amount) for i in invoices) == ["100.00", "25.50"]

    @pytest.mark.asyncio
    async def test_invoice_and_notification_are_atomic(
        self, services, finished_request, issue_invoice, customer
    ):
        request = await finished_request()
        services.dispatcher.stage = AsyncMock(side_effect=RuntimeError("notification insert failed"))

        with pytest.raises(RuntimeError):
            await issue_invoice(request.id)

        assert await services.invoices.list_by_request(request.id) == []
        invoice_notes = [
            n
            for n in await services.notifications.list_for_user(customer.id)
            if n.type is NotificationType.INVOICE
        ]
        assert invoice_notes == []

    @pytest.mark.asyncio
    async def test_cannot_invoice_unfinished_job(
        self, services, open_request, issue_invoice, provider
    ):
        request = await open_request()
        await services.transition.take(provider, request.id)

        with pytest.raises(ConflictError) as exc_info:
            await issue_invoice(request.id)

        assert exc_info.value.details["current_status"] == "taken"
