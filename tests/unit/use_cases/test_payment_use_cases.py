"""
Unit tests for checkout, gateway callbacks and debug pay links.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from repairconnect.application.interfaces.gateways import (
    CheckoutSession,
    PaymentCallback,
    PaymentGatewayInterface,
)
from repairconnect.application.use_cases.mark_invoice_paid import MarkInvoicePaidUseCase
from repairconnect.application.use_cases.payments import (
    CreateCheckoutUseCase,
    DebugPayUseCase,
    HandlePaymentCallbackUseCase,
)
from repairconnect.config.settings import settings
from repairconnect.domain.entities.invoice import Invoice
from repairconnect.domain.exceptions.gateway_error import (
    CallbackVerificationError,
    TransientError,
)
from repairconnect.domain.exceptions.workflow_error import (
    ForbiddenError,
    InvoiceAlreadyPaidError,
    NotFoundError,
)
from repairconnect.domain.value_objects.actor import Actor, ActorRole
from repairconnect.domain.value_objects.payment_method import PaymentMethod
from repairconnect.infrastructure.payments.debug_links import make_debug_token

CUSTOMER = Actor(id=1, role=ActorRole.CUSTOMER)
OTHER_CUSTOMER = Actor(id=5, role=ActorRole.CUSTOMER)


def make_invoice(paid=False) -> Invoice:
    return Invoice(
        id=3, request_id=7, provider_id=2, customer_id=1, amount="150.00", paid=paid
    )


def completed_event(invoice_id=3) -> PaymentCallback:
    return PaymentCallback(
        event_type="checkout.session.completed",
        invoice_id=invoice_id,
        external_id="cs_test_1",
        payment_status="paid",
        raw={},
    )


@pytest.fixture
def mock_gateway():
    gateway = MagicMock(spec=PaymentGatewayInterface)
    gateway.name = "mock"
    gateway.create_checkout_session = AsyncMock(
        return_value=CheckoutSession(invoice_id=3, url="https://pay.example/cs_test_1")
    )
    return gateway


@pytest.fixture
def mock_mark_paid():
    return AsyncMock(spec=MarkInvoicePaidUseCase)


class TestCreateCheckoutUseCase:
    @pytest.mark.asyncio
    async def test_returns_gateway_link(self, mock_invoice_repository, mock_gateway):
        mock_invoice_repository.get_by_id.return_value = make_invoice()

        session = await CreateCheckoutUseCase(mock_invoice_repository, mock_gateway).execute(
            CUSTOMER, 3
        )

        assert session.url == "https://pay.example/cs_test_1"
        mock_gateway.create_checkout_session.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_paid_invoice_rejected(self, mock_invoice_repository, mock_gateway):
        mock_invoice_repository.get_by_id.return_value = make_invoice(paid=True)

        with pytest.raises(InvoiceAlreadyPaidError):
            await CreateCheckoutUseCase(mock_invoice_repository, mock_gateway).execute(
                CUSTOMER, 3
            )
        mock_gateway.create_checkout_session.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("actor", [OTHER_CUSTOMER, Actor.system()])
    async def test_non_party_rejected(self, mock_invoice_repository, mock_gateway, actor):
        mock_invoice_repository.get_by_id.return_value = make_invoice()

        with pytest.raises(ForbiddenError):
            await CreateCheckoutUseCase(mock_invoice_repository, mock_gateway).execute(
                actor, 3
            )

    @pytest.mark.asyncio
    async def test_missing_invoice(self, mock_invoice_repository, mock_gateway):
        mock_invoice_repository.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await CreateCheckoutUseCase(mock_invoice_repository, mock_gateway).execute(
                CUSTOMER, 3
            )

    @pytest.mark.asyncio
    async def test_transient_gateway_failure_propagates(
        self, mock_invoice_repository, mock_gateway
    ):
        mock_invoice_repository.get_by_id.return_value = make_invoice()
        mock_gateway.create_checkout_session.side_effect = TransientError(
            "Payment gateway timed out", retry_after=30
        )

        with pytest.raises(TransientError) as exc_info:
            await CreateCheckoutUseCase(mock_invoice_repository, mock_gateway).execute(
                CUSTOMER, 3
            )
        assert exc_info.value.retry_after == 30
        mock_invoice_repository.mark_paid.assert_not_awaited()


class TestHandlePaymentCallbackUseCase:
    @pytest.mark.asyncio
    async def test_completed_checkout_marks_paid(self, mock_gateway, mock_mark_paid):
        mock_gateway.verify_callback.return_value = completed_event()

        result = await HandlePaymentCallbackUseCase(mock_gateway, mock_mark_paid).execute(
            b"{}", "t=1,v1=sig"
        )

        assert result.status == "paid"
        assert result.invoice_id == 3
        actor, invoice_id, method = mock_mark_paid.execute.await_args.args
        assert actor.is_system
        assert invoice_id == 3
        assert method is PaymentMethod.GATEWAY

    @pytest.mark.asyncio
    async def test_unverified_callback_is_rejected(self, mock_gateway, mock_mark_paid):
        mock_gateway.verify_callback.side_effect = CallbackVerificationError("bad signature")

        with pytest.raises(CallbackVerificationError):
            await HandlePaymentCallbackUseCase(mock_gateway, mock_mark_paid).execute(
                b"{}", "forged"
            )
        mock_mark_paid.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_redelivery_is_acknowledged_as_duplicate(self, mock_gateway, mock_mark_paid):
        mock_gateway.verify_callback.return_value = completed_event()
        mock_mark_paid.execute.side_effect = InvoiceAlreadyPaidError(3)

        result = await HandlePaymentCallbackUseCase(mock_gateway, mock_mark_paid).execute(
            b"{}", "sig"
        )

        assert result.status == "duplicate"

    @pytest.mark.asyncio
    async def test_unknown_invoice_is_ignored(self, mock_gateway, mock_mark_paid):
        mock_gateway.verify_callback.return_value = completed_event(invoice_id=999)
        mock_mark_paid.execute.side_effect = NotFoundError("Invoice", 999)

        result = await HandlePaymentCallbackUseCase(mock_gateway, mock_mark_paid).execute(
            b"{}", "sig"
        )

        assert result.status == "ignored"
        assert result.invoice_id == 999

    @pytest.mark.asyncio
    async def test_other_events_are_ignored(self, mock_gateway, mock_mark_paid):
        mock_gateway.verify_callback.return_value = PaymentCallback(
            event_type="checkout.session.expired", invoice_id=3, external_id="cs_1", raw={}
        )

        result = await HandlePaymentCallbackUseCase(mock_gateway, mock_mark_paid).execute(
            b"{}", "sig"
        )

        assert result.status == "ignored"
        mock_mark_paid.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_completed_without_correlation_is_ignored(self, mock_gateway, mock_mark_paid):
        mock_gateway.verify_callback.return_value = completed_event(invoice_id=None)

        result = await HandlePaymentCallbackUseCase(mock_gateway, mock_mark_paid).execute(
            b"{}", "sig"
        )

        assert result.status == "ignored"
        mock_mark_paid.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_completed_session_awaiting_funds_is_ignored(
        self, mock_gateway, mock_mark_paid
    ):
        mock_gateway.verify_callback.return_value = PaymentCallback(
            event_type="checkout.session.completed",
            invoice_id=3,
            external_id="cs_test_1",
            payment_status="unpaid",
            raw={},
        )

        result = await HandlePaymentCallbackUseCase(mock_gateway, mock_mark_paid).execute(
            b"{}", "sig"
        )

        assert result.status == "ignored"
        mock_mark_paid.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_async_payment_success_marks_paid(self, mock_gateway, mock_mark_paid):
        mock_gateway.verify_callback.return_value = PaymentCallback(
            event_type="checkout.session.async_payment_succeeded",
            invoice_id=3,
            external_id="cs_test_1",
            payment_status="paid",
            raw={},
        )

        await HandlePaymentCallbackUseCase(mock_gateway, mock_mark_paid).execute(
            b"{}", "sig"
        )

        mock_mark_paid.execute.assert_awaited_once()


class TestDebugPayUseCase:
    @pytest.mark.asyncio
    async def test_refused_by_default(self, mock_mark_paid):
        with pytest.raises(ForbiddenError):
            await DebugPayUseCase(mock_mark_paid).execute(3, None)

        mock_mark_paid.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_refused_in_production_even_when_enabled(self, monkeypatch, mock_mark_paid):
        monkeypatch.setattr(settings, "INVOICE_DEBUG_ENABLED", True)
        monkeypatch.setattr(settings, "ENVIRONMENT", "production")

        with pytest.raises(ForbiddenError):
            await DebugPayUseCase(mock_mark_paid).execute(3, None)

    @pytest.mark.asyncio
    async def test_enabled_without_secret(self, monkeypatch, mock_mark_paid):
        monkeypatch.setattr(settings, "INVOICE_DEBUG_ENABLED", True)
        monkeypatch.setattr(settings, "ENVIRONMENT", "development")
        monkeypatch.setattr(settings, "INVOICE_DEBUG_SECRET", None)

        await DebugPayUseCase(mock_mark_paid).execute(3, None)

        actor, invoice_id, method = mock_mark_paid.execute.await_args.args
        assert actor.is_system
        assert invoice_id == 3
        assert method is PaymentMethod.DEBUG

    @pytest.mark.asyncio
    async def test_secret_requires_matching_token(self, monkeypatch, mock_mark_paid):
        monkeypatch.setattr(settings, "INVOICE_DEBUG_ENABLED", True)
        monkeypatch.setattr(settings, "ENVIRONMENT", "development")
        monkeypatch.setattr(settings, "INVOICE_DEBUG_SECRET", "s3cret")

        with pytest.raises(ForbiddenError):
            await DebugPayUseCase(mock_mark_paid).execute(3, "wrong")
        with pytest.raises(ForbiddenError):
            await DebugPayUseCase(mock_mark_paid).execute(3, make_debug_token(4))

        await DebugPayUseCase(mock_mark_paid).execute(3, make_debug_token(3))
        mock_mark_paid.execute.assert_awaited_once()
