"""
Unit tests for domain events and who hears about them.
"""

from datetime import datetime, timezone
from decimal import Decimal

from repairconnect.domain.events.invoice_issued import InvoiceIssued
from repairconnect.domain.events.invoice_paid import InvoicePaid
from repairconnect.domain.events.job_status_changed import JobStatusChanged
from repairconnect.domain.events.job_update_posted import JobUpdatePosted
from repairconnect.domain.value_objects.actor import ActorRole
from repairconnect.domain.value_objects.job_status import JobStatus
from repairconnect.domain.value_objects.notification_type import NotificationType


def status_changed(actor_id, actor_role, assigned=2, new_status=JobStatus.ONGOING):
    return JobStatusChanged(
        request_id=7,
        previous_status=JobStatus.TAKEN,
        new_status=new_status,
        actor_id=actor_id,
        actor_role=actor_role,
        customer_id=1,
        assigned_provider_id=assigned,
        changed_at=datetime.now(timezone.utc),
    )


class TestJobStatusChanged:
    def test_provider_change_notifies_customer(self):
        assert status_changed(2, ActorRole.PROVIDER).recipients() == [1]

    def test_customer_cancel_notifies_assigned_provider(self):
        event = status_changed(1, ActorRole.CUSTOMER, new_status=JobStatus.CANCELLED)

        assert event.recipients() == [2]

    def test_customer_cancel_of_unclaimed_request_notifies_nobody(self):
        event = status_changed(1, ActorRole.CUSTOMER, assigned=None, new_status=JobStatus.CANCELLED)

        assert event.recipients() == []

    def test_admin_override_notifies_both_parties(self):
        assert status_changed(4, ActorRole.ADMIN).recipients() == [1, 2]

    def test_admin_override_on_unclaimed_request(self):
        assert status_changed(4, ActorRole.ADMIN, assigned=None).recipients() == [1]

    def test_payload(self):
        event = status_changed(2, ActorRole.PROVIDER, new_status=JobStatus.DONE)

        assert event.notification_type is NotificationType.JOB_STATUS
        assert event.to_payload() == {
            "requestId": 7,
            "newStatus": "done",
            "actorId": 2,
            "actorRole": "provider",
        }


class TestInvoiceEvents:
    def test_invoice_issued_goes_to_customer(self):
        event = InvoiceIssued(
            invoice_id=3, request_id=7, customer_id=1, amount=Decimal("150.00"), currency="USD"
        )

        assert event.recipients() == [1]
        assert event.notification_type is NotificationType.INVOICE
        assert event.to_payload() == {
            "invoiceId": 3,
            "requestId": 7,
            "amount": "150.00",
            "currency": "USD",
        }

    def test_invoice_paid_goes_to_provider(self):
        event = InvoicePaid(invoice_id=3, request_id=7, provider_id=2, amount=Decimal("150.00"))

        assert event.recipients() == [2]
        assert event.notification_type is NotificationType.INVOICE_PAID
        assert event.to_payload() == {"invoiceId": 3, "requestId": 7, "amount": "150.00"}


class TestJobUpdatePosted:
    def test_goes_to_customer(self):
        event = JobUpdatePosted(
            request_id=7, customer_id=1, message="On my way", image_url=None
        )

        assert event.recipients() == [1]
        assert event.to_payload() == {
            "requestId": 7,
            "message": "On my way",
            "imageUrl": None,
        }
