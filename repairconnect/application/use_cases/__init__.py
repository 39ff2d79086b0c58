"""
Use cases package.

This package contains the business logic use cases that orchestrate
the application services and repositories.
"""

from .create_invoice import CreateInvoiceRequest, CreateInvoiceUseCase
from .create_request import CreateServiceRequestRequest, CreateServiceRequestUseCase
from .edit_request import EditServiceRequestRequest, EditServiceRequestUseCase
from .job_updates import ListJobUpdatesUseCase, PostJobUpdateRequest, PostJobUpdateUseCase
from .list_invoices import GetInvoiceUseCase, ListInvoicesUseCase
from .mark_invoice_paid import MarkInvoicePaidUseCase
from .notifications import ListNotificationsUseCase, MarkNotificationReadUseCase
from .payments import (
    CallbackResult,
    CreateCheckoutUseCase,
    DebugPayUseCase,
    HandlePaymentCallbackUseCase,
)
from .query_jobs import GetJobDetailUseCase, JobDetail, ListJobsUseCase
from .reclaim_archived_requests import ReclaimArchivedRequestsUseCase
from .transition_job import TransitionJobUseCase

__all__ = [
    "CreateInvoiceRequest",
    "CreateInvoiceUseCase",
    "CreateServiceRequestRequest",
    "CreateServiceRequestUseCase",
    "EditServiceRequestRequest",
    "EditServiceRequestUseCase",
    "ListJobUpdatesUseCase",
    "PostJobUpdateRequest",
    "PostJobUpdateUseCase",
    "GetInvoiceUseCase",
    "ListInvoicesUseCase",
    "MarkInvoicePaidUseCase",
    "ListNotificationsUseCase",
    "MarkNotificationReadUseCase",
    "CallbackResult",
    "CreateCheckoutUseCase",
    "DebugPayUseCase",
    "HandlePaymentCallbackUseCase",
    "GetJobDetailUseCase",
    "JobDetail",
    "ListJobsUseCase",
    "ReclaimArchivedRequestsUseCase",
    "TransitionJobUseCase",
]
