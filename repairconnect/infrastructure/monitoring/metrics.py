"""
Prometheus metrics for the job workflow.
"""

import os

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    multiprocess,
)

registry = CollectorRegistry()

if os.getenv("PROMETHEUS_MULTIPROC_DIR"):
    multiprocess.MultiProcessCollector(registry)


def get_registry() -> CollectorRegistry:
    """Get the current registry."""
    return registry


def _get_metric(metric_class, *args, **kwargs):
    return metric_class(*args, **kwargs, registry=get_registry())


# Job lifecycle
JOB_TRANSITIONS = _get_metric(
    Counter,
    "job_transitions_total",
    "Total number of applied job status transitions",
    ["target_status", "actor_role"],
)

JOB_TRANSITIONS_REJECTED = _get_metric(
    Counter,
    "job_transitions_rejected_total",
    "Total number of rejected job status transitions",
    ["error_type"],
)

# Billing
INVOICES_CREATED = _get_metric(
    Counter,
    "invoices_created_total",
    "Total number of invoices issued",
    ["currency"],
)

INVOICES_PAID = _get_metric(
    Counter,
    "invoices_paid_total",
    "Total number of invoices marked paid",
    ["paid_via"],
)

GATEWAY_REQUEST_DURATION = _get_metric(
    Histogram,
    "payment_gateway_request_duration_seconds",
    "Time spent waiting on the payment gateway",
    ["gateway", "operation"],
    buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
)

# Notifications
NOTIFICATIONS_EMITTED = _get_metric(
    Counter,
    "notifications_emitted_total",
    "Total number of notifications written",
    ["type"],
)

NOTIFICATIONS_FAILED = _get_metric(
    Counter,
    "notifications_failed_total",
    "Total number of notification writes that failed",
    ["type"],
)

NOTIFICATIONS_RETRIED = _get_metric(
    Counter,
    "notifications_retried_total",
    "Total number of notification retry attempts",
    ["status"],
)

NOTIFICATIONS_DROPPED = _get_metric(
    Counter,
    "notifications_dropped_total",
    "Total number of notifications given up on",
    ["reason"],
)

# Sweep
SWEEP_DELETED = _get_metric(
    Counter,
    "sweep_requests_deleted_total",
    "Total number of service requests removed by the sweep",
)

SWEEP_FAILURES = _get_metric(
    Counter,
    "sweep_failures_total",
    "Total number of sweep batches that failed",
)

# API metrics
API_REQUESTS = _get_metric(
    Counter,
    "api_requests_total",
    "Total number of API requests",
    ["method", "endpoint", "status_code"],
)

API_REQUEST_DURATION = _get_metric(
    Histogram,
    "api_request_duration_seconds",
    "Time spent processing API requests",
    ["method", "endpoint"],
    buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
)

ERRORS_TOTAL = _get_metric(
    Counter,
    "errors_total",
    "Total number of errors",
    ["error_type", "component"],
)


def record_transition(target_status: str, actor_role: str):
    """Record an applied status transition."""
    JOB_TRANSITIONS.labels(target_status=target_status, actor_role=actor_role).inc()


def record_rejected_transition(error_type: str):
    JOB_TRANSITIONS_REJECTED.labels(error_type=error_type).inc()


def record_invoice_created(currency: str):
    INVOICES_CREATED.labels(currency=currency).inc()


def record_invoice_paid(paid_via: str):
    INVOICES_PAID.labels(paid_via=paid_via).inc()


def record_notification(notification_type: str, status: str):
    """Record the outcome of a notification write."""
    if status == "success":
        NOTIFICATIONS_EMITTED.labels(type=notification_type).inc()
    else:
        NOTIFICATIONS_FAILED.labels(type=notification_type).inc()


def record_notification_retry(status: str):
    NOTIFICATIONS_RETRIED.labels(status=status).inc()


def record_notification_dropped(reason: str):
    NOTIFICATIONS_DROPPED.labels(reason=reason).inc()


def record_sweep(deleted: int):
    SWEEP_DELETED.inc(deleted)


def record_sweep_failure():
    SWEEP_FAILURES.inc()


def record_api_request(method: str, endpoint: str, status_code: int, duration: float):
    """Record API request metric."""
    API_REQUESTS.labels(
        method=method, endpoint=endpoint, status_code=str(status_code)
    ).inc()
    API_REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration)


def record_error(error_type: str, component: str):
    """Record error metric."""
    ERRORS_TOTAL.labels(error_type=error_type, component=component).inc()


def get_metrics() -> bytes:
    """Render the registry in Prometheus text format."""
    return generate_latest(get_registry())


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
