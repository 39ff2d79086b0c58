"""
Structured logging for the workflow service.

Every log line carries the service name and environment; request handlers
bind ``request_id`` through structlog's context variables so that use case
and repository logs emitted while serving a request can be correlated.
"""

import logging
import sys
from typing import Any, Dict

import structlog

from repairconnect.config.settings import settings

# Never written to logs, whatever the call site passes
REDACTED_KEYS = frozenset(
    {"authorization", "token", "signature", "stripe_signature", "secret", "password"}
)

QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "asyncio", "httpx", "stripe")


def redact_secrets(_, __, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    for key in list(event_dict):
        if key.lower() in REDACTED_KEYS:
            event_dict[key] = "***"
    return event_dict


def add_service_context(_, __, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    event_dict.setdefault("service", "repairconnect")
    event_dict.setdefault("environment", settings.ENVIRONMENT)
    return event_dict


def configure_logging() -> None:
    """Configure structlog on top of the standard library logger."""
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.ENVIRONMENT in ("production", "staging")
        else structlog.dev.ConsoleRenderer(colors=True)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_service_context,
            redact_secrets,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL),
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_request_context(**values: Any) -> None:
    """Attach values to every log line emitted while serving this request."""
    structlog.contextvars.bind_contextvars(**values)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: str = None) -> structlog.BoundLogger:
    """Get a structured logger."""
    return structlog.get_logger(name)
