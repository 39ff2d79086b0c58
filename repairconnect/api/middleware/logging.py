"""
Request logging and request metrics.
"""

import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response

from repairconnect.config.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
)
from repairconnect.infrastructure.monitoring.metrics import record_api_request

logger = get_logger(__name__)

# Probes would otherwise drown the access log
UNLOGGED_SUFFIXES = ("/health/live", "/health/ready", "/health/metrics")


class LoggingMiddleware:
    """Binds a request id for the duration of each request and records its outcome."""

    def __init__(self, app: FastAPI):
        self.app = app
        self.add_logging_middleware()

    def add_logging_middleware(self) -> None:
        @self.app.middleware("http")
        async def logging_middleware(request: Request, call_next: Callable) -> Response:
            request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
            request.state.request_id = request_id

            clear_request_context()
            bind_request_context(
                request_id=request_id, method=request.method, path=request.url.path
            )
            quiet = request.url.path.endswith(UNLOGGED_SUFFIXES)
            started = time.perf_counter()

            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    "Unhandled error while serving request",
                    error=str(e),
                    duration_ms=round((time.perf_counter() - started) * 1000, 2),
                )
                raise
            finally:
                elapsed = time.perf_counter() - started

            # Label by route template so job ids do not explode metric cardinality
            route = request.scope.get("route")
            record_api_request(
                request.method,
                getattr(route, "path", "unmatched"),
                response.status_code,
                elapsed,
            )

            if not quiet:
                log = logger.warning if response.status_code >= 500 else logger.info
                log(
                    "Request served",
                    status_code=response.status_code,
                    duration_ms=round(elapsed * 1000, 2),
                )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = f"{elapsed:.4f}"
            return response
