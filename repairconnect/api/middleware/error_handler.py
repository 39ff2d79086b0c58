"""
Error handling middleware.
"""

import traceback
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from repairconnect.config.logging import get_logger
from repairconnect.domain.exceptions.gateway_error import (
    CallbackVerificationError,
    GatewayUnavailableError,
    PaymentGatewayError,
    TransientError,
)
from repairconnect.domain.exceptions.validation_error import ValidationError
from repairconnect.domain.exceptions.workflow_error import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    WorkflowError,
)
from repairconnect.infrastructure.monitoring.metrics import record_error

logger = get_logger(__name__)


def _error_response(
    status_code: int,
    error: str,
    error_type: str,
    exc: WorkflowError,
    headers: Optional[dict] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "message": exc.message,
            "type": error_type,
            "details": exc.details,
        },
        headers=headers,
    )


class ErrorHandlerMiddleware:
    """Error handling middleware for FastAPI."""

    def __init__(self, app: FastAPI):
        self.app = app
        self.add_error_handlers()

    def add_error_handlers(self) -> None:
        """Add custom error handlers to FastAPI app."""
        add_error_handlers(self.app)


def add_error_handlers(app: FastAPI) -> None:
    """Add custom error handlers to FastAPI app."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        logger.warning("Validation error", error=str(exc), path=request.url.path)
        return _error_response(400, "Validation Error", "validation_error", exc)

    @app.exception_handler(ForbiddenError)
    async def forbidden_error_handler(request: Request, exc: ForbiddenError):
        logger.warning(
            "Forbidden",
            error=str(exc),
            actor_role=exc.actor_role,
            path=request.url.path,
        )
        return _error_response(403, "Forbidden", "forbidden", exc)

    @app.exception_handler(NotFoundError)
    async def not_found_error_handler(request: Request, exc: NotFoundError):
        return _error_response(404, "Not Found", "not_found", exc)

    @app.exception_handler(ConflictError)
    async def conflict_error_handler(request: Request, exc: ConflictError):
        logger.info("Conflict", error=str(exc), path=request.url.path)
        return _error_response(409, "Conflict", "conflict", exc)

    @app.exception_handler(TransientError)
    async def transient_error_handler(request: Request, exc: TransientError):
        logger.warning("Transient gateway error", error=str(exc), path=request.url.path)
        record_error("TransientError", "payment_gateway")
        headers = {"Retry-After": str(exc.retry_after)} if exc.retry_after else None
        return _error_response(
            503, "Service Unavailable", "transient_error", exc, headers=headers
        )

    @app.exception_handler(PaymentGatewayError)
    async def payment_gateway_error_handler(request: Request, exc: PaymentGatewayError):
        logger.error("Payment gateway rejected request", error=str(exc), path=request.url.path)
        record_error("PaymentGatewayError", "payment_gateway")
        return _error_response(502, "Bad Gateway", "gateway_error", exc)

    @app.exception_handler(GatewayUnavailableError)
    async def gateway_unavailable_handler(
        request: Request, exc: GatewayUnavailableError
    ):
        return _error_response(501, "Not Implemented", "gateway_unavailable", exc)

    @app.exception_handler(CallbackVerificationError)
    async def callback_verification_handler(
        request: Request, exc: CallbackVerificationError
    ):
        logger.warning("Rejected payment callback", error=str(exc))
        record_error("CallbackVerificationError", "payment_gateway")
        return _error_response(400, "Bad Request", "callback_rejected", exc)

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Database error", error=str(exc), path=request.url.path)
        record_error(type(exc).__name__, "database")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Database Error",
                "message": "A database error occurred",
                "type": "database_error",
                "details": {},
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "HTTP Error",
                "message": exc.detail,
                "type": "http_error",
                "details": {},
            },
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            error=str(exc),
            path=request.url.path,
            traceback=traceback.format_exc(),
        )
        record_error(type(exc).__name__, "api")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "message": "An unexpected error occurred",
                "type": "internal_error",
                "details": {},
            },
        )
