"""
FastAPI application factory.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from repairconnect.api.middleware.error_handler import ErrorHandlerMiddleware
from repairconnect.api.middleware.logging import LoggingMiddleware
from repairconnect.api.routes import health, invoices, jobs, media, notifications, payments
from repairconnect.config.logging import get_logger
from repairconnect.config.settings import settings

logger = get_logger(__name__)


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Service request lifecycle, billing and notifications",
        openapi_url=f"{settings.API_PREFIX}/openapi.json" if settings.DEBUG else None,
        docs_url=f"{settings.API_PREFIX}/docs" if settings.DEBUG else None,
        redoc_url=f"{settings.API_PREFIX}/redoc" if settings.DEBUG else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add custom middleware
    ErrorHandlerMiddleware(app)
    LoggingMiddleware(app)

    # Add routes
    app.include_router(health.router, prefix=settings.API_PREFIX)
    app.include_router(jobs.router, prefix=settings.API_PREFIX)
    app.include_router(invoices.router, prefix=settings.API_PREFIX)
    app.include_router(payments.router, prefix=settings.API_PREFIX)
    app.include_router(notifications.router, prefix=settings.API_PREFIX)
    app.include_router(media.router, prefix=settings.API_PREFIX)

    app.mount(
        settings.MEDIA_URL_PREFIX,
        StaticFiles(directory=settings.MEDIA_ROOT, check_dir=False),
        name="media",
    )

    return app
