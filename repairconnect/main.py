"""
ASGI entry point: ``uvicorn repairconnect.main:app``.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from repairconnect.api.app import create_app
from repairconnect.background.workers import WorkerManager
from repairconnect.config.database import get_session_factory
from repairconnect.config.logging import configure_logging, get_logger
from repairconnect.config.settings import settings
from repairconnect.infrastructure.payments.factory import get_payment_gateway

configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    gateway = get_payment_gateway()
    logger.info(
        "RepairConnect starting",
        version=settings.APP_VERSION,
        payment_gateway=gateway.name,
        payments_live=gateway.is_live,
        debug_payments=settings.debug_payments_allowed,
    )
    if settings.debug_payments_allowed and not settings.INVOICE_DEBUG_SECRET:
        logger.warning("Debug pay links are enabled without a signing secret")

    # Deployments running Celery beat turn the in-process workers off
    workers = None
    if settings.BACKGROUND_WORKERS_ENABLED:
        workers = WorkerManager(get_session_factory())
        await workers.start_all_workers()
        app.state.worker_manager = workers

    try:
        yield
    finally:
        if workers:
            try:
                await workers.stop_all_workers()
            except Exception as e:
                logger.error("Error stopping workers", error=str(e))
        logger.info("RepairConnect stopped")


def create_main_app() -> FastAPI:
    app = create_app()
    app.router.lifespan_context = lifespan
    return app


app = create_main_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "repairconnect.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
