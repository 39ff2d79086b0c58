"""
Health check endpoints for the application.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from repairconnect.config.logging import get_logger
from repairconnect.infrastructure.monitoring.health_checks import HealthChecker
from repairconnect.infrastructure.monitoring.metrics import (
    get_metrics,
    get_metrics_content_type,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


async def get_health_checker() -> HealthChecker:
    """Get health checker instance."""
    return HealthChecker()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("")
async def health_check(
    health_checker: HealthChecker = Depends(get_health_checker),
) -> Dict[str, Any]:
    """Overall health with per-component results."""
    return await health_checker.get_overall_health()


@router.get("/ready")
async def readiness_check(
    health_checker: HealthChecker = Depends(get_health_checker),
) -> Dict[str, Any]:
    """Readiness check for Kubernetes."""
    if not await health_checker.check_readiness():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not ready",
        )
    return {"status": "ready", "timestamp": _now()}


@router.get("/live")
async def liveness_check() -> Dict[str, Any]:
    """Liveness check for Kubernetes."""
    return {"status": "alive", "timestamp": _now()}


@router.get("/metrics")
async def prometheus_metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(content=get_metrics(), media_type=get_metrics_content_type())
