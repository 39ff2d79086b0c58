"""
Health check implementations for the application.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from repairconnect.config.logging import get_logger
from repairconnect.config.settings import settings
from repairconnect.infrastructure.database.health import get_database_health

logger = get_logger(__name__)


class HealthChecker:
    """Health checker for application components."""

    def __init__(self):
        self.checks = {
            "database": self._check_database,
            "payment_gateway": self._check_payment_gateway,
        }
        # Services that must be healthy to receive traffic
        self.critical_services = ["database"]

    async def run_health_checks(self) -> Dict[str, Any]:
        """Run all health checks."""
        results = {}

        for check_name, check_func in self.checks.items():
            try:
                results[check_name] = await check_func()
            except Exception as e:
                logger.error("Health check failed", check_name=check_name, error=str(e))
                results[check_name] = {"status": "error", "error": str(e)}

        return results

    async def _check_database(self) -> Dict[str, Any]:
        return await get_database_health()

    async def _check_payment_gateway(self) -> Dict[str, Any]:
        """Report which payment path this deployment offers."""
        if settings.payment_gateway_configured:
            return {"status": "healthy", "mode": "stripe"}
        return {
            "status": "healthy",
            "mode": "debug" if settings.debug_payments_allowed else "manual",
        }

    async def get_overall_health(self) -> Dict[str, Any]:
        """Get overall application health status."""
        health_results = await self.run_health_checks()
        critical_healthy = all(
            health_results.get(service, {}).get("status") == "healthy"
            for service in self.critical_services
        )

        return {
            "status": "healthy" if critical_healthy else "unhealthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "services": health_results,
            "critical_services_healthy": critical_healthy,
        }

    async def check_readiness(self) -> bool:
        """Check if the service is ready to receive traffic."""
        health_results = await self.run_health_checks()
        return all(
            health_results.get(service, {}).get("status") == "healthy"
            for service in self.critical_services
        )
