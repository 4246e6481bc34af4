"""Health service implementation."""

import time
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ..schemas.common import HealthCheckResponse
from ..timeutils import utc_now
from .cleanup import CleanupScheduler
from .interfaces import IHealthService


class HealthService(IHealthService):
    """Health check service implementation."""

    def __init__(self, session: AsyncSession, scheduler: Optional[CleanupScheduler] = None):
        self.session = session
        self.scheduler = scheduler
        self.settings = get_settings()

    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
        db_health = await self.check_database_health()
        cleanup_health = self.check_cleanup_health()

        overall_status = "healthy" if db_health["connected"] else "unhealthy"

        return HealthCheckResponse(
            status=overall_status,
            timestamp=utc_now(),
            version=self.settings.app_version,
            checks={"database": db_health, "cleanup": cleanup_health},
        )

    async def check_database_health(self) -> Dict[str, Any]:
        """Check DB connection."""
        start = time.perf_counter()
        try:
            result = await self.session.execute(text("SELECT 1"))
            result.scalar()
        except Exception as e:
            return {
                "connected": False,
                "status": "unhealthy",
                "error": type(e).__name__,
                "response_time_ms": None,
            }

        return {
            "connected": True,
            "status": "healthy",
            "response_time_ms": round((time.perf_counter() - start) * 1000, 2),
        }

    def check_cleanup_health(self) -> Dict[str, Any]:
        """Scheduler state; a failed last sweep degrades but does not fail health."""
        if self.scheduler is None:
            return {"status": "disabled", "running": False}

        status = self.scheduler.status()
        status["status"] = "degraded" if status["last_error"] else "healthy"
        return status
