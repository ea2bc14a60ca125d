"""Observability API endpoints.

Provides the liveness/health check for monitoring.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from ..dependencies import Service
from .health import HealthStatus, check_mailbox_health, get_overall_health

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Observability"])


@router.get(
    "/health",
    summary="Health check endpoint",
    description="Returns service health with the mailbox connection as component",
    status_code=200,
)
async def health_check(service: Service):
    """Check health of the service.

    A disconnected mailbox reports DEGRADED but still answers 200: stored
    messages can be processed without it. Only UNHEALTHY yields 503.

    Returns:
        dict: Overall status, component statuses, uptime and timestamp
    """
    components = {
        "mailbox": check_mailbox_health(service.connection_manager.session),
    }
    overall_status = get_overall_health(components)

    response_data = {
        "status": overall_status.value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime_seconds": round(service.uptime_seconds, 1),
        "mailbox_connected": service.connection_manager.session.is_connected,
        "components": {
            name: {"status": health.status.value, "message": health.message}
            for name, health in components.items()
        },
    }

    if overall_status == HealthStatus.UNHEALTHY:
        logger.warning("Health check failed", extra={"status_code": 503})
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=response_data)

    return response_data
