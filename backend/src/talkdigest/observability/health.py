"""Health check utilities.

The only external dependency the service keeps open is the mailbox session,
so health is reported per component with the mailbox as the only component checked.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from ..domain.mailbox import ConnectionState, MailboxSession


class HealthStatus(str, Enum):
    """Health check status enum."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


@dataclass
class ComponentHealth:
    """Health status for a single component."""
    status: HealthStatus
    message: Optional[str] = None


def check_mailbox_health(session: MailboxSession) -> ComponentHealth:
    """Map the mailbox session state onto a component health value.

    A disconnected mailbox only degrades the service: stored messages can
    still be processed.
    """
    if session.state == ConnectionState.CONNECTED:
        return ComponentHealth(status=HealthStatus.HEALTHY, message="Mailbox connected")

    if session.state in (ConnectionState.CONNECTING, ConnectionState.BACKOFF):
        return ComponentHealth(
            status=HealthStatus.DEGRADED,
            message=f"Mailbox {session.state.value.lower()} "
                    f"(failures={session.consecutive_failures})",
        )

    return ComponentHealth(
        status=HealthStatus.DEGRADED,
        message=session.last_error or "Mailbox not connected",
    )


def get_overall_health(components: Dict[str, ComponentHealth]) -> HealthStatus:
    """Determine overall system health from component health.

    Args:
        components: Dict of component name to health status

    Returns:
        HealthStatus: UNHEALTHY if any component is unhealthy,
            DEGRADED if any is degraded, else HEALTHY
    """
    statuses = [c.status for c in components.values()]
    if HealthStatus.UNHEALTHY in statuses:
        return HealthStatus.UNHEALTHY
    if HealthStatus.DEGRADED in statuses:
        return HealthStatus.DEGRADED
    return HealthStatus.HEALTHY
