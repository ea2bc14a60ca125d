"""Logging, request correlation and the health check."""

from .health import ComponentHealth, HealthStatus, check_mailbox_health, get_overall_health
from .logging_config import configure_logging
from .middleware import RequestIDMiddleware
from .request_id import (
    generate_request_id,
    get_request_id,
    request_context,
    request_id_var,
    set_request_id,
)

__all__ = [
    "configure_logging",
    "RequestIDMiddleware",
    "generate_request_id",
    "get_request_id",
    "request_context",
    "request_id_var",
    "set_request_id",
    "ComponentHealth",
    "HealthStatus",
    "check_mailbox_health",
    "get_overall_health",
]
