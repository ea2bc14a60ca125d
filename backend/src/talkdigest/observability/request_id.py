"""Correlation IDs for log lines.

HTTP requests carry the caller's X-Request-ID (or a fresh UUID). Background
work (periodic fetch cycles, reconnect attempts) runs under its own prefixed
ID so its log lines can be grouped the same way.
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

NO_REQUEST_ID = "no-request-id"

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def generate_request_id(prefix: Optional[str] = None) -> str:
    """New correlation ID: a UUID4, or '<prefix>-<12 hex chars>' for background work."""
    if prefix:
        return f"{prefix}-{uuid.uuid4().hex[:12]}"
    return str(uuid.uuid4())


def get_request_id() -> str:
    return request_id_var.get() or NO_REQUEST_ID


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


@contextmanager
def request_context(request_id: Optional[str] = None) -> Iterator[str]:
    """Bind a correlation ID for the duration of the block.

    Example:
        with request_context(generate_request_id("poll")):
            await service.fetch_and_merge()
    """
    token = request_id_var.set(request_id or generate_request_id())
    try:
        yield request_id_var.get()
    finally:
        request_id_var.reset(token)
