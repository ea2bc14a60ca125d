"""Request correlation middleware.

Binds X-Request-ID for every request, echoes it on the response and logs
one line when the request starts and one when it ends.
"""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .request_id import request_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        route = {"method": request.method, "path": request.url.path}

        with request_context(request.headers.get(REQUEST_ID_HEADER)) as request_id:
            started = time.perf_counter()
            logger.info(f"{request.method} {request.url.path}", extra=route)

            try:
                response = await call_next(request)
            except Exception:
                logger.exception(
                    f"{request.method} {request.url.path} raised",
                    extra={**route, "duration_ms": _elapsed_ms(started)},
                )
                raise

            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code}",
                extra={**route, "status_code": response.status_code, "duration_ms": _elapsed_ms(started)},
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
