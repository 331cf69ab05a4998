"""API middleware: per-request logging with timing and request ids."""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request and tag the response with its id and duration.

    An incoming ``X-Request-ID`` is echoed back; otherwise a new one is
    generated. Server errors are logged at WARNING.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        client = request.client.host if request.client else "unknown"
        start = time.perf_counter()

        logger.info("[%s] %s %s client=%s", request_id, request.method, request.url.path, client)

        response = await call_next(request)

        duration = time.perf_counter() - start
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "[%s] %s %s status=%d duration=%.3fs",
            request_id,
            request.method,
            request.url.path,
            response.status_code,
            duration,
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[PROCESS_TIME_HEADER] = f"{duration:.3f}"
        return response
