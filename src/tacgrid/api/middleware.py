"""
FastAPI middleware for request correlation and timing.
"""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestCorrelationMiddleware(BaseHTTPMiddleware):
    """
    Attaches a request ID to every request and logs its duration.

    The ID is taken from the request header when present, otherwise
    generated, stored on ``request.state.request_id`` for the error
    handlers, and echoed back in the response header.
    """

    def __init__(self, app, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.header_name, str(uuid.uuid4()))
        request.state.request_id = request_id
        context = {
            "request_id": request_id,
            "http_method": request.method,
            "request_path": request.url.path,
        }

        logger.debug(f"Request started: {request.method} {request.url.path}", extra=context)

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"Request failed: {request.method} {request.url.path} "
                f"- Duration: {duration_ms:.2f}ms",
                exc_info=True,
                extra=context,
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        response.headers[self.header_name] = request_id
        logger.info(
            f"{request.method} {request.url.path} "
            f"- Status: {response.status_code} - Duration: {duration_ms:.2f}ms",
            extra={**context, "duration_ms": duration_ms},
        )
        return response
