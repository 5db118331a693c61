"""
Request logging middleware for FastAPI using Loguru.

Each request gets an ID that is bound to every log line emitted while it is
being handled and echoed back in the ``X-Request-ID`` response header.
"""

import time
import uuid

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from shortify.core.logging import REQUEST_LEVEL

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and latency of every request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        start_time = time.perf_counter()

        with logger.contextualize(request_id=request_id):
            response = await call_next(request)
            process_time_ms = round((time.perf_counter() - start_time) * 1000, 2)

            # Get client IP with forwarded headers consideration
            client_ip = request.client.host if request.client else "unknown"
            if "X-Forwarded-For" in request.headers:
                forwarded_ips = request.headers["X-Forwarded-For"].split(",")
                if forwarded_ips:
                    client_ip = forwarded_ips[0].strip()

            logger.log(
                REQUEST_LEVEL,
                "{method} {path} {status_code} {process_time_ms}ms",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                process_time_ms=process_time_ms,
                client_ip=client_ip,
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
