"""
Access logging for every request handled by the API.
"""

import time

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger("api.access")


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Log remote address, method, URI and elapsed time of each request."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        status_code = None
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            client = request.client
            uri = request.url.path
            if request.url.query:
                uri = f"{uri}?{request.url.query}"
            logger.info(
                "Request handled",
                remote_addr=f"{client.host}:{client.port}" if client else None,
                method=request.method,
                uri=uri,
                status_code=status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 3),
            )
