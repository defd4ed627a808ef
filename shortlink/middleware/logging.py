"""
Logging Middleware for Request/Response Logging

This middleware logs all HTTP requests and responses for observability.
It captures:
- Request method and path
- Response status code
- Request processing time
- Client IP address

The request id is attached to the record by the logging filter, see
shortlink.core.logging_config.
"""

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from shortlink.core.logging_config import get_logger

logger = get_logger("access")


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging HTTP requests and responses.

    It wraps the request/response cycle to add logging without
    modifying endpoint code.
    """

    async def dispatch(self, request: Request, call_next):
        """
        Process request and log details.

        Args:
            request: The incoming HTTP request
            call_next: The next middleware/endpoint in the chain

        Returns:
            Response object
        """
        client_ip = self._get_client_ip(request)

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # Recovery sits outside this layer and will answer with a 500
            self._log(request, 500, time.perf_counter() - start_time, client_ip)
            raise
        process_time = time.perf_counter() - start_time

        self._log(request, response.status_code, process_time, client_ip)

        response.headers["X-Process-Time"] = str(process_time)

        return response

    def _log(self, request: Request, status_code: int, process_time: float, client_ip: str) -> None:
        # Format: METHOD PATH STATUS_CODE PROCESS_TIME_MS CLIENT_IP
        logger.info(
            "%s %s %s %.2fms IP:%s",
            request.method,
            request.url.path,
            status_code,
            process_time * 1000,
            client_ip,
        )

    def _get_client_ip(self, request: Request) -> str:
        """
        Extract client IP address from request.

        Handles proxies and load balancers by checking X-Forwarded-For header.
        """
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            # X-Forwarded-For can contain multiple IPs, take the first one
            return forwarded_for.split(",")[0].strip()

        return request.client.host if request.client else "unknown"


def add_logging_middleware(app):
    """
    Add logging middleware to FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(LoggingMiddleware)
