"""
Logging middleware for request/response tracking.

Logs every HTTP request on arrival and on completion with method, path,
status code, latency and correlation id. Unhandled exceptions are logged
with their traceback and re-raised.

Must be registered AFTER RequestIDMiddleware to access request_id.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ordermanagement.core.logging_config import get_logger


logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to log all HTTP requests and responses.

    Example:
        app.add_middleware(LoggingMiddleware)
        app.add_middleware(RequestIDMiddleware)  # added last, runs first

    Log output (JSON):
        {
            "timestamp": "2025-11-24T10:30:00.123456",
            "level": "INFO",
            "message": "Request completed",
            "method": "PUT",
            "path": "/api/orders/1/confirm",
            "status_code": 200,
            "latency_ms": 12.5,
            "request_id": "abc-123"
        }
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        method = request.method
        path = request.url.path
        request_id = getattr(request.state, "request_id", None)

        logger.info(
            "Request started",
            extra={
                "method": method,
                "path": path,
                "query_params": str(request.query_params) or None,
                "request_id": request_id,
            }
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"Request failed: {exc}",
                extra={
                    "method": method,
                    "path": path,
                    "latency_ms": round((time.perf_counter() - start_time) * 1000, 2),
                    "request_id": request_id,
                    "exception_type": type(exc).__name__,
                },
                exc_info=True
            )
            raise

        level = "warning" if response.status_code >= 500 else "info"
        getattr(logger, level)(
            "Request completed",
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "latency_ms": round((time.perf_counter() - start_time) * 1000, 2),
                "request_id": request_id,
            }
        )
        return response
