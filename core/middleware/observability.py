"""
Observability middleware.

Assigns a correlation id to every request, binds it to the logging
context, and reports the outcome of the request in logs and headers.
"""

import logging
import time
import uuid
from typing import Callable

from django.http import HttpRequest, HttpResponse

from core.request_context import bind_correlation_id, reset_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_META_KEY = "HTTP_X_CORRELATION_ID"
MAX_CORRELATION_ID_LENGTH = 128

# (status, log level, message) by status code class
_OUTCOMES = {
    5: ("server_error", logging.ERROR, "Request completed with server error"),
    4: ("client_error", logging.WARNING, "Request completed with client error"),
}
_SUCCESS = ("success", logging.INFO, "Request completed successfully")


class ObservabilityMiddleware:
    """
    Middleware for request observability.

    This middleware:
    1. Reuses the caller's X-Correlation-ID or generates a new one
    2. Binds it to the logging context for the duration of the request
    3. Logs request start and completion with duration
    4. Adds X-Correlation-ID, X-Request-Status and X-Request-Duration headers
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request and add observability.

        Args:
            request: HTTP request

        Returns:
            HTTP response with observability headers
        """
        correlation_id = self._correlation_id_for(request)
        request.correlation_id = correlation_id  # type: ignore
        token = bind_correlation_id(correlation_id)
        start_time = time.monotonic()

        try:
            logger.info(
                "Request started",
                extra={
                    "method": request.method,
                    "path": request.path,
                    "remote_addr": request.META.get("REMOTE_ADDR"),
                    "user_agent": request.META.get("HTTP_USER_AGENT", ""),
                },
            )
            try:
                response = self.get_response(request)
            except Exception as e:
                logger.error(
                    "Request failed",
                    extra={
                        "request_status": "exception",
                        "method": request.method,
                        "path": request.path,
                        "error_type": type(e).__name__,
                        "duration_ms": self._elapsed_ms(start_time),
                    },
                    exc_info=True,
                )
                raise

            duration_ms = self._elapsed_ms(start_time)
            status, level, message = _OUTCOMES.get(response.status_code // 100, _SUCCESS)
            logger.log(
                level,
                message,
                extra={
                    "request_status": status,
                    "method": request.method,
                    "path": request.path,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                },
            )
        finally:
            reset_correlation_id(token)

        response["X-Correlation-ID"] = correlation_id
        response["X-Request-Status"] = status
        response["X-Request-Duration"] = f"{duration_ms / 1000:.3f}"
        return response

    @staticmethod
    def _correlation_id_for(request: HttpRequest) -> str:
        incoming = request.META.get(CORRELATION_META_KEY, "").strip()
        if incoming and len(incoming) <= MAX_CORRELATION_ID_LENGTH:
            return incoming
        return str(uuid.uuid4())

    @staticmethod
    def _elapsed_ms(start_time: float) -> float:
        return round((time.monotonic() - start_time) * 1000, 2)
