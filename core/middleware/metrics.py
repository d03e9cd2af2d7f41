"""
Metrics middleware for Prometheus.

Records HTTP request metrics for monitoring.
"""

import re
import time
from typing import Callable

from django.http import HttpRequest, HttpResponse

from core.metrics import (
    http_request_duration_seconds,
    http_requests_total,
)

# License hashes are 64 hex chars; usernames follow /users/
_HASH_RE = re.compile(r"/[0-9a-f]{64}")
_USER_RE = re.compile(r"/users/[^/]+")


def normalize_endpoint(path: str) -> str:
    """Collapse identifiers in a path for better metric aggregation."""
    endpoint = _HASH_RE.sub("/{hash}", path.split("?")[0])
    return _USER_RE.sub("/users/{username}", endpoint)


class MetricsMiddleware:
    """
    Middleware to record HTTP metrics for Prometheus.

    Records:
    - Request count by method, endpoint, status
    - Request duration histogram
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Process request and record metrics."""
        start_time = time.time()
        endpoint = normalize_endpoint(request.path)

        try:
            response = self.get_response(request)
        except Exception:
            http_requests_total.labels(
                method=request.method,
                endpoint=endpoint,
                status_code=500,
            ).inc()
            http_request_duration_seconds.labels(
                method=request.method,
                endpoint=endpoint,
            ).observe(time.time() - start_time)
            raise

        http_requests_total.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=response.status_code,
        ).inc()
        http_request_duration_seconds.labels(
            method=request.method,
            endpoint=endpoint,
        ).observe(time.time() - start_time)
        return response
