"""
Prometheus metrics for the license registry service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Gauge, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License metrics
licenses_issued_total = Counter(
    "licenses_issued_total",
    "Total licenses issued",
    ["type"],
)

license_validations_total = Counter(
    "license_validations_total",
    "Total license validations by outcome",
    ["operation", "outcome"],
)

license_mutations_total = Counter(
    "license_mutations_total",
    "Total administrative license mutations",
    ["operation"],
)

# Current state metrics
registry_licenses = Gauge(
    "registry_licenses",
    "Number of licenses in the registry",
    ["state"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
