"""Prometheus metrics for Fio API calls, parsing and the service wrapper"""

from prometheus_client import Counter, Histogram

# Fio API metrics
fio_request_counter = Counter(
    "fio_requests_total",
    "Fio API calls by operation and outcome",
    ["operation", "outcome"],  # status code | transport_error | cancelled
)

fio_latency_histogram = Histogram(
    "fio_request_latency_seconds",
    "Fio API response time",
    ["operation"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

fio_parse_failures_counter = Counter(
    "fio_parse_failures_total",
    "Fio responses that could not be parsed",
)

fio_exported_bytes_counter = Counter(
    "fio_exported_bytes_total",
    "Raw export bytes passed through to callers",
    ["format"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_fio_call(operation: str, outcome: str, duration_seconds: float) -> None:
    """Record one Fio API call. Outcome is the status code, transport_error or cancelled"""
    fio_request_counter.labels(operation=operation, outcome=outcome).inc()
    fio_latency_histogram.labels(operation=operation).observe(duration_seconds)
