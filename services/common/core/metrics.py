"""
Where: services/common/core/metrics.py
What: Prometheus request metrics shared by every handler.
Why: One latency/status observation per handled request, labelled by operation.
"""

import logging

from prometheus_client import Counter, Histogram, start_http_server

logger = logging.getLogger(__name__)

REQUEST_LATENCY = Histogram(
    "catalog_request_duration_seconds",
    "Handler latency in seconds",
    ["operation", "status"],
)
REQUEST_COUNT = Counter(
    "catalog_requests_total",
    "Handled requests",
    ["operation", "status"],
)


def observe_request(elapsed: float, status: int, operation: str) -> None:
    """Record one handled request."""
    REQUEST_LATENCY.labels(operation=operation, status=str(status)).observe(elapsed)
    REQUEST_COUNT.labels(operation=operation, status=str(status)).inc()


def start_metrics_server(port: int, addr: str = "0.0.0.0") -> None:
    """Serve /metrics on a dedicated port (background thread)."""
    start_http_server(port, addr=addr)
    logger.info("Metrics server listening on %s:%d", addr, port)
