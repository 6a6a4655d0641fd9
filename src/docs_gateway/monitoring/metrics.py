"""
Prometheus Metrics Collection

Metrics for documentation gateway monitoring:
- HTTP request/response metrics
- Documents served per swagger endpoint and version
- Downstream document fetch latency
"""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

# Dedicated registry so repeated app creation never re-registers collectors
_REGISTRY = CollectorRegistry()


def get_metrics_registry() -> CollectorRegistry:
    """Get the registry holding all gateway metrics."""
    return _REGISTRY


# HTTP Request Metrics
REQUEST_COUNT = Counter(
    "docs_gateway_http_requests_total",
    "Total number of HTTP requests",
    ["method", "path", "status_code"],
    registry=_REGISTRY,
)

REQUEST_DURATION = Histogram(
    "docs_gateway_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
    registry=_REGISTRY,
)

ACTIVE_REQUESTS = Gauge(
    "docs_gateway_http_requests_active",
    "Number of active HTTP requests",
    registry=_REGISTRY,
)

# Document Pipeline Metrics
DOCUMENTS_SERVED = Counter(
    "docs_gateway_documents_total",
    "Documentation requests by swagger endpoint, version and outcome",
    ["key", "version", "outcome"],
    registry=_REGISTRY,
)

FETCH_DURATION = Histogram(
    "docs_gateway_fetch_duration_seconds",
    "Downstream document fetch duration in seconds",
    ["key"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
    registry=_REGISTRY,
)
