"""
Metrics Middleware

Prometheus metrics collection for monitoring and observability.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from fastapi import Request, Response

from docs_gateway.monitoring.metrics import (
    ACTIVE_REQUESTS,
    REQUEST_COUNT,
    REQUEST_DURATION,
)


def _route_path(request: Request) -> str:
    """Route template of the request, so per-document paths share labels."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


async def metrics_middleware(request: Request, call_next: Callable) -> Response:
    """
    Collect Prometheus metrics for requests.

    Tracks request counts, durations, and active requests.
    """
    ACTIVE_REQUESTS.inc()
    start_time = time.time()
    status_code = 500

    try:
        response = await call_next(request)
        status_code = response.status_code
        return response

    finally:
        path = _route_path(request)
        REQUEST_COUNT.labels(
            method=request.method, path=path, status_code=status_code
        ).inc()
        REQUEST_DURATION.labels(method=request.method, path=path).observe(
            time.time() - start_time
        )
        ACTIVE_REQUESTS.dec()
