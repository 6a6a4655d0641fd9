"""
Documentation Gateway Monitoring

Prometheus metrics for HTTP traffic and the document pipeline.
"""

from __future__ import annotations

from .metrics import (
    ACTIVE_REQUESTS,
    DOCUMENTS_SERVED,
    FETCH_DURATION,
    REQUEST_COUNT,
    REQUEST_DURATION,
    get_metrics_registry,
)

__all__ = [
    "ACTIVE_REQUESTS",
    "DOCUMENTS_SERVED",
    "FETCH_DURATION",
    "REQUEST_COUNT",
    "REQUEST_DURATION",
    "get_metrics_registry",
]
