"""
Logging Middleware

Binds a trace id and the request route into structlog context for every
request. Documentation requests are logged at info level, while health
checks and metrics scrapes are only logged at debug level.
"""

from __future__ import annotations

import time
import uuid
from collections.abc import Callable

import structlog
from fastapi import Request, Response

logger = structlog.get_logger()

TRACE_HEADER = "X-Trace-ID"

# Polled by orchestrators and scrapers
QUIET_PATHS = frozenset({"/health", "/ready", "/live", "/metrics"})


async def logging_middleware(request: Request, call_next: Callable) -> Response:
    """
    Log one completion event per request and echo the trace id.

    An incoming X-Trace-ID is reused so that gateway logs line up with the
    caller's; otherwise a new id is generated.
    """
    trace_id = request.headers.get(TRACE_HEADER) or uuid.uuid4().hex
    path = request.url.path

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        trace_id=trace_id,
        method=request.method,
        path=path,
        client_host=request.client.host if request.client else None,
    )

    log = logger.debug if path in QUIET_PATHS else logger.info
    start_time = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception as exc:
        logger.error(
            "Request failed",
            error_type=type(exc).__name__,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            exc_info=True,
        )
        raise

    log(
        "Request completed",
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
    )

    response.headers[TRACE_HEADER] = trace_id
    response.headers["X-Request-ID"] = trace_id
    return response
