"""Access log middleware."""

import time

from fastapi import Request

from catdex.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


async def log_requests(request: Request, call_next):
    """Log method, path, status code and duration of every request."""
    start = time.perf_counter()
    response = await call_next(request)

    log_with_context(
        logger,
        "info",
        "HTTP Request",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - start) * 1000, 2),
        event_type="http_request",
    )
    return response
