"""Middleware configuration."""

from fastapi import FastAPI
from slowapi import Limiter
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from catdex.config import Settings
from catdex.logging_config import get_logger, log_with_context
from catdex.middleware.logging_middleware import log_requests

logger = get_logger(__name__)


def setup_middleware(app: FastAPI, settings: Settings) -> Limiter:
    """Configure all middleware for the application.

    Args:
        app: FastAPI application instance
        settings: Application settings

    Returns:
        Limiter instance for rate limiting
    """
    # Per-IP rate limit applied to every route through SlowAPIMiddleware
    limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit_default])
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)
    log_with_context(
        logger,
        "info",
        "Configuring rate limiting",
        rate_limit=settings.rate_limit_default,
        event_type="middleware_config",
    )

    app.middleware("http")(log_requests)

    # Middleware to count requests
    @app.middleware("http")
    async def count_requests(request, call_next):
        """Count total requests served."""
        app.state.request_count += 1
        response = await call_next(request)
        return response

    return limiter
