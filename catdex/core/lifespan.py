"""Application lifespan management."""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from catdex import __version__
from catdex.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan - startup and shutdown events.

    The template registry and connection pool are built by ``create_app``
    before the server binds; here they are only announced and torn down.
    Exceptions after yield are re-raised so cleanup still runs.
    """
    app.state.startup_time = time.time()

    log_with_context(
        logger,
        "info",
        "Starting Catdex application",
        version=__version__,
        templates=sorted(app.state.template_registry.names),
        event_type="app_startup",
    )

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Application error during lifespan",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_error",
        )
        raise
    finally:
        log_with_context(
            logger,
            "info",
            "Shutting down Catdex application",
            uptime_seconds=int(time.time() - app.state.startup_time),
            request_count=app.state.request_count,
            event_type="app_shutdown",
        )
        app.state.record_store_pool.dispose()
