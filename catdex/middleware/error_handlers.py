"""Exception handlers turning record store failures into JSON error responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.responses import Response

from catdex.exceptions import CatdexException
from catdex.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


def error_response(status_code: int, code: str, message: str, details: dict | None = None) -> JSONResponse:
    """Build the ``{"error": {...}}`` body shared by every handler."""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message, "details": details or {}}},
    )


async def catdex_exception_handler(request: Request, exc: CatdexException) -> JSONResponse:
    """Answer a failed request without taking the server down.

    A 503 (exhausted pool, unreachable database) is transient and logged as
    a warning; anything else from the record store is an error.
    """
    log_with_context(
        logger,
        "warning" if exc.status_code == 503 else "error",
        "Request failed",
        error_code=exc.code.value,
        error_message=exc.message,
        status_code=exc.status_code,
        method=request.method,
        path=request.url.path,
        event_type="request_failed",
    )
    return error_response(exc.status_code, exc.code.value, exc.message, exc.details)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log_with_context(
        logger,
        "error",
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        method=request.method,
        path=request.url.path,
        event_type="unhandled_error",
    )
    logger.error("Exception traceback:", exc_info=exc)

    # Internal details stay in the log
    return error_response(500, "INTERNAL_ERROR", "Internal server error")


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> Response:
    log_with_context(
        logger,
        "warning",
        "Rate limit exceeded",
        limit=str(exc.detail),
        path=request.url.path,
        event_type="rate_limited",
    )
    return _rate_limit_exceeded_handler(request, exc)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatdexException, catdex_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(Exception, general_exception_handler)
