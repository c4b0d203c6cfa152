"""Catdex entry point."""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv
from pydantic import ValidationError

from catdex.config import get_settings
from catdex.core.app_factory import create_app
from catdex.exceptions import CatdexException
from catdex.logging_config import get_logger, log_with_context, setup_logging

logger = get_logger(__name__)

# Load environment variables from .env file
load_dotenv(Path(__file__).parent.parent / ".env")


def run() -> None:
    """Build the app and serve it with uvicorn.

    Configuration, template and pool errors stop the process before the
    listening socket is opened.
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        log_with_context(logger, "critical", "Invalid configuration", error=str(e), event_type="startup_failed")
        raise SystemExit(f"Invalid configuration: {e}") from e

    setup_logging(settings.log_level)

    try:
        app = create_app(settings)
    except CatdexException as e:
        log_with_context(
            logger,
            "critical",
            "Startup failed",
            error=e.message,
            error_code=e.code.value,
            event_type="startup_failed",
        )
        raise SystemExit(f"Startup failed: {e.message}") from e

    log_with_context(
        logger,
        "info",
        "Listening",
        host=settings.api_host,
        port=settings.api_port,
        event_type="server_bind",
    )
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_config=None)


if __name__ == "__main__":
    run()
