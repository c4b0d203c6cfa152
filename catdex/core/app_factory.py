"""Application factory for creating and configuring the FastAPI app."""

from fastapi import FastAPI

from catdex import __version__
from catdex.config import Settings, get_settings
from catdex.core.lifespan import lifespan
from catdex.core.middleware import setup_middleware
from catdex.db.pool import RecordStorePool
from catdex.exceptions import ConfigurationException
from catdex.logging_config import get_logger, log_with_context
from catdex.middleware.error_handlers import register_error_handlers
from catdex.routers import view_router
from catdex.views.static_files import CatdexStaticFiles
from catdex.views.template_registry import TemplateRegistry

logger = get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Templates are compiled and the connection pool is built here, so a
    missing template directory or unusable database URL aborts startup
    before any port is bound.

    Args:
        settings: Settings to use (defaults to the environment-backed singleton)

    Returns:
        Configured FastAPI application instance

    Raises:
        TemplateLoadException: If templates cannot be loaded
        RecordStoreException: If the connection pool cannot be created
        ConfigurationException: If the static directory does not exist
    """
    settings = settings or get_settings()

    template_registry = TemplateRegistry.load_all(
        settings.templates_dir,
        extension=settings.template_extension,
        strict=settings.template_strict_undefined,
    )

    if not settings.static_dir.is_dir():
        raise ConfigurationException(
            f"Static directory not found: {settings.static_dir}",
            details={"static_dir": str(settings.static_dir)},
        )

    record_store_pool = RecordStorePool.from_settings(settings)

    # Single page app: no OpenAPI schema or docs routes
    app = FastAPI(
        title="Catdex",
        version=__version__,
        lifespan=lifespan,
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
    )

    app.state.settings = settings
    app.state.template_registry = template_registry
    app.state.record_store_pool = record_store_pool
    app.state.request_count = 0

    setup_middleware(app, settings)
    register_error_handlers(app)

    if settings.static_directory_listing and not settings.directory_listing_enabled:
        log_with_context(
            logger,
            "warning",
            "Ignoring static directory listing in production",
            event_type="security_config",
        )
    elif settings.directory_listing_enabled:
        log_with_context(
            logger,
            "warning",
            "Static directory listing enabled, do not use in production",
            static_dir=str(settings.static_dir),
            event_type="security_config",
        )

    app.mount(
        "/static",
        CatdexStaticFiles(directory=settings.static_dir, directory_listing=settings.directory_listing_enabled),
        name="static",
    )

    app.include_router(view_router.router, tags=["views"])

    return app
