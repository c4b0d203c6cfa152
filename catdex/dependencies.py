"""FastAPI dependencies for dependency injection."""

from fastapi import Request

from catdex.db.pool import RecordStorePool
from catdex.protocols import PageRenderer


async def get_record_store_pool(request: Request) -> RecordStorePool:
    """
    Get the shared connection pool from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The shared RecordStorePool instance.

    Raises:
        RuntimeError: If the pool is not initialized.
    """
    pool: RecordStorePool | None = getattr(request.app.state, "record_store_pool", None)

    if pool is None:
        raise RuntimeError("Record store pool not initialized. This should never happen.")

    return pool


async def get_page_renderer(request: Request) -> PageRenderer:
    """
    Get the template registry from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The shared template registry, typed as the PageRenderer it is used as.

    Raises:
        RuntimeError: If the registry is not initialized.
    """
    renderer: PageRenderer | None = getattr(request.app.state, "template_registry", None)

    if renderer is None:
        raise RuntimeError("Template registry not initialized.")

    return renderer
