"""Page rendering for the cat listing."""

from fastapi.responses import HTMLResponse

from catdex.db.pool import RecordStorePool
from catdex.db.queries import fetch_records
from catdex.exceptions import TemplateException
from catdex.logging_config import get_logger, log_with_context
from catdex.models import LISTING_LIMIT, IndexPage
from catdex.protocols import PageRenderer

logger = get_logger(__name__)

INDEX_TEMPLATE = "index"
FALLBACK_MESSAGE = "Aww.. Nothing to show, server error. Please file an issue at github.com/ahmad-su"


class TemplateRenderer:
    """Builds the HTML responses served by the view routes."""

    @staticmethod
    def render_index(pool: RecordStorePool, renderer: PageRenderer) -> HTMLResponse:
        """Render the cat listing page.

        The connection is back in the pool before rendering starts. Pool and
        query errors propagate to the registered exception handlers. Render
        errors produce the fallback message, still with status 200.

        Args:
            pool: Shared connection pool
            renderer: Template registry

        Returns:
            HTMLResponse with the rendered listing or the fallback message
        """
        with pool.acquire() as connection:
            cats = fetch_records(connection, LISTING_LIMIT)

        page = IndexPage(cats=cats)

        try:
            body = renderer.render(INDEX_TEMPLATE, page.model_dump())
        except TemplateException as e:
            log_with_context(
                logger,
                "error",
                "Failed to render index page, serving fallback",
                error=e.message,
                error_code=e.code.value,
                template=INDEX_TEMPLATE,
                event_type="render_fallback",
            )
            return HTMLResponse(content=FALLBACK_MESSAGE, status_code=200)

        return HTMLResponse(content=body, status_code=200)
