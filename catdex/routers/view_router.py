"""Page routes for serving the cat listing."""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from catdex.db.pool import RecordStorePool
from catdex.dependencies import get_page_renderer, get_record_store_pool
from catdex.protocols import PageRenderer
from catdex.views.template_renderer import TemplateRenderer

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
def index(
    pool: RecordStorePool = Depends(get_record_store_pool),
    renderer: PageRenderer = Depends(get_page_renderer),
):
    """Render the cat listing page.

    Declared without ``async`` so FastAPI runs the blocking database work in
    its threadpool.
    """
    return TemplateRenderer.render_index(pool, renderer)
