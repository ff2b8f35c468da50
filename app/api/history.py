"""HTML history pages, including the legacy .php entry points."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path
from fastapi.responses import HTMLResponse, RedirectResponse

from app.api.elements import load_history_matrix
from app.config import Settings, get_settings
from app.osm_client import ElementNotFoundError, OsmApiClient, OsmApiError, get_osm_client
from app.rendering import (
    render_history,
    render_index,
    render_missing_element,
    render_upstream_error,
)
from src.history_engine import ElementType

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_class=HTMLResponse)
async def index() -> HTMLResponse:
    """Lookup form for nodes, ways and relations."""
    return HTMLResponse(render_index())


@router.get("/{element_type}.php")
async def legacy_lookup(element_type: ElementType, id: Optional[str] = None) -> RedirectResponse:
    """Redirect old node.php?id=N style links."""
    if id and id.strip().isdigit():
        return RedirectResponse(f"/history/{element_type.value}/{id.strip()}", status_code=302)
    return RedirectResponse("/history", status_code=302)


@router.get("/{element_type}/{element_id}", response_class=HTMLResponse)
async def element_history_page(
    element_type: ElementType,
    element_id: int = Path(..., gt=0),
    client: OsmApiClient = Depends(get_osm_client),
    config: Settings = Depends(get_settings),
) -> HTMLResponse:
    """Change table for one element."""
    try:
        matrix = await load_history_matrix(client, config, element_type, element_id)
    except ElementNotFoundError as e:
        return HTMLResponse(render_missing_element(e.url, e.status_code), status_code=404)
    except OsmApiError as e:
        logger.error("History page failed | url=%s error=%s", e.url, e)
        return HTMLResponse(render_upstream_error(e.url), status_code=502)

    return HTMLResponse(render_history(matrix, config.max_column_length))
