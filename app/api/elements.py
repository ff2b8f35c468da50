"""
Element history JSON endpoints.

Fetches an element's history from the OSM API and returns the
classified change matrix. No persistence - computation only.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Path, status
from pydantic import BaseModel, Field

from app.config import Settings, get_settings
from app.osm_client import ElementNotFoundError, OsmApiClient, OsmApiError, get_osm_client
from src.history_engine import ElementType, HistoryMatrix, build_history_matrix

logger = logging.getLogger(__name__)

router = APIRouter()


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(description="Error type")
    message: str = Field(description="Error message")
    detail: Any = Field(default=None, description="Additional error details")


async def load_history_matrix(
    client: OsmApiClient,
    config: Settings,
    element_type: ElementType,
    element_id: int
) -> HistoryMatrix:
    """Fetch an element history and classify it."""
    versions = await client.fetch_history(element_type, element_id)

    matrix = build_history_matrix(
        versions,
        user_url_template=config.user_url_template,
        changeset_url_template=config.changeset_url_template,
    )

    logger.info(
        "History classified | type=%s id=%s versions=%s tags=%s",
        element_type.value,
        element_id,
        len(matrix.versions),
        len(matrix.tags),
    )
    return matrix


@router.get(
    "/{element_type}/{element_id}/history",
    response_model=HistoryMatrix,
    responses={
        200: {"description": "History classified"},
        404: {"model": ErrorResponse, "description": "Element not found"},
        502: {"model": ErrorResponse, "description": "OSM API failure"},
    },
    summary="Classify the full edit history of an OSM element",
)
async def get_element_history(
    element_type: ElementType,
    element_id: int = Path(..., gt=0, description="OSM element id"),
    client: OsmApiClient = Depends(get_osm_client),
    config: Settings = Depends(get_settings),
) -> HistoryMatrix:
    """
    Return one row per property, tag and node/member, each with one
    classified cell per version.
    """
    try:
        return await load_history_matrix(client, config, element_type, element_id)

    except ElementNotFoundError as e:
        logger.info("Element not found | url=%s status=%s", e.url, e.status_code)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "element_not_found", "message": str(e), "detail": e.url},
        )
    except OsmApiError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"error": "upstream_error", "message": str(e), "detail": e.url},
        )
