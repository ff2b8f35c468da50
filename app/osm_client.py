"""
OSM API client for element histories.

Fetches /{type}/{id}/history.json and parses the returned elements
into ElementVersion models, oldest first as the API delivers them.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from app.config import Settings, settings
from src.history_engine import ElementType, ElementVersion

logger = logging.getLogger(__name__)

MISSING_STATUS_CODES = {404, 410}


class OsmApiError(Exception):
    """The OSM API could not deliver a usable history."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ElementNotFoundError(OsmApiError):
    """The requested element does not exist (or never existed)."""

    def __init__(self, url: str, status_code: int):
        super().__init__(url, f"Element not found: {url}", status_code)


class OsmApiClient:
    """Thin async wrapper over the OSM API history endpoints."""

    def __init__(
        self,
        config: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.config = config
        self.transport = transport

    def history_url(self, element_type: ElementType, element_id: int) -> str:
        base = self.config.osm_api_url.rstrip("/")
        return f"{base}/{element_type.value}/{element_id}/history.json"

    async def fetch_history(
        self,
        element_type: ElementType,
        element_id: int
    ) -> list[ElementVersion]:
        """
        Fetch every version of an element.

        Args:
            element_type: node, way or relation
            element_id: Element id

        Returns:
            Non-empty list of versions, ascending by version number

        Raises:
            ElementNotFoundError: If the API reports the element missing
            OsmApiError: On transport failures, other HTTP errors or
                malformed payloads
        """
        url = self.history_url(element_type, element_id)
        logger.info("Fetching history | url=%s", url)

        try:
            async with httpx.AsyncClient(
                transport=self.transport,
                timeout=self.config.request_timeout,
                headers={"User-Agent": self.config.user_agent},
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            logger.error("OSM API request failed | url=%s error=%s", url, e)
            raise OsmApiError(url, f"Request failed: {e}") from e

        if response.status_code in MISSING_STATUS_CODES:
            raise ElementNotFoundError(url, response.status_code)

        if response.is_error:
            logger.error("OSM API error | url=%s status=%s", url, response.status_code)
            raise OsmApiError(
                url,
                f"HTTP error: {response.status_code}",
                response.status_code
            )

        try:
            elements = response.json()["elements"]
            versions = [ElementVersion.model_validate(e) for e in elements]
        except (ValueError, KeyError, TypeError, ValidationError) as e:
            raise OsmApiError(url, f"Malformed history payload: {e}", response.status_code) from e

        if not versions:
            raise ElementNotFoundError(url, response.status_code)

        logger.info("History fetched | url=%s versions=%s", url, len(versions))
        return versions


def get_osm_client() -> OsmApiClient:
    """FastAPI dependency returning a client bound to the app settings."""
    return OsmApiClient(settings)
