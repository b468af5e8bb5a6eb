"""Mars real estate API connector.

Single endpoint: GET {base_url}/realestate[?filter=all|rent|buy]
Response body is a JSON array of {"id", "img_src", "type", "price"} objects.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..models import Listing, ListingsFilter
from .base import FetchFailure, ListingsService

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://mars.udacity.com/"
DEFAULT_ENDPOINT = "realestate"


class MarsApiConnector(ListingsService):
    """
    Connector for the Mars real estate listings API.

    Owns one ``httpx.AsyncClient``; close it with ``aclose()`` or use the
    connector as an async context manager.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self.endpoint = endpoint.strip("/")
        self.timeout_seconds = timeout_seconds
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    @property
    def source_name(self) -> str:
        return "mars_api"

    async def fetch(self, listings_filter: ListingsFilter | None = None) -> list[Listing]:
        """Fetch listings from the API. Every failure surfaces as FetchFailure."""
        params = self._build_params(listings_filter)
        try:
            resp = await self._client.get(self.endpoint, params=params)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchFailure(f"HTTP {e.response.status_code} from {e.request.url}") from e
        except httpx.HTTPError as e:
            raise FetchFailure(f"Request to {self.endpoint} failed: {e!s}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise FetchFailure("Response body is not valid JSON") from e

        return self._normalize_response(data)

    def _build_params(self, listings_filter: ListingsFilter | None) -> dict[str, str]:
        """Filter goes out as a query parameter; no filter means no parameter."""
        if listings_filter is None:
            return {}
        return {"filter": listings_filter.value}

    def _normalize_response(self, data: Any) -> list[Listing]:
        """Convert the JSON array to listings, keeping the received order."""
        if not isinstance(data, list):
            raise FetchFailure(f"Expected a JSON array, got {type(data).__name__}")

        listings: list[Listing] = []
        for i, item in enumerate(data):
            try:
                listings.append(Listing.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                raise FetchFailure(f"Malformed listing at index {i}: {e!s}") from e
        logger.debug("Fetched %d listings from %s", len(listings), self.source_name)
        return listings

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> MarsApiConnector:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
