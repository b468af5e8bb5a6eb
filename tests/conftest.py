"""Pytest fixtures."""

from __future__ import annotations

import asyncio

import pytest

from mars_estate.connectors import ListingsService
from mars_estate.models import Listing, ListingsFilter


class FakeListingsService(ListingsService):
    """In-memory service. Optionally blocks on ``gate`` and/or raises ``error``."""

    def __init__(
        self,
        result: list | None = None,
        error: Exception | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.result = result or []
        self.error = error
        self.gate = gate
        self.calls: list[ListingsFilter | None] = []

    @property
    def source_name(self) -> str:
        return "fake"

    async def fetch(self, listings_filter: ListingsFilter | None = None) -> list:
        self.calls.append(listings_filter)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return list(self.result)


@pytest.fixture
def mock_listing() -> Listing:
    """Single rental listing."""
    return Listing(
        id="424905",
        img_src_url="http://mars.jpl.nasa.gov/msl-raw-images/msss/01000/mcam/1000MR0044631300503690E01_DXXX.jpg",
        type="rent",
        price=1200,
        raw_payload={},
    )


@pytest.fixture
def mock_listings() -> list[Listing]:
    """One listing for sale and one for rent."""
    return [
        Listing(
            id="424906",
            img_src_url="http://mars.jpl.nasa.gov/msl-raw-images/msss/01000/mcam/1000ML0044631300305227E03_DXXX.jpg",
            type="buy",
            price=450000,
            raw_payload={},
        ),
        Listing(
            id="424907",
            img_src_url="http://mars.jpl.nasa.gov/msl-raw-images/msss/01000/mcam/1000MR0044631290503689E01_DXXX.jpg",
            type="rent",
            price=8000,
            raw_payload={},
        ),
    ]


@pytest.fixture
def mock_payload() -> list[dict]:
    """Raw API response body."""
    return [
        {"price": 450000, "id": "424906", "type": "buy", "img_src": "http://mars.jpl.nasa.gov/a.jpg"},
        {"price": 8000, "id": "424907", "type": "rent", "img_src": "http://mars.jpl.nasa.gov/b.jpg"},
    ]
