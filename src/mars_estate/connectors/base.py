"""Base service interface for listing sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models import Listing, ListingsFilter


class FetchFailure(Exception):
    """A listings fetch failed (network, timeout, HTTP status or bad payload)."""


class ListingsService(ABC):
    """
    Abstract interface for remote listing sources.
    Implementations: Mars real estate API, in-memory fakes for tests.
    """

    @abstractmethod
    async def fetch(self, listings_filter: ListingsFilter | None = None) -> list[Listing]:
        """
        Fetch listings, narrowed by ``listings_filter`` when given.
        Order is as received from the source. Raises on failure.
        """
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Identifier for this data source."""
        ...
