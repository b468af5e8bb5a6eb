"""Data models for listings, filters and fetch status."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class ApiStatus(Enum):
    """Lifecycle of the most recent fetch, as shown to the UI."""

    LOADING = "loading"
    ERROR = "error"
    DONE = "done"
    NO_CONNECTION = "no_connection"


class ListingsFilter(Enum):
    """Server-side filter. The value is sent as the ``filter`` query parameter."""

    SHOW_ALL = "all"
    SHOW_RENT = "rent"
    SHOW_BUY = "buy"

    @classmethod
    def parse(cls, text: str) -> ListingsFilter:
        """Accept the wire value ("rent") or the member name ("SHOW_RENT")."""
        key = (text or "").strip()
        for member in cls:
            if key.lower() == member.value or key.upper() == member.name:
                return member
        raise ValueError(f"Unknown listings filter: {text!r}")


@dataclass
class Listing:
    """A single property as returned by the listings API."""

    id: str
    img_src_url: str
    type: str
    price: float
    raw_payload: dict[str, Any] = field(default_factory=dict)
    fetched_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def from_dict(cls, item: dict[str, Any]) -> Listing:
        """Build a listing from one JSON object of the API response.

        Raises KeyError, TypeError or ValueError when the object is malformed.
        """
        if not isinstance(item, dict):
            raise TypeError(f"Listing payload must be an object, got {type(item).__name__}")
        return cls(
            id=str(item["id"]),
            img_src_url=str(item.get("img_src") or ""),
            type=str(item.get("type") or ""),
            price=float(item["price"]),
            raw_payload=item,
        )

    @property
    def is_rental(self) -> bool:
        return self.type == "rent"

    @property
    def display_price(self) -> str:
        """Price label for the detail screen: "$450,000" or "$1,200/month"."""
        label = f"${self.price:,.0f}"
        return f"{label}/month" if self.is_rental else label

    @property
    def display_type(self) -> str:
        return "For Rent" if self.is_rental else "For Sale"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "img_src": self.img_src_url,
            "type": self.type,
            "price": self.price,
            "fetched_at": self.fetched_at.isoformat(),
        }


@dataclass(frozen=True)
class ListingsState:
    """Point-in-time view of a store: (status, items, selected)."""

    status: ApiStatus | None
    items: list[Listing]
    selected: Listing | None
