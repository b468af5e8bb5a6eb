"""Source services for listing data."""

from .base import FetchFailure, ListingsService
from .mars_api import MarsApiConnector

__all__ = [
    "FetchFailure",
    "ListingsService",
    "MarsApiConnector",
]
