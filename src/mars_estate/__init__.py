"""Mars Estate - observable listings store over the Mars real estate API."""

from .connectivity import ConnectivityProbe, SocketConnectivityProbe, StaticConnectivityProbe
from .connectors import FetchFailure, ListingsService, MarsApiConnector
from .models import ApiStatus, Listing, ListingsFilter, ListingsState
from .state import ListingsStore, StoreDisposedError

__version__ = "0.1.0"

__all__ = [
    "ApiStatus",
    "ConnectivityProbe",
    "FetchFailure",
    "Listing",
    "ListingsFilter",
    "ListingsService",
    "ListingsState",
    "ListingsStore",
    "MarsApiConnector",
    "SocketConnectivityProbe",
    "StaticConnectivityProbe",
    "StoreDisposedError",
]
