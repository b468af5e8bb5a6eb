"""Observable state for the listings screen."""

from .cancellation import CancellationToken
from .observable import Observable, ReadOnlyObservable
from .store import ListingsStore, StoreDisposedError

__all__ = [
    "CancellationToken",
    "ListingsStore",
    "Observable",
    "ReadOnlyObservable",
    "StoreDisposedError",
]
