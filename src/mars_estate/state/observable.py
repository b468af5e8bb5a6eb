"""Push-based single-value holders for UI-facing state."""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[T], None]

_UNSET = object()


class ReadOnlyObservable(Generic[T]):
    """
    Read side of an Observable. UI code receives this type so that only the
    owning store can publish.
    """

    def __init__(self, source: Observable[T]) -> None:
        self._source = source

    @property
    def value(self) -> T:
        return self._source.value

    def subscribe(self, listener: Listener[T]) -> Callable[[], None]:
        return self._source.subscribe(listener)


class Observable(Generic[T]):
    """
    Holds the latest value and notifies listeners synchronously, in
    subscription order, on every publish.

    A new subscriber immediately receives the latest published value. Before
    the first publish ``value`` returns the default and nothing is replayed.
    """

    def __init__(self, default: T) -> None:
        self._default = default
        self._value: object = _UNSET
        self._listeners: list[Listener[T]] = []
        self._pending: deque[T] = deque()
        self._dispatching = False

    @property
    def value(self) -> T:
        if self._value is _UNSET:
            return self._default
        return self._value  # type: ignore[return-value]

    @property
    def has_value(self) -> bool:
        return self._value is not _UNSET

    def publish(self, value: T) -> None:
        """Store ``value`` and notify listeners.

        A publish made from inside a listener is queued and delivered to every
        listener once the current value has reached all of them.
        """
        self._value = value
        self._pending.append(value)
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._pending:
                current = self._pending.popleft()
                for listener in list(self._listeners):
                    self._notify(listener, current)
        finally:
            self._dispatching = False

    def subscribe(self, listener: Listener[T]) -> Callable[[], None]:
        """Register ``listener``. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)
        if self.has_value:
            self._notify(listener, self.value)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def read_only(self) -> ReadOnlyObservable[T]:
        return ReadOnlyObservable(self)

    def _notify(self, listener: Listener[T], value: T) -> None:
        # One failing listener must not starve the rest.
        try:
            listener(value)
        except Exception:
            name = getattr(listener, "__name__", repr(listener))
            logger.exception("Observable listener %s failed", name)
