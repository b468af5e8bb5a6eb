"""Cancellation token tied to the lifetime of a store."""

from __future__ import annotations

import asyncio


class CancellationToken:
    """Set once by the owner; checked by background work before it publishes."""

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise asyncio.CancelledError()
