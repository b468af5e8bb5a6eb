"""Listings store: observable state behind the listings screen."""

from __future__ import annotations

import asyncio
import logging

from ..connectivity import ConnectivityProbe
from ..connectors.base import ListingsService
from ..models import ApiStatus, Listing, ListingsFilter, ListingsState
from .cancellation import CancellationToken
from .observable import Observable, ReadOnlyObservable

logger = logging.getLogger(__name__)


class StoreDisposedError(RuntimeError):
    """A fetch was requested after the store was disposed."""


class ListingsStore:
    """
    Holds fetch status, the fetched listings and a one-shot selection signal.

    Construct it while an event loop is running: construction checks
    connectivity and, when connected, schedules the first fetch on that loop.
    All publishes happen on the same loop, so listeners see transitions in
    order. ``dispose()`` cancels in-flight work; nothing is published after it.

    Usage:
        store = ListingsStore(MarsApiConnector(), SocketConnectivityProbe())
        store.status.subscribe(render_status)
        store.items.subscribe(render_items)
        ...
        store.dispose()
    """

    def __init__(
        self,
        service: ListingsService,
        probe: ConnectivityProbe,
        default_filter: ListingsFilter | None = None,
    ) -> None:
        self._service = service
        self._probe = probe
        self._token = CancellationToken()
        self._generation = 0
        self._tasks: set[asyncio.Task] = set()

        self._status: Observable[ApiStatus | None] = Observable(None)
        self._items: Observable[list[Listing]] = Observable([])
        self._selected: Observable[Listing | None] = Observable(None)

        self._initialize(default_filter)

    # --- Read-only views ---

    @property
    def status(self) -> ReadOnlyObservable[ApiStatus | None]:
        return self._status.read_only()

    @property
    def items(self) -> ReadOnlyObservable[list[Listing]]:
        return self._items.read_only()

    @property
    def selected(self) -> ReadOnlyObservable[Listing | None]:
        return self._selected.read_only()

    @property
    def disposed(self) -> bool:
        return self._token.cancelled

    def snapshot(self) -> ListingsState:
        return ListingsState(
            status=self._status.value,
            items=list(self._items.value),
            selected=self._selected.value,
        )

    # --- Public actions ---

    def select(self, item: Listing) -> None:
        """Publish ``item`` as the navigation signal."""
        self._selected.publish(item)

    def acknowledge_selection(self) -> None:
        """Clear the navigation signal once the UI has navigated."""
        self._selected.publish(None)

    def set_filter(self, listings_filter: ListingsFilter | None) -> asyncio.Task:
        """Fetch again with ``listings_filter``. Connectivity is not re-checked.

        A fetch still in flight is cancelled; only the latest request publishes.
        """
        if self.disposed:
            raise StoreDisposedError("Cannot fetch listings after dispose()")
        return self._launch(listings_filter)

    def dispose(self) -> None:
        """Cancel in-flight fetches. Safe to call more than once."""
        if self._token.cancelled:
            return
        self._token.cancel()
        for task in list(self._tasks):
            task.cancel()
        logger.debug("Listings store disposed (%d fetch(es) cancelled)", len(self._tasks))

    async def wait_idle(self) -> None:
        """Wait until no fetch is in flight."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def __aenter__(self) -> ListingsStore:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.dispose()
        await self.wait_idle()

    # --- Fetch ---

    def _initialize(self, default_filter: ListingsFilter | None) -> None:
        if not self._probe.is_connected():
            logger.info("No network connectivity; skipping initial listings fetch")
            self._status.publish(ApiStatus.NO_CONNECTION)
            return
        self._launch(default_filter)

    def _launch(self, listings_filter: ListingsFilter | None) -> asyncio.Task:
        loop = asyncio.get_running_loop()
        for task in list(self._tasks):
            task.cancel()
        self._generation += 1
        self._status.publish(ApiStatus.LOADING)

        task = loop.create_task(self._fetch(listings_filter, self._generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _is_current(self, generation: int) -> bool:
        return not self._token.cancelled and generation == self._generation

    async def _fetch(self, listings_filter: ListingsFilter | None, generation: int) -> None:
        self._token.raise_if_cancelled()
        label = listings_filter.value if listings_filter else "none"
        logger.debug("Fetching listings (filter=%s, generation=%d)", label, generation)
        try:
            listings = await self._service.fetch(listings_filter)
        except Exception as e:
            if not self._is_current(generation):
                return
            logger.warning("Listings fetch failed (filter=%s): %s", label, e)
            self._status.publish(ApiStatus.ERROR)
            self._items.publish([])
            return

        if not self._is_current(generation):
            logger.debug("Dropping superseded listings result (generation=%d)", generation)
            return
        logger.debug("Fetched %d listings (filter=%s)", len(listings), label)
        self._status.publish(ApiStatus.DONE)
        self._items.publish(list(listings))
