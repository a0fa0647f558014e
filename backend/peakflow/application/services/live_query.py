"""Live queries — collections kept in step with the change feed.

A live query performs an initial fetch, listens on the change feed for its
table (and optional equality filters), and re-fetches the whole collection
on every notification. Consumers read ``state`` or iterate ``snapshots()``.
Re-fetches run one at a time in the listener task, so the last fetch to
complete is the state that is shown.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncGenerator, Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass, replace
from typing import Any, Generic, TypeVar

from peakflow.application.services.change_feed import ChangeFeed, Subscription
from peakflow.infrastructure.logging.sync_logger import SyncLogger, SyncStage

logger = logging.getLogger(__name__)

T = TypeVar("T")
S = TypeVar("S")

ServiceScope = Callable[[], AbstractAsyncContextManager[S]]


@dataclass(frozen=True)
class LiveState(Generic[T]):
    items: tuple[T, ...] = ()
    loading: bool = True
    error: str | None = None


class LiveQuery(ABC, Generic[T]):
    """Base class for a fetch → subscribe → re-fetch collection."""

    table: str = ""
    keep_items_on_error: bool = False

    def __init__(self, change_feed: ChangeFeed, filters: dict[str, Any] | None = None):
        self._feed = change_feed
        self._filters = dict(filters or {})
        self._state: LiveState[T] = LiveState()
        self._subscription: Subscription | None = None
        self._listener: asyncio.Task[None] | None = None
        self._consumers: list[asyncio.Queue[LiveState[T] | None]] = []
        self._log = SyncLogger(type(self).__name__)

    @abstractmethod
    async def fetch(self) -> list[T]:
        """Load the full collection from the store."""
        ...

    @property
    def state(self) -> LiveState[T]:
        return self._state

    @property
    def active(self) -> bool:
        return self._subscription is not None

    async def start(self) -> LiveState[T]:
        if self._subscription is not None:
            return self._state
        self._subscription = self._feed.open(self.table, self._filters)
        self._log.step(SyncStage.SUBSCRIBE, f"Watching {self.table}", **self._filters)
        await self.refresh()
        self._listener = asyncio.create_task(self._listen(self._subscription))
        return self._state

    async def refresh(self) -> LiveState[T]:
        """Full re-fetch. Failures become ``error`` on the state, never raise."""
        self._set(replace(self._state, loading=True, error=None))
        try:
            async with self._log.timed_step(SyncStage.FETCH, f"Fetching {self.table}"):
                items = await self.fetch()
        except Exception as exc:
            self._log.step_error(SyncStage.ERROR, f"Fetch of {self.table} failed", error=exc)
            kept = self._state.items if self.keep_items_on_error else ()
            self._set(LiveState(items=kept, loading=False, error=str(exc)))
        else:
            self._set(LiveState(items=tuple(items), loading=False, error=None))
        return self._state

    async def resubscribe(self) -> LiveState[T]:
        """Reopen the subscription and re-fetch, keeping snapshot consumers attached."""
        if self._subscription is None:
            return self._state
        await self._stop_listening()
        return await self.start()

    async def _listen(self, subscription: Subscription) -> None:
        async for event in subscription.events():
            self._log.step(SyncStage.NOTIFY, f"{event.event.value} on {event.table}")
            await self.refresh()

    async def snapshots(self) -> AsyncGenerator[LiveState[T], None]:
        """Yield the current state, then every subsequent state until closed."""
        queue: asyncio.Queue[LiveState[T] | None] = asyncio.Queue()
        self._consumers.append(queue)
        try:
            yield self._state
            while True:
                state = await queue.get()
                if state is None:
                    break
                yield state
        finally:
            if queue in self._consumers:
                self._consumers.remove(queue)

    async def close(self) -> None:
        await self._stop_listening()
        for queue in self._consumers:
            queue.put_nowait(None)

    async def _stop_listening(self) -> None:
        if self._listener is not None:
            self._listener.cancel()
            try:
                await self._listener
            except asyncio.CancelledError:
                pass
            self._listener = None
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None
            self._log.step(SyncStage.TEARDOWN, f"Stopped watching {self.table}", **self._filters)

    async def __aenter__(self) -> "LiveQuery[T]":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def _set(self, state: LiveState[T]) -> None:
        self._state = state
        self._publish()

    def _publish(self) -> None:
        for queue in self._consumers:
            queue.put_nowait(self._state)
