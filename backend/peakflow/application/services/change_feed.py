"""Change feed — in-process broadcaster for table change notifications."""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator
from typing import Any

from peakflow.domain.entities import ChangeEvent

logger = logging.getLogger(__name__)

WATCHED_TABLES: tuple[str, ...] = ("articles", "comments", "newsletter_subscribers", "user_roles")


def format_sse(event_type: str, data: dict[str, Any]) -> str:
    """Render one Server-Sent Events message."""
    return f"event: {event_type}\ndata: {json.dumps(data, default=str)}\n\n"


class Subscription:
    """One subscriber's view of the feed, scoped to a table and equality filters.

    Registered on creation so no event committed after ``ChangeFeed.open``
    returns is missed. Iterate ``events()`` to consume; ``close()`` detaches.
    """

    def __init__(
        self,
        feed: "ChangeFeed",
        table: str,
        filters: dict[str, Any] | None,
        max_queue_size: int,
    ) -> None:
        self.table = table
        self.filters = dict(filters or {})
        self._feed = feed
        self._queue: asyncio.Queue[ChangeEvent | None] = asyncio.Queue(maxsize=max_queue_size)
        self.closed = False

    def _offer(self, event: ChangeEvent) -> bool:
        """Queue an event if it matches. Returns False if the queue is full."""
        if not event.matches(self.table, self.filters):
            return True
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            return False
        return True

    def _terminate(self) -> None:
        self.closed = True
        # Drop pending events so the sentinel always fits.
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(None)

    async def events(self) -> AsyncGenerator[ChangeEvent, None]:
        while True:
            event = await self._queue.get()
            if event is None:
                break
            yield event

    def close(self) -> None:
        if not self.closed:
            self._feed._detach(self)
            self._terminate()


class ChangeFeed:
    """Fans change events out to every matching subscriber.

    Each subscriber owns a bounded asyncio.Queue. Broadcasting pushes the
    event to every queue whose table/filter matches; a subscriber whose
    queue is full is disconnected.
    """

    def __init__(self, max_queue_size: int = 100) -> None:
        self._max_queue_size = max_queue_size
        self._subscriptions: list[Subscription] = []

    def open(self, table: str, filters: dict[str, Any] | None = None) -> Subscription:
        subscription = Subscription(self, table, filters, self._max_queue_size)
        self._subscriptions.append(subscription)
        logger.debug("Change feed subscriber added for %s %s", table, subscription.filters)
        return subscription

    def _detach(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    async def subscribe(
        self, table: str, filters: dict[str, Any] | None = None
    ) -> AsyncGenerator[ChangeEvent, None]:
        """Yield matching events until the feed shuts down or the consumer stops."""
        subscription = self.open(table, filters)
        try:
            async for event in subscription.events():
                yield event
        finally:
            subscription.close()

    async def stream(self, table: str | None = None) -> AsyncGenerator[str, None]:
        """SSE-formatted stream of raw change events for one table (or all)."""
        subscriptions = [self.open(t) for t in ([table] if table else WATCHED_TABLES)]
        merged: asyncio.Queue[ChangeEvent | None] = asyncio.Queue()

        async def _pump(sub: Subscription) -> None:
            async for event in sub.events():
                await merged.put(event)
            await merged.put(None)

        pumps = [asyncio.create_task(_pump(s)) for s in subscriptions]
        remaining = len(pumps)
        try:
            while remaining:
                event = await merged.get()
                if event is None:
                    remaining -= 1
                    continue
                yield format_sse("change", event.to_dict())
        finally:
            for sub in subscriptions:
                sub.close()
            for task in pumps:
                task.cancel()

    async def broadcast(self, event: ChangeEvent) -> None:
        """Broadcast a change event to all matching subscribers."""
        dead: list[Subscription] = []

        for subscription in list(self._subscriptions):
            if not subscription._offer(event):
                dead.append(subscription)
                logger.warning("Change feed subscriber queue full — disconnecting")

        for subscription in dead:
            subscription.close()

    async def shutdown(self) -> None:
        """Disconnect all subscribers."""
        for subscription in list(self._subscriptions):
            subscription.close()
        self._subscriptions.clear()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)
