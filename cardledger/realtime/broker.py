"""In-process pub/sub for card snapshots.

Every subscriber owns a bounded queue living on its own event loop, so
publishing is safe from worker threads and from other loops. Delivery is
fire-and-forget: a subscriber whose loop is gone or whose queue is full is
dropped and the rest still receive the snapshot.
"""

import asyncio
import itertools
import logging
import threading
from typing import Any

logger = logging.getLogger(__name__)

_CLOSED = object()


class Subscription:
    def __init__(self, subscription_id: int, loop: asyncio.AbstractEventLoop, queue_size: int):
        self.id = subscription_id
        self.loop = loop
        self.queue: asyncio.Queue = asyncio.Queue(maxsize=queue_size)
        self.closed = False

    def __aiter__(self):
        return self

    async def __anext__(self) -> Any:
        item = await self.queue.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        return item

    def put(self, snapshot: Any) -> None:
        """Runs on the subscriber loop."""
        self.queue.put_nowait(snapshot)

    def _wake(self) -> None:
        # runs on the subscriber loop, pending snapshots are discarded
        while not self.queue.empty():
            self.queue.get_nowait()
        self.queue.put_nowait(_CLOSED)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self.loop.call_soon_threadsafe(self._wake)
        except RuntimeError:
            # loop already closed, nobody is waiting on the queue
            logger.debug("Subscription %s closed after its loop", self.id)


class CardBroker:
    def __init__(self, queue_size: int = 16):
        self.queue_size = queue_size
        self._subscribers: set[Subscription] = set()
        self._lock = threading.Lock()
        self._ids = itertools.count(1)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def subscribe(self) -> Subscription:
        """Register a subscriber bound to the running event loop."""
        subscription = Subscription(
            next(self._ids), asyncio.get_running_loop(), self.queue_size
        )
        with self._lock:
            self._subscribers.add(subscription)
        logger.info(
            "Subscriber %s connected (%d active)", subscription.id, self.subscriber_count
        )
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            self._subscribers.discard(subscription)
        subscription.close()
        logger.info(
            "Subscriber %s disconnected (%d active)",
            subscription.id,
            self.subscriber_count,
        )

    def publish(self, snapshot: Any) -> int:
        """Hand the snapshot to every subscriber. Returns how many were reached."""
        with self._lock:
            subscribers = list(self._subscribers)
        delivered = 0
        for subscription in subscribers:
            try:
                subscription.loop.call_soon_threadsafe(
                    self._deliver, subscription, snapshot
                )
            except RuntimeError:
                logger.warning(
                    "Dropping subscriber %s: event loop is closed", subscription.id
                )
                self.unsubscribe(subscription)
                continue
            delivered += 1
        logger.debug("Snapshot published to %d subscriber(s)", delivered)
        return delivered

    def _deliver(self, subscription: Subscription, snapshot: Any) -> None:
        if subscription.closed:
            return
        try:
            subscription.put(snapshot)
        except asyncio.QueueFull:
            logger.warning(
                "Dropping subscriber %s: %d snapshots pending",
                subscription.id,
                subscription.queue.qsize(),
            )
            self.unsubscribe(subscription)

    def close(self) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for subscription in subscribers:
            self.unsubscribe(subscription)
