"""Change Broadcaster - in-process publish/subscribe for task change events.

Invariants:
    - publish() never awaits: a slow or absent listener cannot block a mutation
    - Only listeners registered at publish time receive the event (no replay)
    - Every listener gets its own queue; events arrive in publish order
    - listen() unsubscribes on exit, including cancellation
    - close() ends every active listen() and clears registrations

Design Decisions:
    - asyncio.Queue per subscriber: explicit registration/teardown
    - Unbounded queues by default; with max_queue_size > 0 a full queue drops
      its oldest event and logs a warning
    - Singleton broadcaster initialized on startup, same lifecycle as db_manager
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator

from taskboard.core.domain_types import TaskChangeEvent

logger = logging.getLogger(__name__)

_CLOSED = object()


class ChangeBroadcaster:
    """Fan-out of TaskChangeEvent to every connected listener."""

    def __init__(self, max_queue_size: int = 0):
        self.max_queue_size = max_queue_size
        self._subscribers: set[asyncio.Queue] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.max_queue_size)
        self._subscribers.add(queue)
        logger.debug(
            "Listener subscribed",
            extra={"subscribers": self.subscriber_count},
        )
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        self._subscribers.discard(queue)
        logger.debug(
            "Listener unsubscribed",
            extra={"subscribers": self.subscriber_count},
        )

    def publish(self, event: TaskChangeEvent) -> int:
        """Deliver to every current listener. Returns the number reached."""
        delivered = 0
        for queue in list(self._subscribers):
            if queue.full():
                queue.get_nowait()
                logger.warning(
                    "Listener queue full, dropped oldest change event",
                    extra={"task_id": event.task_id},
                )
            queue.put_nowait(event)
            delivered += 1
        logger.debug(
            f"Published {event.kind.value} change",
            extra={"task_id": event.task_id, "subscribers": delivered},
        )
        return delivered

    @asynccontextmanager
    async def subscription(self) -> AsyncGenerator[asyncio.Queue, None]:
        queue = self.subscribe()
        try:
            yield queue
        finally:
            self.unsubscribe(queue)

    async def listen(self) -> AsyncIterator[TaskChangeEvent]:
        """Yield events until close() is called or the consumer stops."""
        async with self.subscription() as queue:
            while True:
                item = await queue.get()
                if item is _CLOSED:
                    return
                yield item

    def close(self) -> None:
        """Wake every listener with an end marker and drop registrations."""
        for queue in list(self._subscribers):
            if queue.full():
                queue.get_nowait()
            queue.put_nowait(_CLOSED)
        self._subscribers.clear()
        logger.info("Change broadcaster closed")


# Singleton (initialized on startup)
broadcaster: ChangeBroadcaster | None = None


def init_broadcaster(max_queue_size: int = 0) -> ChangeBroadcaster:
    global broadcaster
    broadcaster = ChangeBroadcaster(max_queue_size)
    return broadcaster


def close_broadcaster() -> None:
    global broadcaster
    if broadcaster is not None:
        broadcaster.close()
        broadcaster = None


def get_broadcaster() -> ChangeBroadcaster:
    """FastAPI dependency for the change broadcaster."""
    if not broadcaster:
        raise RuntimeError("Change broadcaster not initialized")
    return broadcaster
