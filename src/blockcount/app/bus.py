"""
Change Bus

Fans board change notifications out to every open live-update stream.
"""

import asyncio
import logging
from typing import List

logger = logging.getLogger(__name__)


class ChangeBus:
    """
    Simple in-process bus for single-instance applications.

    Each live stream owns an asyncio.Queue; ``publish`` is synchronous so it
    can be registered directly as a board listener.
    """

    def __init__(self):
        self._subscribers: List[asyncio.Queue] = []

    def subscribe(self) -> asyncio.Queue:
        """Open a new subscription queue."""
        queue: asyncio.Queue = asyncio.Queue()
        self._subscribers.append(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        if queue in self._subscribers:
            self._subscribers.remove(queue)

    def publish(self, change: str) -> None:
        """Deliver a change name to every subscriber."""
        for queue in self._subscribers:
            queue.put_nowait(change)
        if self._subscribers:
            logger.debug(f"Published {change!r} to {len(self._subscribers)} stream(s)")

    def clear_subscribers(self) -> None:
        """Remove all subscribers."""
        self._subscribers.clear()

    @property
    def subscriber_count(self) -> int:
        """Get the number of active subscribers."""
        return len(self._subscribers)
