"""Bounded event channel shared by the stream pumps and the renderer.

Many producers may ``send``; exactly one consumer iterates.  ``send``
blocks while the channel is full, which is how a slow renderer slows the
pumps down instead of losing events.
"""

from __future__ import annotations

import queue
from collections.abc import Iterator

from scanpulse.models.events import Event

DEFAULT_CAPACITY = 10

_CLOSED = object()


class EventChannel:
    """A closable ``queue.Queue`` of events.

    Parameters
    ----------
    capacity:
        Maximum number of buffered events.  Must be at least 1.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self._queue: queue.Queue = queue.Queue(maxsize=capacity)

    def send(self, event: Event) -> None:
        """Enqueue *event*, blocking while the channel is full."""
        self._queue.put(event)

    def close(self) -> None:
        """Mark the end of the stream.

        Events sent before ``close`` are still delivered to the consumer.
        """
        self._queue.put(_CLOSED)

    def __iter__(self) -> Iterator[Event]:
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                return
            yield item
