"""Thread-safe queues for passing events between components."""

from __future__ import annotations

import threading
from collections import deque
from typing import Generic, TypeVar

from .events import Event

T = TypeVar("T")


class EventQueue:
    """A blocking FIFO queue of events."""

    def __init__(self) -> None:
        self._items: deque[Event] = deque()
        self._cond = threading.Condition()

    def push(self, event: Event) -> None:
        """Add an event and wake one waiting consumer."""
        with self._cond:
            self._items.append(event)
            self._cond.notify()

    def wait_and_pop(self) -> Event:
        """Block until an event is available and return it."""
        with self._cond:
            self._cond.wait_for(lambda: bool(self._items))
            return self._items.popleft()

    def empty(self) -> bool:
        """Return True if no events are waiting."""
        with self._cond:
            return not self._items


class ThreadSafeQueue(Generic[T]):
    """A non-blocking FIFO queue; ``try_pop`` returns None when empty."""

    def __init__(self) -> None:
        self._items: deque[T] = deque()
        self._lock = threading.Lock()

    def push(self, item: T) -> None:
        """Append an item; None cannot be queued."""
        if item is None:
            raise ValueError("cannot push None onto the queue")
        with self._lock:
            self._items.append(item)

    def try_pop(self) -> T | None:
        """Remove and return the oldest item, or None if the queue is empty."""
        with self._lock:
            return self._items.popleft() if self._items else None