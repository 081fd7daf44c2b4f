"""Bounded hand-off between request threads and the log dispatcher.

Request handlers must never block on sink I/O, so records are parked here and
drained in batches. When the buffer is full the oldest record is evicted; the
eviction is reported through ``on_drop`` after the lock is released so the
callback may log without deadlocking.
"""

from __future__ import annotations

import collections
import threading
from typing import Callable, Deque, Dict, List, Mapping, Optional


Record = Mapping[str, object]


class RingBufferQueue:
    def __init__(
        self,
        capacity: int,
        *,
        on_drop: Callable[[Record], None] | None = None,
    ) -> None:
        if capacity <= 0:
            raise ValueError("Queue capacity must be positive")

        self._buffer: Deque[Record] = collections.deque(maxlen=capacity)
        self._cond = threading.Condition(threading.Lock())
        self._evictions = 0
        self._on_drop = on_drop

    @property
    def dropped(self) -> int:
        with self._cond:
            return self._evictions

    def size(self) -> int:
        with self._cond:
            return len(self._buffer)

    def put(self, item: Record) -> Optional[Record]:
        """Append ``item``; return the evicted record, if any."""

        with self._cond:
            evicted = self._buffer[0] if len(self._buffer) == self._buffer.maxlen else None
            if evicted is not None:
                self._evictions += 1
            # deque(maxlen=...) discards from the left on overflow
            self._buffer.append(item)
            self._cond.notify()

        if evicted is not None and self._on_drop is not None:
            self._on_drop(evicted)

        return evicted

    def drain(self, max_items: int) -> List[Record]:
        with self._cond:
            count = min(max_items, len(self._buffer))
            return [self._buffer.popleft() for _ in range(count)]

    def wait(self, timeout: float) -> bool:
        """Block until a record is buffered or ``timeout`` seconds pass."""

        with self._cond:
            return self._cond.wait_for(lambda: len(self._buffer) > 0, timeout)

    def drop_metadata(self, dropped: Record, *, reason: str = "queue_full") -> Dict[str, object]:
        return {
            "drop_reason": reason,
            "drop_count": self.dropped,
            "dropped_level": dropped.get("level"),
            "dropped_component": dropped.get("component"),
        }
