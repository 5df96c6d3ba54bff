from __future__ import annotations

import threading
import time
from collections import OrderedDict, deque
from collections.abc import Callable


class SlidingWindowRateLimiter:
    """In-process per-key limiter over a trailing time window.

    Each key keeps the monotonic timestamps of its admitted events, oldest
    first. Stale timestamps are pruned lazily on every ``allow`` call and a
    key whose record becomes empty is dropped from the mapping. One lock
    guards the whole mapping, so prune, check and append happen as one step.
    """

    def __init__(
        self,
        window_seconds: float = 60,
        max_keys: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.window_seconds = window_seconds
        self.max_keys = max_keys
        self._clock = clock
        # Least recently admitted key first.
        self._events: OrderedDict[str, deque[float]] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def tracked_keys(self) -> int:
        with self._lock:
            return len(self._events)

    def allow(self, key: str, limit: int, window_seconds: float | None = None) -> bool:
        window = self.window_seconds if window_seconds is None else window_seconds
        with self._lock:
            # Read under the lock so each record stays in time order.
            now = self._clock()
            bucket = self._events.get(key)
            if bucket is not None:
                # A timestamp exactly `window` old still counts.
                while bucket and now - bucket[0] > window:
                    bucket.popleft()
                if not bucket:
                    del self._events[key]
                    bucket = None

            count = len(bucket) if bucket is not None else 0
            if count >= limit:
                return False

            if bucket is None:
                bucket = self._events[key] = deque()
                self._evict_overflow()
            else:
                self._events.move_to_end(key)
            bucket.append(now)
            return True

    def reset(self, key: str) -> None:
        with self._lock:
            self._events.pop(key, None)

    def _evict_overflow(self) -> None:
        if self.max_keys is None:
            return
        while len(self._events) > max(self.max_keys, 1):
            self._events.popitem(last=False)
