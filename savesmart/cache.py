import threading
import time
from typing import Any, Callable, Hashable, Optional


# TTLs in seconds
EVENTS_TTL = 60 * 60
FUEL_TTL = 30 * 60
RECIPES_TTL = 24 * 60 * 60
GROCERY_TTL = 24 * 60 * 60


class TTLCache:
    """In-memory map whose entries expire ``ttl`` seconds after being set.

    Safe to share between the request threads FastAPI runs sync routes on.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[Hashable, tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def set(self, key: Hashable, value: Any, ttl: float) -> None:
        expires_at = self._clock() + ttl
        with self._lock:
            self._entries[key] = (value, expires_at)

    def get(self, key: Hashable) -> Optional[Any]:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if now > expires_at:
                # Another reader may have evicted it already
                self._entries.pop(key, None)
                return None
            return value

    def invalidate(self, key: Hashable) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        # Expired entries count until they are read
        with self._lock:
            return len(self._entries)
