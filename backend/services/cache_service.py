import time
from typing import Any

from config import settings


class TTLCache:
    """In-process cache for AI-scored responses; entries expire after ``ttl`` seconds."""

    def __init__(self, ttl: int | None = None, max_entries: int = 512):
        self._store: dict[str, tuple[Any, float]] = {}
        self._ttl = ttl or settings.cache_ttl_seconds
        self._max_entries = max_entries

    def get(self, key: str) -> Any | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        value, stored_at = entry
        if time.monotonic() - stored_at < self._ttl:
            return value
        del self._store[key]
        return None

    def set(self, key: str, value: Any) -> None:
        if key not in self._store and len(self._store) >= self._max_entries:
            # dicts keep insertion order, so the first key is the oldest
            del self._store[next(iter(self._store))]
        self._store[key] = (value, time.monotonic())

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)


cache = TTLCache()
