"""Small TTL cache used for provider credentials and auth tokens.

The clock is injectable so tests can advance time deterministically.
Concurrent refills are harmless: the worst case is a redundant lookup.
"""

import time
from abc import ABC, abstractmethod
from typing import Any, Callable


class Cache(ABC):
    """Key/value cache with per-entry expiry."""

    @abstractmethod
    def get(self, key: str) -> Any | None: ...

    @abstractmethod
    def set(self, key: str, value: Any, ttl_seconds: float) -> None: ...

    @abstractmethod
    def expire(self, key: str) -> None: ...

    @abstractmethod
    def clear(self) -> None: ...


class TTLCache(Cache):
    """In-memory cache; entries are dropped lazily once their TTL passes."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[Any, float]] = {}

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            self._entries.pop(key, None)
            return None
        return value

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        self._entries[key] = (value, self._clock() + ttl_seconds)

    def expire(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
