"""
Cache gateway.

The resolver only needs two operations from a cache:

- `remember(key, ttl, producer)` — return the stored value, or call
  `producer`, store its result for `ttl` minutes and return it.
- `forget(key)` — drop a key.

Any object with those two methods satisfies `CacheGateway` (structural
typing), so a host can plug in its own store.  `MemoryCache` is the
in-process default.  Entries are best-effort memoization, never a
source of truth.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar

T = TypeVar("T")


class CacheGateway(Protocol):
    def remember(self, key: str, ttl: int, producer: Callable[[], T]) -> T: ...

    def forget(self, key: str) -> None: ...


@dataclass
class _Entry:
    value: Any
    expires_at: float


class MemoryCache:
    """
    Dict-backed cache with per-entry expiry (TTL in minutes).

    Expired entries are dropped when read and swept on every write.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, _Entry] = {}

    def get(self, key: str, default: Any = None) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return default
        if entry.expires_at <= self._clock():
            del self._entries[key]
            return default
        return entry.value

    def has(self, key: str) -> bool:
        marker = object()
        return self.get(key, marker) is not marker

    def put(self, key: str, value: Any, ttl: int) -> None:
        now = self._clock()
        self._purge(now)
        self._entries[key] = _Entry(value=value, expires_at=now + ttl * 60)

    def _purge(self, now: float) -> None:
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]

    def remember(self, key: str, ttl: int, producer: Callable[[], T]) -> T:
        marker = object()
        value = self.get(key, marker)
        if value is marker:
            value = producer()
            self.put(key, value, ttl)
        return value

    def forget(self, key: str) -> None:
        self._entries.pop(key, None)

    def flush(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
