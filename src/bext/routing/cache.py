"""TTL cache for route matches.

Purely an optimization: a router without a cache returns the same
matches, only slower.

Thread safety:
    Reads evict expired entries, so every operation runs under a
    ``threading.Lock``.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from bext.config import DEFAULT_CACHE_TTL
from bext.routing.route import RouteMatch


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A cached match and the clock reading after which it is stale."""

    match: RouteMatch
    expires_at: float


class RouteCache:
    """In-memory ``key -> RouteMatch`` store with per-entry expiry.

    TTLs are in milliseconds. An entry is stale once the clock reaches
    its ``expires_at``, so ``set(key, match, ttl=0)`` is never served.

    Usage::

        cache = RouteCache(ttl=5_000)
        cache.set("GET:/users", match)
        cache.get("GET:/users")
    """

    __slots__ = ("_clock", "_entries", "_lock", "default_ttl")

    def __init__(
        self,
        ttl: int | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.default_ttl = DEFAULT_CACHE_TTL if ttl is None else ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> RouteMatch | None:
        """Return the cached match, or ``None`` if missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() >= entry.expires_at:
                del self._entries[key]
                return None
            return entry.match

    def set(self, key: str, match: RouteMatch, ttl: int | None = None) -> None:
        """Store *match*, replacing any entry under *key*."""
        lifetime = self.default_ttl if ttl is None else ttl
        expires_at = self._clock() + lifetime / 1000
        with self._lock:
            self._entries[key] = CacheEntry(match=match, expires_at=expires_at)

    def prune(self) -> int:
        """Drop every expired entry and return how many were removed."""
        with self._lock:
            now = self._clock()
            stale = [key for key, entry in self._entries.items() if now >= entry.expires_at]
            for key in stale:
                del self._entries[key]
            return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    @property
    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
