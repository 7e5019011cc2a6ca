"""
Query cache
===========
Server state keyed by request path, so every component asking for
``/api/users/1/skills`` on the same rerun shares one fetch. Mutations
invalidate by key prefix and the next read refetches.

Errors are never cached: a failed fetch raises and the next read retries.
"""

import time
from typing import Any, Callable, Dict, Tuple

from .config import settings
from .logging_config import get_logger

log = get_logger(__name__)


class QueryCache:
    def __init__(self, ttl: float = None, clock: Callable[[], float] = time.monotonic):
        self.ttl = settings.UPCRAFT_CACHE_TTL if ttl is None else ttl
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Any]] = {}

    def get_or_fetch(self, key: str, fetcher: Callable[[], Any]) -> Any:
        entry = self._entries.get(key)
        now = self._clock()
        if entry is not None and now - entry[0] < self.ttl:
            log.debug("cache hit %s", key)
            return entry[1]

        value = fetcher()
        self._entries[key] = (now, value)
        return value

    def peek(self, key: str) -> Any:
        """Cached value regardless of age, or None."""
        entry = self._entries.get(key)
        return entry[1] if entry else None

    def set(self, key: str, value: Any):
        self._entries[key] = (self._clock(), value)

    def invalidate(self, *prefixes: str) -> int:
        """Drop every key starting with any prefix. Returns how many were dropped."""
        stale = [k for k in self._entries if any(k.startswith(p) for p in prefixes)]
        for k in stale:
            del self._entries[k]
        if stale:
            log.debug("invalidated %s", ", ".join(stale))
        return len(stale)

    def clear(self):
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
