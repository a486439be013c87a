"""
In-process cache tiers.

``EdgeCache`` holds finished responses keyed by the full request URL.
``TTLStore`` is the value cache keyed by ``summary:{user}:{bg}:{text}``.
Entries are always replaced whole; the last writer wins.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from .config import CACHE_MAX_ENTRIES
from .theme import Theme


def summary_cache_key(user: str, theme: Theme) -> str:
    return f"summary:{user}:{theme.background_color}:{theme.text_color}"


class TTLStore:
    """
    Expiring map with a size bound.

    Entries are kept in write order. A write moves its key to the end, drops
    expired entries from the front and then evicts the oldest entries while
    the store holds more than ``max_entries``.
    """

    def __init__(self, clock: Callable[[], float] = time.time, max_entries: Optional[int] = CACHE_MAX_ENTRIES) -> None:
        self._clock = clock
        self.max_entries = max_entries
        self._lock = threading.Lock()
        self._entries: "OrderedDict[str, Tuple[float, str]]" = OrderedDict()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def put(self, key: str, value: str, ttl: float) -> None:
        with self._lock:
            now = self._clock()
            self._entries.pop(key, None)
            self._entries[key] = (now + ttl, value)
            self._evict(now)

    def _evict(self, now: float) -> None:
        # front-to-back is write order; stop at the first live entry
        while self._entries:
            oldest_key, (expires_at, _) = next(iter(self._entries.items()))
            if expires_at > now:
                break
            del self._entries[oldest_key]
        if self.max_entries is not None:
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class EdgeCache:
    """Full-request cache. Entries live for the ``s-maxage`` of the response."""

    def __init__(self, ttl: float, store: Optional[TTLStore] = None, max_entries: int = CACHE_MAX_ENTRIES) -> None:
        self.ttl = ttl
        self._store = TTLStore(max_entries=max_entries) if store is None else store
        if self._store.max_entries is None or self._store.max_entries > max_entries:
            self._store.max_entries = max_entries

    def get(self, request_key: str) -> Optional[str]:
        return self._store.get(request_key)

    def put(self, request_key: str, svg: str) -> None:
        self._store.put(request_key, svg, self.ttl)

    def __contains__(self, request_key: str) -> bool:
        return request_key in self._store

    def __len__(self) -> int:
        return len(self._store)
