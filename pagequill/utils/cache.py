"""Lightweight in-memory cache used to memoise oracle measurements."""

from __future__ import annotations

from collections import OrderedDict
from threading import RLock
from typing import Any, Callable, Hashable, Optional


class Cache:
    """Concurrent-safe LRU cache with size control."""

    def __init__(self, max_size: int = 2048) -> None:
        self.max_size = max(1, int(max_size))
        self._entries: "OrderedDict[Hashable, Any]" = OrderedDict()
        self._lock = RLock()
        self.hits = 0
        self.misses = 0

    def _ensure_capacity(self) -> None:
        while len(self._entries) > self.max_size:
            self._entries.popitem(last=False)

    def get(self, key: Hashable) -> Optional[Any]:
        with self._lock:
            if key not in self._entries:
                self.misses += 1
                return None
            self.hits += 1
            self._entries.move_to_end(key)
            return self._entries[key]

    def set(self, key: Hashable, value: Any) -> None:
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            self._ensure_capacity()

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def has(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_or_set(self, key: Hashable, factory: Callable[[], Any]) -> Any:
        with self._lock:
            cached = self.get(key)
            if cached is not None:
                return cached
            value = factory()
            self.set(key, value)
            return value
