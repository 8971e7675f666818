from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class CacheEntry:
    value: Any
    expires_at: float


class TTLCache:
    """Read-through cache with an absolute expiry per entry.

    The entry map is never mutated in place: every write builds a new dict,
    leaving out expired entries, and swaps the reference, so readers always see
    a complete snapshot. Loads for the same key are coalesced behind a per-key
    lock that is dropped once nobody holds it; different keys load in parallel
    and no lock is taken on the read path.
    """

    def __init__(self, ttl_sec: float, *, clock: Callable[[], float] = time.monotonic):
        if ttl_sec <= 0:
            raise ValueError("ttl_sec must be greater than zero")
        self.ttl_sec = ttl_sec
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._key_locks: dict[str, threading.Lock] = {}
        self._key_locks_guard = threading.Lock()

    def __contains__(self, key: str) -> bool:
        return self._fresh_entry(key) is not None

    def __len__(self) -> int:
        return len(self.keys())

    def keys(self) -> list[str]:
        now = self._clock()
        return [key for key, entry in self._entries.items() if entry.expires_at > now]

    def _fresh_entry(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None or entry.expires_at <= self._clock():
            return None
        return entry

    def _lock_for(self, key: str) -> threading.Lock:
        with self._key_locks_guard:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = self._key_locks[key] = threading.Lock()
            return lock

    def _release_lock(self, key: str, lock: threading.Lock) -> None:
        # waiters already holding a reference still serialise on the old lock
        with self._key_locks_guard:
            if self._key_locks.get(key) is lock and not lock.locked():
                del self._key_locks[key]

    def get(self, key: str, default: Any = None) -> Any:
        entry = self._fresh_entry(key)
        return default if entry is None else entry.value

    def set(self, key: str, value: Any) -> None:
        now = self._clock()
        # expired entries are dropped on every write so filtered keys cannot pile up
        entries = {name: entry for name, entry in self._entries.items() if entry.expires_at > now}
        entries[key] = CacheEntry(value=value, expires_at=now + self.ttl_sec)
        self._entries = entries

    def get_or_load(self, key: str, loader: Callable[[], T]) -> T:
        entry = self._fresh_entry(key)
        if entry is not None:
            logger.debug("Reference cache hit key=%s", key)
            return entry.value

        lock = self._lock_for(key)
        try:
            with lock:
                entry = self._fresh_entry(key)
                if entry is not None:
                    return entry.value
                logger.debug("Reference cache miss key=%s; loading", key)
                value = loader()
                self.set(key, value)
                return value
        finally:
            self._release_lock(key, lock)

    def evict(self, key: str) -> bool:
        if key not in self._entries:
            return False
        self._entries = {name: entry for name, entry in self._entries.items() if name != key}
        return True

    def clear(self) -> int:
        evicted = len(self._entries)
        self._entries = {}
        return evicted
