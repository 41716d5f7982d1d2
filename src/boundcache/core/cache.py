from __future__ import annotations

import asyncio
import dataclasses
import logging
import time
import typing as t
from collections import OrderedDict

from ..errors import ConfigurationError
from ..models import CacheEntry, Snapshot
from ..monitoring.metrics import CacheStats
from ..storage.base import NullStorage, StorageAdapter
from ..utils.config import CacheConfig

K = t.TypeVar("K")
V = t.TypeVar("V")

_logger = logging.getLogger(__name__)


class BoundedCache(t.Generic[K, V]):
    """Async LRU + TTL cache with pluggable persistence.

    Holds at most `max_size` entries and evicts the least recently used one
    when a new key would exceed that bound. Entries may carry a TTL; expired
    entries are purged lazily when `get`/`has` touch them. State is loaded
    from `storage` once, on the first operation, and written back as a full
    snapshot after every change when `persist_on_change` is set (otherwise
    only on `save()`).

    Example::

        cache = BoundedCache(max_size=50, default_ttl_seconds=60,
                             storage=FileStorage("users.json"))
        await cache.set("user:1", {"name": "Alice"})
        user = await cache.get("user:1")
    """

    def __init__(
        self,
        max_size: int = 100,
        default_ttl_seconds: t.Optional[float] = None,
        storage: t.Optional[StorageAdapter] = None,
        persist_on_change: bool = True,
        clock: t.Callable[[], float] = time.time,
    ) -> None:
        if max_size < 1:
            raise ConfigurationError(f"max_size must be >= 1, got {max_size}")
        if default_ttl_seconds is not None and default_ttl_seconds < 0:
            raise ConfigurationError(f"default_ttl_seconds must be >= 0, got {default_ttl_seconds}")
        self._max_size = max_size
        self._default_ttl = default_ttl_seconds
        self._storage = storage or NullStorage()
        self._persist_on_change = persist_on_change
        self._clock = clock
        # Insertion order doubles as recency order: LRU first, MRU last
        self._entries: "OrderedDict[K, CacheEntry[V]]" = OrderedDict()
        self._init_task: t.Optional[asyncio.Future[None]] = None
        # Storage writes land one at a time, in call order
        self._write_lock = asyncio.Lock()
        self.stats = CacheStats()

    @classmethod
    def from_config(
        cls,
        config: CacheConfig,
        storage: t.Optional[StorageAdapter] = None,
        clock: t.Callable[[], float] = time.time,
    ) -> "BoundedCache[t.Any, t.Any]":
        return cls(
            max_size=config.max_size,
            default_ttl_seconds=config.default_ttl_seconds,
            storage=storage,
            persist_on_change=config.persist_on_change,
            clock=clock,
        )

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def storage(self) -> StorageAdapter:
        return self._storage

    async def _ensure_loaded(self) -> None:
        # Concurrent first callers all await the same in-flight load. A load that
        # ended in an error or cancellation is retried by the next caller.
        task = self._init_task
        if task is None or (task.done() and (task.cancelled() or task.exception() is not None)):
            task = self._init_task = asyncio.ensure_future(self._load())
        # shield: a caller timing out must not cancel the load other callers share
        await asyncio.shield(task)

    async def _load(self) -> None:
        loaded = await self._storage.load()
        now = self._clock()
        survivors = [(key, entry) for key, entry in loaded.items() if not entry.is_expired(now)]
        survivors.sort(key=lambda item: item[1].last_accessed)
        if len(survivors) > self._max_size:
            # snapshot written by a larger cache; keep the most recent entries
            overflow = len(survivors) - self._max_size
            self.stats.removals.inc(overflow, reason="evicted")
            survivors = survivors[overflow:]
        for key, entry in survivors:
            self._entries[key] = entry
        dropped = len(loaded) - len(survivors)
        _logger.debug("Loaded %d cache entries (%d expired on load)", len(survivors), dropped)

    async def _persist(self) -> None:
        if self._persist_on_change:
            await self._write_snapshot()

    async def _write_snapshot(self) -> None:
        async with self._write_lock:
            # taken after acquiring the lock, so the last write carries the latest state
            await self._storage.save(self._snapshot())

    def _snapshot(self) -> Snapshot:
        return {key: dataclasses.replace(entry) for key, entry in self._entries.items()}

    def _expire_if_stale(self, key: K) -> bool:
        """Drop `key` if it has expired. Returns True when it was dropped."""
        entry = self._entries.get(key)
        if entry is None or not entry.is_expired(self._clock()):
            return False
        del self._entries[key]
        self.stats.removals.inc(reason="expired")
        _logger.debug("Expired cache key %r", key)
        return True

    async def get(self, key: K, default: t.Optional[V] = None) -> t.Optional[V]:
        await self._ensure_loaded()

        entry = self._entries.get(key)
        if entry is None:
            self.stats.lookups.inc(result="miss")
            return default

        if self._expire_if_stale(key):
            self.stats.lookups.inc(result="miss")
            await self._persist()
            return default

        # mark as recently used
        self._entries.move_to_end(key)
        entry.last_accessed = self._clock()
        self.stats.lookups.inc(result="hit")
        await self._persist()
        return entry.value

    async def set(self, key: K, value: V, ttl_seconds: t.Optional[float] = None) -> None:
        await self._ensure_loaded()

        ttl = self._default_ttl if ttl_seconds is None else ttl_seconds
        now = self._clock()
        expires_at = None if ttl is None else now + ttl

        if key not in self._entries:
            while len(self._entries) >= self._max_size:
                # evict LRU regardless of its remaining TTL
                evicted, _ = self._entries.popitem(last=False)
                self.stats.removals.inc(reason="evicted")
                _logger.debug("Evicted cache key %r", evicted)

        self._entries[key] = CacheEntry(value=value, expires_at=expires_at, last_accessed=now)
        self._entries.move_to_end(key)
        await self._persist()

    async def delete(self, key: K) -> None:
        await self._ensure_loaded()
        self._entries.pop(key, None)
        await self._persist()

    async def has(self, key: K) -> bool:
        await self._ensure_loaded()

        if key not in self._entries:
            return False
        if self._expire_if_stale(key):
            await self._persist()
            return False
        return True

    async def clear(self) -> None:
        await self._ensure_loaded()
        self._entries.clear()
        async with self._write_lock:
            await self._storage.clear()

    async def size(self) -> int:
        """Number of stored entries, including any not yet lazily expired."""
        await self._ensure_loaded()
        return len(self._entries)

    async def keys(self) -> t.List[K]:
        """Stored keys from least to most recently used, including any not yet lazily expired."""
        await self._ensure_loaded()
        return list(self._entries.keys())

    async def save(self) -> None:
        """Write the full snapshot to storage regardless of `persist_on_change`."""
        await self._ensure_loaded()
        await self._write_snapshot()
