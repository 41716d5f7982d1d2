"""boundcache

A bounded async key-value cache with per-entry TTL expiry, LRU eviction and
pluggable persistence (no-op, Redis, or JSON file storage).
"""

from .core.cache import BoundedCache
from .errors import (
    BoundCacheError,
    CircuitOpenError,
    ConfigurationError,
    StorageError,
)
from .models import CacheEntry, Snapshot
from .monitoring.metrics import CacheStats
from .storage import (
    FileStorage,
    NullStorage,
    RedisStorage,
    StorageAdapter,
    build_storage,
)
from .utils.config import BoundCacheConfig, CacheConfig, ResilienceConfig, StorageConfig

__all__ = [
    "BoundedCache",
    "CacheEntry",
    "Snapshot",
    "CacheStats",
    "StorageAdapter",
    "NullStorage",
    "FileStorage",
    "RedisStorage",
    "build_storage",
    "BoundCacheConfig",
    "CacheConfig",
    "StorageConfig",
    "ResilienceConfig",
    "BoundCacheError",
    "ConfigurationError",
    "StorageError",
    "CircuitOpenError",
]

__version__ = "0.1.0"
