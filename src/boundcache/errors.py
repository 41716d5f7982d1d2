from __future__ import annotations


class BoundCacheError(Exception):
    """Base error for boundcache."""


class ConfigurationError(BoundCacheError, ValueError):
    """Raised when a cache or storage configuration is invalid."""


class StorageError(BoundCacheError):
    """Raised inside storage adapters; never escapes an adapter boundary."""


class CircuitOpenError(StorageError):
    """Raised when a circuit breaker refuses to attempt an operation."""
