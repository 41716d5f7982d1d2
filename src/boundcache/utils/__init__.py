"""Configuration and resilience helpers."""

from .config import BoundCacheConfig, CacheConfig, ResilienceConfig, StorageConfig
from .resilience import CircuitBreaker, CircuitBreakerConfig, CircuitState, with_retries

__all__ = [
    "BoundCacheConfig",
    "CacheConfig",
    "StorageConfig",
    "ResilienceConfig",
    "CircuitBreaker",
    "CircuitBreakerConfig",
    "CircuitState",
    "with_retries",
]
