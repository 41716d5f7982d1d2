"""Build a StorageAdapter from configuration."""

from __future__ import annotations

import typing as t

from ..errors import ConfigurationError
from ..utils.config import ResilienceConfig, StorageConfig
from ..utils.resilience import CircuitBreaker, CircuitBreakerConfig
from .base import NullStorage, StorageAdapter
from .file_adapter import FileStorage
from .redis_adapter import RedisStorage


def build_storage(
    config: t.Optional[StorageConfig] = None,
    resilience: t.Optional[ResilienceConfig] = None,
) -> StorageAdapter:
    config = config or StorageConfig()
    resilience = resilience or ResilienceConfig()
    kind = (config.type or "memory").lower()

    if kind == "memory":
        return NullStorage()

    if kind == "file":
        if not config.file_path:
            raise ConfigurationError("Missing file_path for file storage")
        return FileStorage(config.file_path)

    if kind == "redis":
        breaker = CircuitBreaker(
            CircuitBreakerConfig(
                enabled=resilience.circuit_breaker_enabled,
                failure_threshold=resilience.failure_threshold,
                reset_timeout_seconds=resilience.reset_timeout_seconds,
            )
        )
        return RedisStorage(
            config.connection_string or "redis://localhost:6379/0",
            key=config.key,
            circuit_breaker=breaker,
            retry_attempts=resilience.retry_max_attempts,
            retry_backoff_ms=resilience.retry_backoff_ms,
        )

    raise ConfigurationError(f"Unknown storage type: {config.type!r}")
