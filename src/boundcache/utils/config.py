from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class CacheConfig:
    max_size: int = 100
    default_ttl_seconds: Optional[float] = None
    persist_on_change: bool = True


@dataclass
class StorageConfig:
    type: str = "memory"  # memory | redis | file
    connection_string: Optional[str] = None
    key: str = "boundcache:data"
    file_path: str = "./cache-data.json"


@dataclass
class ResilienceConfig:
    circuit_breaker_enabled: bool = True
    failure_threshold: int = 5
    reset_timeout_seconds: float = 30.0
    retry_max_attempts: int = 3
    retry_backoff_ms: List[int] = dataclasses.field(default_factory=lambda: [100, 500, 2000])


@dataclass
class BoundCacheConfig:
    cache: CacheConfig = dataclasses.field(default_factory=CacheConfig)
    storage: StorageConfig = dataclasses.field(default_factory=StorageConfig)
    resilience: ResilienceConfig = dataclasses.field(default_factory=ResilienceConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BoundCacheConfig":
        def build(dc_cls, key):
            values = data.get(key) or {}
            return dc_cls(**values)

        return cls(
            cache=build(CacheConfig, "cache"),
            storage=build(StorageConfig, "storage"),
            resilience=build(ResilienceConfig, "resilience"),
        )
