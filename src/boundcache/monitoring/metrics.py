from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass
class Counter:
    name: str
    help: str
    values: Dict[Tuple, float] = field(default_factory=dict)

    def inc(self, value: float = 1.0, **labels: Any) -> None:
        key = tuple(sorted(labels.items()))
        self.values[key] = self.values.get(key, 0.0) + value

    def get(self, **labels: Any) -> float:
        return self.values.get(tuple(sorted(labels.items())), 0.0)

    def reset(self) -> None:
        self.values.clear()


class CacheStats:
    """Per-cache lookup and removal counters."""

    def __init__(self) -> None:
        self.lookups = Counter("boundcache_lookups_total", "Cache lookups by result")
        self.removals = Counter("boundcache_removals_total", "Entries removed by reason")

    @property
    def hits(self) -> int:
        return int(self.lookups.get(result="hit"))

    @property
    def misses(self) -> int:
        return int(self.lookups.get(result="miss"))

    @property
    def evictions(self) -> int:
        return int(self.removals.get(reason="evicted"))

    @property
    def expirations(self) -> int:
        return int(self.removals.get(reason="expired"))

    def hit_ratio(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0

    def reset(self) -> None:
        self.lookups.reset()
        self.removals.reset()

    def as_dict(self) -> Dict[str, float]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "expirations": self.expirations,
            "hit_ratio": self.hit_ratio(),
        }
