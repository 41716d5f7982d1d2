from .metrics import CacheStats, Counter

__all__ = ["CacheStats", "Counter"]
