"""Core module for the bounded LRU + TTL cache."""

from .cache import BoundedCache

__all__ = ["BoundedCache"]
