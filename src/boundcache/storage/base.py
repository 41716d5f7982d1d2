from __future__ import annotations

from abc import ABC, abstractmethod

from ..models import Snapshot


class StorageAdapter(ABC):
    """Persistence backend for a cache.

    Implementations must fail closed: `load` returns an empty mapping when
    nothing usable is stored, and `save`/`clear` swallow their own errors.
    """

    @abstractmethod
    async def load(self) -> Snapshot:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    async def save(self, data: Snapshot) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    async def clear(self) -> None:  # pragma: no cover - interface
        raise NotImplementedError


class NullStorage(StorageAdapter):
    """No-op adapter: the cache lives only in process memory."""

    async def load(self) -> Snapshot:
        return {}

    async def save(self, data: Snapshot) -> None:
        return None

    async def clear(self) -> None:
        return None
