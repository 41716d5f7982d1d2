"""Shared fixtures and fakes for unit tests."""

from __future__ import annotations

import dataclasses
import typing as t

import pytest

from boundcache.models import Snapshot
from boundcache.storage.base import StorageAdapter


class FakeClock:
    """Manually advanced stand-in for time.time."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingStorage(StorageAdapter):
    """Dict-backed adapter that keeps the last saved snapshot."""

    def __init__(self, initial: t.Optional[Snapshot] = None) -> None:
        self.data: Snapshot = dict(initial or {})
        self.load_calls = 0
        self.save_calls = 0
        self.clear_calls = 0

    async def load(self) -> Snapshot:
        self.load_calls += 1
        return {key: dataclasses.replace(entry) for key, entry in self.data.items()}

    async def save(self, data: Snapshot) -> None:
        self.save_calls += 1
        self.data = dict(data)

    async def clear(self) -> None:
        self.clear_calls += 1
        self.data = {}


class FakeRedis:
    """The subset of redis.asyncio.Redis used by RedisStorage."""

    def __init__(self) -> None:
        self.store: t.Dict[str, str] = {}
        self.closed = False

    async def get(self, key: str) -> t.Optional[str]:
        return self.store.get(key)

    async def set(self, key: str, value: str) -> bool:
        self.store[key] = value
        return True

    async def delete(self, key: str) -> int:
        return 1 if self.store.pop(key, None) is not None else 0

    async def ping(self) -> bool:
        return True

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def recording_storage():
    return RecordingStorage()


@pytest.fixture
def fake_redis():
    return FakeRedis()
