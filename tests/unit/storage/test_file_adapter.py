"""Unit tests for FileStorage."""

import json
from unittest.mock import patch

import pytest

from boundcache.core.cache import BoundedCache
from boundcache.models import CacheEntry
from boundcache.storage.file_adapter import FileStorage


@pytest.mark.asyncio
class TestFileStorage:
    async def test_load_missing_file_is_empty(self, tmp_path):
        storage = FileStorage(tmp_path / "missing.json")
        assert await storage.load() == {}

    async def test_save_then_load(self, tmp_path):
        path = tmp_path / "cache.json"
        storage = FileStorage(path)
        data = {
            "a": CacheEntry(value={"n": 1}, expires_at=None, last_accessed=5.0),
            "b": CacheEntry(value="two", expires_at=50.0, last_accessed=6.0),
        }

        await storage.save(data)

        assert path.exists()
        assert json.loads(path.read_text())[0][0] == "a"
        assert await storage.load() == data

    async def test_save_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "cache.json"
        storage = FileStorage(path)

        await storage.save({"a": CacheEntry(value=1, expires_at=None, last_accessed=0.0)})

        assert path.exists()

    async def test_save_leaves_no_temp_files(self, tmp_path):
        storage = FileStorage(tmp_path / "cache.json")
        await storage.save({"a": CacheEntry(value=1, expires_at=None, last_accessed=0.0)})
        await storage.save({"b": CacheEntry(value=2, expires_at=None, last_accessed=0.0)})

        assert [p.name for p in tmp_path.iterdir()] == ["cache.json"]
        assert list(await storage.load()) == ["b"]

    async def test_corrupt_file_is_empty(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text("{definitely not json")

        assert await FileStorage(path).load() == {}

    async def test_unserialisable_value_is_dropped(self, tmp_path):
        path = tmp_path / "cache.json"
        storage = FileStorage(path)

        # Should not raise
        await storage.save({"a": CacheEntry(value=object(), expires_at=None, last_accessed=0.0)})

        assert not path.exists()

    async def test_write_failure_is_swallowed(self, tmp_path):
        path = tmp_path / "cache.json"
        storage = FileStorage(path)

        with patch("boundcache.storage.file_adapter.tempfile.mkstemp", side_effect=PermissionError("denied")):
            await storage.save({"a": CacheEntry(value=1, expires_at=None, last_accessed=0.0)})

        assert await storage.load() == {}

    async def test_clear_removes_file(self, tmp_path):
        path = tmp_path / "cache.json"
        storage = FileStorage(path)
        await storage.save({"a": CacheEntry(value=1, expires_at=None, last_accessed=0.0)})

        await storage.clear()

        assert not path.exists()
        assert await storage.load() == {}

    async def test_clear_missing_file_is_noop(self, tmp_path):
        storage = FileStorage(tmp_path / "missing.json")
        await storage.clear()

    async def test_cache_round_trip_through_file(self, tmp_path):
        path = tmp_path / "cache.json"
        cache = BoundedCache(max_size=10, storage=FileStorage(path))
        await cache.set("a", 1)
        await cache.set(("composite", 2), {"x": [1, 2]})
        await cache.set("short", "gone", ttl_seconds=-1)

        fresh = BoundedCache(max_size=10, storage=FileStorage(path))

        assert await fresh.get("a") == 1
        assert await fresh.get(("composite", 2)) == {"x": [1, 2]}
        assert await fresh.has("short") is False
        assert await fresh.size() == 2
