#!/usr/bin/env python3

from __future__ import annotations

import asyncio
import json
import time

import click

from boundcache import BoundedCache, FileStorage, NullStorage, RedisStorage


def _now() -> str:
    return time.strftime("%H:%M:%S")


async def _demo(storage, max_size: int, ttl: float) -> None:
    cache = BoundedCache(max_size=max_size, default_ttl_seconds=ttl, storage=storage)

    for i in range(max_size + 1):
        await cache.set(f"item:{i}", {"n": i})
        print(f"[{_now()}] set item:{i} -> keys={await cache.keys()}")

    # Touch the oldest survivor so it outlives the next insert
    survivor = (await cache.keys())[0]
    await cache.get(survivor)
    await cache.set("late", "arrival", ttl_seconds=ttl / 2)
    print(f"[{_now()}] after touching {survivor}: keys={await cache.keys()}")

    await asyncio.sleep(ttl / 2 + 0.05)
    print(f"[{_now()}] late after {ttl / 2:.2f}s: {await cache.get('late')!r}")

    await asyncio.sleep(ttl / 2)
    print(f"[{_now()}] {survivor} after {ttl:.2f}s: {await cache.get(survivor)!r}")
    print(json.dumps(cache.stats.as_dict(), indent=2))

    if isinstance(storage, RedisStorage):
        await storage.close()


@click.command()
@click.option("--file", "file_path", default=None, help="Persist to this JSON file.")
@click.option("--redis", "redis_url", default=None, help="Persist to Redis at this URL.")
@click.option("--max-size", default=3, show_default=True, type=int)
@click.option("--ttl", default=1.0, show_default=True, type=float, help="Default TTL in seconds.")
def main(file_path: str | None, redis_url: str | None, max_size: int, ttl: float) -> None:
    """Walk through LRU eviction and TTL expiry on a small cache."""
    if redis_url:
        storage = RedisStorage(redis_url, key="boundcache:demo")
    elif file_path:
        storage = FileStorage(file_path)
    else:
        storage = NullStorage()
    asyncio.run(_demo(storage, max_size, ttl))


if __name__ == "__main__":
    main()
