"""Command line access to a persisted cache."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any, Awaitable, Callable, Optional, TypeVar

import click

from .core.cache import BoundedCache
from .storage import FileStorage, RedisStorage, StorageAdapter

T = TypeVar("T")

_MISSING = object()


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _make_storage(opts: dict) -> StorageAdapter:
    if opts["redis_url"]:
        return RedisStorage(opts["redis_url"], key=opts["key"], retry_attempts=1)
    return FileStorage(opts["file_path"])


def _run(ctx: click.Context, fn: Callable[[BoundedCache], Awaitable[T]]) -> T:
    opts = ctx.obj

    async def _op() -> T:
        storage = _make_storage(opts)
        cache: BoundedCache[Any, Any] = BoundedCache(max_size=opts["max_size"], storage=storage)
        try:
            return await fn(cache)
        finally:
            if isinstance(storage, RedisStorage):
                await storage.close()

    return asyncio.run(_op())


def _emit(value: Any) -> None:
    click.echo(json.dumps(value))


@click.group()
@click.option(
    "--file",
    "file_path",
    default="./cache-data.json",
    show_default=True,
    type=click.Path(dir_okay=False),
    help="JSON file backing the cache.",
)
@click.option("--redis", "redis_url", default=None, help="Redis URL; takes precedence over --file.")
@click.option("--key", default="boundcache:data", show_default=True, help="Redis key holding the snapshot.")
@click.option("--max-size", default=100, show_default=True, type=click.IntRange(min=1), help="Cache capacity.")
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
)
@click.pass_context
def main(
    ctx: click.Context,
    file_path: str,
    redis_url: Optional[str],
    key: str,
    max_size: int,
    log_level: str,
) -> None:
    """Inspect and edit a cache persisted to a file or Redis."""
    logging.basicConfig(level=log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    ctx.obj = {"file_path": file_path, "redis_url": redis_url, "key": key, "max_size": max_size}


@main.command()
@click.argument("key")
@click.pass_context
def get(ctx: click.Context, key: str) -> None:
    """Print the value stored under KEY."""
    value = _run(ctx, lambda cache: cache.get(key, _MISSING))
    if value is _MISSING:
        click.echo(f"not found: {key}", err=True)
        sys.exit(1)
    _emit(value)


@main.command(name="set")
@click.argument("key")
@click.argument("value")
@click.option("--ttl", type=float, default=None, help="Time to live in seconds.")
@click.pass_context
def set_(ctx: click.Context, key: str, value: str, ttl: Optional[float]) -> None:
    """Store VALUE (parsed as JSON when possible) under KEY."""
    _run(ctx, lambda cache: cache.set(key, _parse_value(value), ttl_seconds=ttl))


@main.command()
@click.argument("key")
@click.pass_context
def delete(ctx: click.Context, key: str) -> None:
    """Remove KEY; a missing key is not an error."""
    _run(ctx, lambda cache: cache.delete(key))


@main.command()
@click.argument("key")
@click.pass_context
def has(ctx: click.Context, key: str) -> None:
    """Print whether KEY holds a live entry."""
    _emit(_run(ctx, lambda cache: cache.has(key)))


@main.command()
@click.pass_context
def keys(ctx: click.Context) -> None:
    """Print stored keys, least recently used first."""
    _emit(_run(ctx, lambda cache: cache.keys()))


@main.command()
@click.pass_context
def size(ctx: click.Context) -> None:
    """Print the number of stored entries."""
    _emit(_run(ctx, lambda cache: cache.size()))


@main.command()
@click.pass_context
def clear(ctx: click.Context) -> None:
    """Drop every entry and erase the persisted snapshot."""
    _run(ctx, lambda cache: cache.clear())


if __name__ == "__main__":  # pragma: no cover
    main()
