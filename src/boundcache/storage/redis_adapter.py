from __future__ import annotations

import logging
import typing as t

from redis.asyncio import Redis
from redis.exceptions import RedisError

from ..models import Snapshot
from ..errors import StorageError
from ..utils.resilience import CircuitBreaker, CircuitBreakerConfig, with_retries
from .base import StorageAdapter
from .serialization import Decoder, decode_snapshot, encode_snapshot

_logger = logging.getLogger(__name__)

T = t.TypeVar("T")

# Worth another attempt; anything else (e.g. an undecodable payload) fails at once
_TRANSIENT_ERRORS = (RedisError, OSError)


class RedisStorage(StorageAdapter):
    """Redis-backed storage adapter.

    - The whole snapshot is one JSON string stored at `key`
    - `save` replaces it, `clear` deletes it
    - Calls run through a circuit breaker with retries; once every attempt
      has failed the error is logged and the call degrades to empty/no-op
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        *,
        key: str = "boundcache:data",
        client: t.Optional[t.Any] = None,
        circuit_breaker: t.Optional[CircuitBreaker] = None,
        retry_attempts: int = 3,
        retry_backoff_ms: t.Optional[t.List[int]] = None,
        key_decoder: t.Optional[Decoder] = None,
        value_decoder: t.Optional[Decoder] = None,
    ) -> None:
        self._url = url
        self._key = key
        self._redis = client if client is not None else Redis.from_url(url, decode_responses=True)
        self._breaker = circuit_breaker or CircuitBreaker(CircuitBreakerConfig())
        self._retry_attempts = retry_attempts
        self._retry_backoff_ms = retry_backoff_ms or [100, 500, 2000]
        self._key_decoder = key_decoder
        self._value_decoder = value_decoder

    @property
    def key(self) -> str:
        return self._key

    async def _call(self, op: t.Callable[[], t.Awaitable[T]]) -> T:
        return await self._breaker.run(
            lambda: with_retries(op, self._retry_attempts, self._retry_backoff_ms, retry_on=_TRANSIENT_ERRORS)
        )

    async def load(self) -> Snapshot:
        try:
            raw = await self._call(lambda: self._redis.get(self._key))
        except (RedisError, OSError, StorageError, UnicodeDecodeError) as exc:
            _logger.warning("Redis load failed for %s: %s", self._key, exc)
            return {}
        return decode_snapshot(raw, key_decoder=self._key_decoder, value_decoder=self._value_decoder)

    async def save(self, data: Snapshot) -> None:
        try:
            payload = encode_snapshot(data)
        except (TypeError, ValueError) as exc:
            _logger.warning("Cache snapshot is not JSON serialisable: %s", exc)
            return
        try:
            await self._call(lambda: self._redis.set(self._key, payload))
        except (RedisError, OSError, StorageError) as exc:
            _logger.warning("Redis save failed for %s: %s", self._key, exc)

    async def clear(self) -> None:
        try:
            await self._call(lambda: self._redis.delete(self._key))
        except (RedisError, OSError, StorageError) as exc:
            _logger.warning("Redis clear failed for %s: %s", self._key, exc)

    async def is_healthy(self) -> bool:
        try:
            pong = await self._redis.ping()
            return bool(pong)
        except (RedisError, OSError):
            return False

    async def close(self) -> None:
        try:
            await self._redis.aclose()
        except (RedisError, OSError) as exc:
            _logger.debug("Error closing redis client: %s", exc)
