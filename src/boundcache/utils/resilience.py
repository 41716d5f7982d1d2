from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, List, Optional, Tuple, Type, TypeVar

from boundcache.errors import CircuitOpenError

T = TypeVar("T")

_logger = logging.getLogger(__name__)


@dataclass
class CircuitBreakerConfig:
    enabled: bool = True
    failure_threshold: int = 5
    reset_timeout_seconds: float = 30.0


class CircuitState:
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreaker:
    def __init__(
        self,
        config: Optional[CircuitBreakerConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config or CircuitBreakerConfig()
        self._clock = clock
        self._state = CircuitState.CLOSED
        self._failures = 0
        self._opened_at = 0.0

    @property
    def state(self) -> str:
        return self._state

    def _can_attempt(self) -> bool:
        if self._state == CircuitState.OPEN:
            if (self._clock() - self._opened_at) >= self._config.reset_timeout_seconds:
                self._state = CircuitState.HALF_OPEN
                return True
            return False
        return True

    def _on_success(self) -> None:
        self._state = CircuitState.CLOSED
        self._failures = 0

    def _on_failure(self) -> None:
        self._failures += 1
        if not self._config.enabled:
            return
        if self._state == CircuitState.HALF_OPEN or self._failures >= self._config.failure_threshold:
            if self._state != CircuitState.OPEN:
                _logger.warning("Circuit opened after %d consecutive failures", self._failures)
            self._state = CircuitState.OPEN
            self._opened_at = self._clock()

    async def run(self, fn: Callable[[], Awaitable[T]]) -> T:
        if not self._can_attempt():
            raise CircuitOpenError("circuit_open")
        try:
            result = await fn()
        except Exception:
            self._on_failure()
            raise
        else:
            self._on_success()
            return result


async def with_retries(
    coro_factory: Callable[[], Awaitable[T]],
    attempts: int = 3,
    backoff_ms: Optional[Iterable[int]] = None,
    *,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
) -> T:
    """Await `coro_factory()` up to `attempts` times.

    Only exceptions matching `retry_on` are retried. Retries wait successive
    `backoff_ms` values, repeating the last one once exhausted. The final
    error is re-raised unchanged.
    """
    delays: List[int] = list(backoff_ms or [100, 500, 2000])
    total = max(1, attempts)
    attempt = 1
    while True:
        try:
            return await coro_factory()
        except retry_on as exc:
            if attempt >= total:
                raise
            delay_ms = delays[min(attempt - 1, len(delays) - 1)]
            _logger.debug("Attempt %d/%d failed (%s); retrying in %dms", attempt, total, exc, delay_ms)
            await asyncio.sleep(delay_ms / 1000.0)
            attempt += 1
