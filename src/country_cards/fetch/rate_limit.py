# ABOUTME: Token bucket rate limiter shared by every outbound request
# ABOUTME: Callers await acquire() and are delayed, never rejected, until a token is available

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import Protocol

from country_cards.utils.logging import get_logger

logger = get_logger(__name__)


class RateLimiter(Protocol):
    """Anything a fetcher can wait on before issuing a request."""

    async def acquire(self) -> None: ...


class TokenBucket:
    """Token bucket holding at most ``capacity`` tokens, refilled at one token per ``interval`` seconds.

    A single instance is meant to be shared by all fetch paths so the quota is
    process-wide rather than per host. ``clock`` and ``sleep`` can be swapped
    for fakes in tests.
    """

    def __init__(
        self,
        capacity: int = 2,
        interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        if interval <= 0:
            raise ValueError("interval must be positive")

        self.capacity = capacity
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._tokens = float(capacity)
        self._updated = clock()
        self._lock = asyncio.Lock()

    @property
    def tokens(self) -> float:
        """Tokens available right now."""
        self._refill()
        return self._tokens

    def _refill(self) -> None:
        now = self._clock()
        elapsed = max(0.0, now - self._updated)
        self._tokens = min(float(self.capacity), self._tokens + elapsed / self.interval)
        self._updated = now

    async def acquire(self) -> None:
        """Take one token, waiting for the bucket to refill if it is empty."""
        async with self._lock:
            while True:
                self._refill()
                if self._tokens >= 1.0:
                    self._tokens -= 1.0
                    return

                wait = (1.0 - self._tokens) * self.interval
                logger.debug("Rate limiting", sleep_time=round(wait, 3))
                await self._sleep(wait)


class UnlimitedRateLimiter:
    """Limiter that never waits."""

    async def acquire(self) -> None:
        return None
