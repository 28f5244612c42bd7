"""Token-bucket rate limiter shared by every outbound model call."""

import asyncio
import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


class TokenBucketRateLimiter:
    """Async token bucket.

    ``rate`` tokens are added per second up to ``capacity``. ``acquire()``
    takes one token, sleeping until one is available. Waiters are served
    one at a time in arrival order.

    The bucket starts full, so the first ``capacity`` calls go through
    immediately and later calls are spaced ``1 / rate`` seconds apart.
    """

    def __init__(
        self,
        rate: float,
        capacity: int = 1,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], object] = asyncio.sleep,
    ):
        if rate <= 0:
            raise ValueError("rate must be positive")
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._rate = rate
        self._capacity = float(capacity)
        self._tokens = float(capacity)
        self._clock = clock
        self._sleep = sleep
        self._updated_at = clock()
        self._lock = asyncio.Lock()

    @property
    def rate(self) -> float:
        return self._rate

    @property
    def capacity(self) -> int:
        return int(self._capacity)

    def _refill(self) -> None:
        now = self._clock()
        elapsed = max(0.0, now - self._updated_at)
        self._tokens = min(self._capacity, self._tokens + elapsed * self._rate)
        self._updated_at = now

    async def acquire(self) -> float:
        """Take one token. Returns the number of seconds spent waiting."""
        waited = 0.0
        async with self._lock:
            self._refill()
            while self._tokens < 1.0:
                delay = (1.0 - self._tokens) / self._rate
                logger.debug("Rate limit reached — waiting %.2fs", delay)
                await self._sleep(delay)
                waited += delay
                self._refill()
            self._tokens -= 1.0
        return waited
