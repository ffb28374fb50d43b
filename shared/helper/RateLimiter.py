"""Fixed-interval request gate for the store API."""

import asyncio

from shared.helper.HelperClock import HelperClock


class RateLimiter:
    """Keeps consecutive outbound calls at least ``delay`` seconds apart.

    The gap is measured between call initiations: the caller awaits
    ``acquire()`` right before dispatching, and a slow response counts toward
    the next wait. The first call passes immediately. Concurrent callers are
    let through one at a time.
    """

    def __init__(self, delay: float, clock: HelperClock | None = None) -> None:
        if delay < 0:
            raise ValueError(f"Rate limit delay must not be negative: {delay}")
        self.delay = delay
        self._clock = clock or HelperClock()
        self._last_dispatch: float | None = None
        self._lock = asyncio.Lock()

    def get_wait_time(self) -> float:
        """Return how long the next caller has to wait, in seconds."""
        if self._last_dispatch is None:
            return 0.0
        elapsed = self._clock.now() - self._last_dispatch
        return max(0.0, self.delay - elapsed)

    async def acquire(self) -> None:
        """Wait until the next call may be dispatched and record its start."""
        async with self._lock:
            wait_time = self.get_wait_time()
            if wait_time > 0:
                await self._clock.sleep(wait_time)
            self._last_dispatch = self._clock.now()
