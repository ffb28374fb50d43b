"""Time source shared by the rate limiter and the batch poller."""

import asyncio
import time


class HelperClock:
    """Monotonic clock with a cooperative sleep.

    Components take a clock instead of calling ``time`` and ``asyncio.sleep``
    directly, so tests can drive them with a fake one.
    """

    def now(self) -> float:
        """Return the current monotonic time in seconds."""
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        """Suspend the current task for ``seconds``."""
        if seconds > 0:
            await asyncio.sleep(seconds)
