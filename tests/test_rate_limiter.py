"""Tests for the fixed-interval request gate."""

import asyncio

import pytest

from shared.helper.HelperClock import HelperClock
from shared.helper.RateLimiter import RateLimiter
from conftest import FakeClock


class TestRateLimiter:

    @pytest.mark.asyncio
    async def test_first_call_passes_immediately(self, clock):
        limiter = RateLimiter(delay=1.0, clock=clock)
        await limiter.acquire()
        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_back_to_back_calls_wait_full_delay(self, clock):
        limiter = RateLimiter(delay=1.0, clock=clock)
        await limiter.acquire()
        await limiter.acquire()
        assert clock.sleeps == [1.0]

    @pytest.mark.asyncio
    async def test_elapsed_time_counts_toward_the_delay(self, clock):
        limiter = RateLimiter(delay=1.0, clock=clock)
        await limiter.acquire()
        clock.advance(0.25)
        await limiter.acquire()
        assert clock.sleeps == [pytest.approx(0.75)]

    @pytest.mark.asyncio
    async def test_no_wait_after_slow_call(self, clock):
        limiter = RateLimiter(delay=1.0, clock=clock)
        await limiter.acquire()
        clock.advance(3.0)
        assert limiter.get_wait_time() == 0.0
        await limiter.acquire()
        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_dispatches_are_spaced_by_at_least_the_delay(self):
        clock = FakeClock(start=0.0)
        limiter = RateLimiter(delay=1.0, clock=clock)
        dispatches = []
        for latency in [0.0, 0.3, 1.7, 0.0, 0.9, 2.5]:
            await limiter.acquire()
            dispatches.append(clock.now())
            clock.advance(latency)

        gaps = [b - a for a, b in zip(dispatches, dispatches[1:])]
        assert all(gap >= 1.0 - 1e-9 for gap in gaps)

    @pytest.mark.asyncio
    async def test_zero_delay_never_sleeps(self, clock):
        limiter = RateLimiter(delay=0.0, clock=clock)
        for _ in range(3):
            await limiter.acquire()
        assert clock.sleeps == []

    def test_negative_delay_is_rejected(self):
        with pytest.raises(ValueError):
            RateLimiter(delay=-1.0)

    @pytest.mark.asyncio
    async def test_concurrent_callers_are_spaced(self):
        limiter = RateLimiter(delay=0.1)
        clock = HelperClock()
        dispatches = []

        async def call():
            await limiter.acquire()
            dispatches.append(clock.now())

        await limiter.acquire()
        await asyncio.gather(call(), call())

        assert len(dispatches) == 2
        # asyncio timers may fire up to a clock tick early
        assert dispatches[1] - dispatches[0] >= 0.09
