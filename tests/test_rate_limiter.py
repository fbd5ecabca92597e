# File: tests/test_rate_limiter.py
import asyncio
import time

import pytest

from crawn.crawler.rate_limiter import RateLimiter

INTERVAL = 0.05
EPS = 1e-9


@pytest.mark.asyncio()
async def test_sequential_permits_are_spaced():
    limiter = RateLimiter(INTERVAL)
    start = time.monotonic()
    permits = [await limiter.acquire() for _ in range(5)]

    for k, permit in enumerate(permits):
        assert permit.sequence == k
        assert permit.granted_at >= start + k * INTERVAL
        assert permit.granted_at >= permit.scheduled_at


@pytest.mark.asyncio()
async def test_concurrent_callers_share_one_gate():
    limiter = RateLimiter(INTERVAL)
    start = time.monotonic()
    permits = await asyncio.gather(*(limiter.acquire() for _ in range(6)))

    grants = sorted(p.granted_at for p in permits)
    for k, granted in enumerate(grants):
        assert granted >= start + k * INTERVAL
    assert sorted(p.sequence for p in permits) == list(range(6))
    assert limiter.issued == 6


@pytest.mark.asyncio()
async def test_wait_is_bounded():
    limiter = RateLimiter(INTERVAL)
    await asyncio.wait_for(asyncio.gather(*(limiter.acquire() for _ in range(4))), timeout=4 * INTERVAL + 1.0)


@pytest.mark.asyncio()
async def test_idle_gap_does_not_bank_permits():
    limiter = RateLimiter(INTERVAL)
    await limiter.acquire()
    await asyncio.sleep(INTERVAL * 3)
    first = await limiter.acquire()
    second = await limiter.acquire()
    assert second.granted_at - first.scheduled_at >= INTERVAL - EPS


@pytest.mark.asyncio()
async def test_jitter_only_lengthens_spacing():
    limiter = RateLimiter(INTERVAL, jitter=0.02)
    permits = [await limiter.acquire() for _ in range(3)]
    for earlier, later in zip(permits, permits[1:]):
        assert later.scheduled_at - earlier.scheduled_at >= INTERVAL - EPS


@pytest.mark.parametrize("interval,jitter", [(0, 0.0), (-1, 0.0), (0.1, -0.5)])
def test_invalid_settings(interval, jitter):
    with pytest.raises(ValueError):
        RateLimiter(interval, jitter)
