# crawn/crawler/rate_limiter.py
"""
Shared request gate for all crawl workers.

Every worker draws permits from one clock: the n-th permit is scheduled no
earlier than ``first_grant + n * interval``. Slots are handed out under an
``asyncio.Lock`` (FIFO), so a waiting worker is delayed by at most the
permits queued ahead of it.
"""
from __future__ import annotations

import asyncio
import random
import time
from dataclasses import dataclass
from typing import Optional

from crawn.logger import logger

__all__ = ("Permit", "RateLimiter")


@dataclass(frozen=True, slots=True)
class Permit:
    sequence: int
    scheduled_at: float
    granted_at: float


class RateLimiter:
    """Minimum-interval gate shared by every worker of a crawl."""

    def __init__(self, interval: float, jitter: float = 0.0) -> None:
        if interval <= 0:
            raise ValueError("interval must be > 0")
        if jitter < 0:
            raise ValueError("jitter must be >= 0")
        self.interval = interval
        self.jitter = jitter
        self._lock = asyncio.Lock()
        self._next_slot: Optional[float] = None
        self._issued = 0

    @property
    def issued(self) -> int:
        return self._issued

    async def acquire(self) -> Permit:
        """Wait until the next slot of the shared clock and return its permit."""
        async with self._lock:
            now = time.monotonic()
            slot = now if self._next_slot is None else max(now, self._next_slot)
            spacing = self.interval + (random.uniform(0, self.jitter) if self.jitter else 0.0)
            self._next_slot = slot + spacing
            sequence = self._issued
            self._issued += 1

        # the event loop may wake a timer a hair early; never grant before the slot
        while True:
            wait = slot - time.monotonic()
            if wait <= 0:
                break
            await asyncio.sleep(wait)

        granted = time.monotonic()
        logger.debug("Rate permit #%d granted (%.3f s after schedule)", sequence, granted - slot)
        return Permit(sequence=sequence, scheduled_at=slot, granted_at=granted)
