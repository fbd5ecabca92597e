# crawn/crawler/frontier.py
"""
Breadth-first crawl frontier.

Two level queues (current depth and current depth + 1) plus the visited set,
all guarded by one ``asyncio.Condition``. Targets of the next level are only
handed out once the current level is both empty and fully resolved (every
popped target acknowledged with :meth:`Frontier.task_done`), so ``max_depth``
is a true level bound.
"""
from __future__ import annotations

import asyncio
from collections import deque
from typing import Deque, List, Optional, Set

from crawn.crawler.models import CrawlTarget
from crawn.logger import logger
from crawn.utils import extract_host, normalize_url, same_host

__all__ = ("Frontier",)


class Frontier:
    """BFS queue of CrawlTargets with visit-once, depth and domain enforcement."""

    def __init__(self, seed_url: str, max_depth: int = 4) -> None:
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        self.max_depth = max_depth
        self.seed_host: Optional[str] = extract_host(seed_url)
        self._visited: Set[str] = set()
        self._current: Deque[CrawlTarget] = deque()
        self._next: Deque[CrawlTarget] = deque()
        self._depth = 0
        self._in_flight = 0
        self._closed = False
        self._cond = asyncio.Condition()

    # ------------------------------------------------------------------ state

    @property
    def current_depth(self) -> int:
        """Depth of the level currently handed out; never decreases."""
        return self._depth

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._current) + len(self._next)

    def seen(self, url: str) -> bool:
        return normalize_url(url) in self._visited

    def is_exhausted(self) -> bool:
        """No queued targets and nothing in flight that could still push children."""
        return not self._current and not self._next and self._in_flight == 0

    # ------------------------------------------------------------- mutations

    async def push(self, target: CrawlTarget) -> bool:
        """
        Enqueue *target* unless it is a duplicate or out of policy.

        Returns False when the frontier is closed, the depth exceeds
        ``max_depth``, the host differs from the seed host, the URL was seen
        before, or the depth is neither the current nor the next level.
        """
        url = normalize_url(target.url)
        async with self._cond:
            if self._closed:
                return False
            if target.depth > self.max_depth:
                logger.debug("Depth %d beyond limit for %s", target.depth, url)
                return False
            if not same_host(url, self.seed_host):
                logger.debug("Rejected off-domain target: %s", url)
                return False
            if url in self._visited:
                return False

            if target.depth == self._depth:
                queue = self._current
            elif target.depth == self._depth + 1:
                queue = self._next
            else:
                logger.debug("Depth %d is not schedulable at level %d: %s", target.depth, self._depth, url)
                return False

            self._visited.add(url)
            queue.append(CrawlTarget(url=url, depth=target.depth))
            self._cond.notify_all()
            return True

    async def pop_ready_batch(self, max_batch: int = 1) -> List[CrawlTarget]:
        """
        Take up to *max_batch* targets of the current level.

        Waits while the current level is empty but targets are still in
        flight. Returns an empty list once the frontier is exhausted.
        """
        if max_batch < 1:
            raise ValueError("max_batch must be >= 1")
        async with self._cond:
            while True:
                if self._current:
                    count = min(max_batch, len(self._current))
                    batch = [self._current.popleft() for _ in range(count)]
                    self._in_flight += count
                    return batch
                if self._in_flight == 0:
                    if not self._next:
                        self._cond.notify_all()
                        return []
                    self._current, self._next = self._next, self._current
                    self._depth += 1
                    logger.debug("Frontier advanced to depth %d (%d targets)", self._depth, len(self._current))
                    continue
                await self._cond.wait()

    async def task_done(self, count: int = 1) -> None:
        """Acknowledge *count* popped targets as fully processed."""
        async with self._cond:
            if count > self._in_flight:
                raise ValueError("task_done() called more times than targets were popped")
            self._in_flight -= count
            self._cond.notify_all()

    async def close(self) -> None:
        """Stop accepting pushes; queued targets are left as they are."""
        async with self._cond:
            self._closed = True
            self._cond.notify_all()
