# === FILE: crawn/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import enum
import time
from typing import List, Optional, Protocol
from urllib.parse import urlparse

from aiohttp import ClientSession, ClientTimeout

from crawn.config import CrawlConfig
from crawn.crawler.fetcher import Fetcher
from crawn.crawler.frontier import Frontier
from crawn.crawler.keywords import extract_keywords, is_relevant
from crawn.crawler.models import CrawlError, CrawlStats, CrawlTarget, ErrorKind, PageResult
from crawn.crawler.processor import PageProcessor
from crawn.crawler.rate_limiter import RateLimiter
from crawn.errors import InvalidSeedError
from crawn.logger import logger
from crawn.utils import is_http_url, normalize_url

__all__ = ("AsyncCrawler", "CrawlState", "ResultSink")


class ResultSink(Protocol):
    async def write(self, result: PageResult) -> None: ...


class CrawlState(enum.Enum):
    RUNNING = "running"
    DRAINING = "draining"
    DONE = "done"


class AsyncCrawler:
    """Асинхронный BFS-краулер: frontier, фильтр по ключевым словам, общий rate-limit."""

    def __init__(self, config: CrawlConfig, sink: ResultSink) -> None:
        self.config = config
        self.sink = sink
        self.seed = normalize_url(config.seed)
        if not is_http_url(self.seed):
            raise InvalidSeedError(f"Seed URL must be an absolute http(s) URL: {config.seed}")
        self.base_keywords = extract_keywords(urlparse(self.seed).path)
        self.frontier = Frontier(self.seed, max_depth=config.max_depth)
        self.rate_limiter = RateLimiter(config.rate_interval, config.rate_jitter)
        self.processor = PageProcessor(
            self.seed,
            include_text=config.include_text,
            include_content=config.include_content,
        )
        self.stats = CrawlStats()
        self.state: Optional[CrawlState] = None
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None

    async def __aenter__(self) -> AsyncCrawler:
        timeout = ClientTimeout(total=self.config.timeout)
        self.session = ClientSession(
            timeout=timeout,
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
        )
        self.fetcher = Fetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> CrawlStats:
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        logger.info("Crawl started: %s (max depth %d, %d workers)", self.seed, self.config.max_depth, self.config.concurrency)
        logger.debug("Base keywords: %s", sorted(self.base_keywords))
        start = time.monotonic()
        self.state = CrawlState.RUNNING
        await self.frontier.push(CrawlTarget(self.seed, 0))

        workers = [asyncio.create_task(self._worker(i)) for i in range(self.config.concurrency)]
        try:
            await asyncio.gather(*workers)
        except BaseException:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)
            raise

        self.state = CrawlState.DRAINING
        await self.frontier.close()
        if self.processor.parse_failures:
            self.stats.errors[ErrorKind.PARSE] = self.processor.parse_failures
        if self.processor.invalid_links:
            self.stats.errors[ErrorKind.INVALID_LINK] = self.processor.invalid_links
        self.stats.duration = time.monotonic() - start
        self.state = CrawlState.DONE
        logger.info("Crawl finished: %s", self.stats.summary())
        return self.stats

    async def _worker(self, worker_id: int) -> None:
        while True:
            batch: List[CrawlTarget] = await self.frontier.pop_ready_batch(self.config.batch_size)
            if not batch:
                logger.debug("Worker %d: frontier exhausted", worker_id)
                return
            pending = len(batch)
            try:
                for target in batch:
                    await self._visit(target)
                    await self.frontier.task_done()
                    pending -= 1
            finally:
                if pending:
                    await self.frontier.task_done(pending)

    async def _visit(self, target: CrawlTarget) -> None:
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        await self.rate_limiter.acquire()
        result = await self.fetcher.fetch(target.url)
        if isinstance(result, CrawlError):
            self._drop(target, result)
            return

        parsed = self.processor.process(result)
        links = self.processor.resolve_links(result.final_url, parsed.links)

        await self.sink.write(self.processor.build_result(target, result, parsed, links))
        self.stats.pages_written += 1
        self.stats.links_discovered += len(links)
        self.stats.max_depth_reached = max(self.stats.max_depth_reached, target.depth)

        if target.depth >= self.config.max_depth:
            return
        for link in links:
            if not is_relevant(link, self.base_keywords):
                self.stats.links_skipped += 1
                logger.debug("Skipping irrelevant link: %s", link)
                continue
            await self.frontier.push(CrawlTarget(link, target.depth + 1))

    def _drop(self, target: CrawlTarget, error: CrawlError) -> None:
        self.stats.record_error(error)
        logger.warning("Failed to fetch URL: %s | Caused by: %s", target.url, error)
