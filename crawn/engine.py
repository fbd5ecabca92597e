# File: crawn/engine.py
"""crawn.engine: точка сборки краулера; открывает NDJSON-вывод, запускает AsyncCrawler и возвращает статистику."""

from __future__ import annotations

import asyncio
from typing import Optional

from crawn.config import CrawlConfig
from crawn.crawler.crawler import AsyncCrawler
from crawn.crawler.models import CrawlStats
from crawn.errors import CrawlTimeoutError
from crawn.logger import logger
from crawn.report.ndjson_report import NdjsonWriter

__all__ = ["start_crawl"]


async def start_crawl(config: CrawlConfig, crawl_timeout: Optional[float] = None) -> CrawlStats:
    """Run one crawl described by *config*, writing every PageResult to ``config.output``.

    Fatal errors (output not writable, deadline exceeded) propagate to the caller;
    per-page failures are logged by the crawler and never raised.
    """
    async with NdjsonWriter(config.output) as sink:
        async with AsyncCrawler(config, sink) as crawler:
            try:
                if crawl_timeout:
                    return await asyncio.wait_for(crawler.crawl(), timeout=crawl_timeout)
                return await crawler.crawl()
            except asyncio.TimeoutError as exc:
                logger.debug("Crawl deadline hit after %d pages", sink.lines_written)
                raise CrawlTimeoutError(f"Crawl did not finish within {crawl_timeout} seconds") from exc
