"""crawn.crawler: frontier, relevance filter, rate limiter, fetcher, page processor and the orchestrator."""

from crawn.crawler.models import CrawlError, CrawlStats, CrawlTarget, ErrorKind, FetchedPage, PageResult

__all__ = ["CrawlError", "CrawlStats", "CrawlTarget", "ErrorKind", "FetchedPage", "PageResult"]
