# crawn/crawler/fetcher.py
"""
Fetcher module: one HTTP GET per call, outcome classified into a FetchResult.
"""
from __future__ import annotations

import asyncio
from typing import FrozenSet

from aiohttp import ClientError, ClientSession

from crawn.config import CrawlConfig
from crawn.crawler.models import CrawlError, FetchedPage, FetchResult
from crawn.logger import logger

HTML_TYPES: FrozenSet[str] = frozenset(("text/html", "application/xhtml+xml"))


class Fetcher:
    """Performs single GET requests through a shared session; no retries, no cache."""

    def __init__(self, session: ClientSession, config: CrawlConfig) -> None:
        self.session = session
        self.config = config

    async def fetch(self, url: str) -> FetchResult:
        """
        Fetch *url* once.

        Returns FetchedPage for any 2xx answer (with empty ``html`` when the
        body is not HTML), CrawlError(HTTP) for other statuses and
        CrawlError(NETWORK) for DNS, connection and timeout failures.
        """
        logger.info("Sent request to URL: %s", url)
        try:
            async with self.session.get(url) as resp:
                if not 200 <= resp.status < 300:
                    return CrawlError.http(url, resp.status, resp.reason)

                mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                if mime and mime not in HTML_TYPES:
                    logger.debug("Skipping body of %s (%s)", url, mime)
                    return FetchedPage(
                        url=url,
                        final_url=str(resp.url),
                        status=resp.status,
                        content_type=mime,
                        html="",
                        is_html=False,
                    )

                html = await resp.text(errors="replace")
                return FetchedPage(
                    url=url,
                    final_url=str(resp.url),
                    status=resp.status,
                    content_type=mime or "text/html",
                    html=html,
                )
        except asyncio.TimeoutError as exc:
            return CrawlError.network(url, exc)
        except ClientError as exc:
            return CrawlError.network(url, exc)
