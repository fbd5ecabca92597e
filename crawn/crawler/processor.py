# crawn/crawler/processor.py
"""
Page processing: raw HTML → title/text/links, and raw hrefs → in-scope crawl candidates.
"""
from __future__ import annotations

from typing import Iterable, List
from urllib.parse import urljoin, urlparse

from crawn.crawler.models import CrawlTarget, FetchedPage, PageResult
from crawn.logger import logger
from crawn.parser.html_parser import ParsedPage, parse_html
from crawn.utils import HTTP_SCHEMES, extract_host, normalize_url, same_host


class PageProcessor:
    """Turns fetched pages into PageResults and same-domain link lists."""

    def __init__(self, seed_url: str, include_text: bool = False, include_content: bool = False) -> None:
        self.seed_host = extract_host(seed_url)
        self.include_text = include_text
        self.include_content = include_content
        self.parse_failures = 0
        self.invalid_links = 0

    def process(self, page: FetchedPage) -> ParsedPage:
        """Parse *page*; non-HTML bodies and unparseable markup give an empty page."""
        if not page.is_html or not page.html:
            return ParsedPage.empty()
        try:
            return parse_html(page.html)
        except Exception as exc:
            self.parse_failures += 1
            logger.warning("Failed to parse HTML from URL: %s | Caused by: %s", page.url, exc)
            return ParsedPage.empty()

    def resolve_links(self, base_url: str, raw_links: Iterable[str]) -> List[str]:
        """
        Resolve *raw_links* against *base_url* and keep same-host http(s) URLs.

        The result is normalized, de-duplicated and keeps document order.
        """
        resolved: dict[str, None] = {}
        for href in raw_links:
            try:
                absolute = urljoin(base_url, href)
                parsed = urlparse(absolute)
            except ValueError as exc:
                self.invalid_links += 1
                logger.warning("Invalid link %r on %s | Caused by: %s", href, base_url, exc)
                continue
            if parsed.scheme.lower() not in HTTP_SCHEMES:
                continue
            if not same_host(absolute, self.seed_host):
                logger.debug("Dropping off-domain link: %s", absolute)
                continue
            resolved.setdefault(normalize_url(absolute), None)
        return list(resolved)

    def build_result(
        self, target: CrawlTarget, page: FetchedPage, parsed: ParsedPage, links: List[str]
    ) -> PageResult:
        return PageResult(
            url=target.url,
            title=parsed.title or None,
            depth=target.depth,
            text=parsed.text if self.include_text else None,
            content=page.html if self.include_content else None,
            link_count=len(links),
        )
