# File: crawn/errors.py
"""crawn.errors: fatal, process-level failures that abort a crawl.

Per-page failures are not exceptions; they travel as
:class:`crawn.crawler.models.CrawlError` values and never leave a worker.
"""

from __future__ import annotations

from typing import List, Optional

__all__ = [
    "FatalCrawlError",
    "InvalidSeedError",
    "OutputError",
    "CrawlTimeoutError",
    "format_error_chain",
]


class FatalCrawlError(Exception):
    """Base class for errors that stop the whole crawl."""


class InvalidSeedError(FatalCrawlError):
    """The seed URL cannot define a crawl (no host, unsupported scheme)."""


class OutputError(FatalCrawlError):
    """The NDJSON destination cannot be opened or written."""


class CrawlTimeoutError(FatalCrawlError):
    """The whole-crawl deadline expired before the frontier was exhausted."""


def _causes(exc: BaseException) -> List[BaseException]:
    chain: List[BaseException] = []
    seen = {id(exc)}
    current: Optional[BaseException] = exc.__cause__ or exc.__context__
    while current is not None and id(current) not in seen:
        chain.append(current)
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return chain


def _one_line(exc: BaseException) -> str:
    return " ".join(str(exc).split()) or type(exc).__name__


def format_error_chain(exc: BaseException) -> str:
    """Render *exc* and its causes on a single line, ``Caused by:`` before each cause."""
    parts = [_one_line(exc)]
    for cause in _causes(exc):
        parts.append(f"Caused by: {_one_line(cause)}")
    return " | ".join(parts)
