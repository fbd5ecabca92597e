# crawn/crawler/models.py
"""
Data models for the crawn crawler.
"""
from __future__ import annotations

import enum
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True, slots=True)
class CrawlTarget:
    """A normalized URL waiting to be fetched, with its BFS depth."""

    url: str
    depth: int


@dataclass(frozen=True, slots=True)
class FetchedPage:
    """Successful fetch: raw body plus what the server said about it."""

    url: str
    final_url: str
    status: int
    content_type: str
    html: str
    is_html: bool = True


class ErrorKind(str, enum.Enum):
    HTTP = "http"
    NETWORK = "network"
    PARSE = "parse"
    INVALID_LINK = "invalid_link"


@dataclass(frozen=True, slots=True)
class CrawlError:
    """Classified per-target failure. Logged and counted, never written to the output."""

    kind: ErrorKind
    url: str
    status: Optional[int] = None
    reason: Optional[str] = None

    @classmethod
    def http(cls, url: str, status: int, reason: Optional[str] = None) -> CrawlError:
        return cls(ErrorKind.HTTP, url, status=status, reason=reason)

    @classmethod
    def network(cls, url: str, cause: BaseException) -> CrawlError:
        return cls(ErrorKind.NETWORK, url, reason=str(cause) or type(cause).__name__)

    def __str__(self) -> str:
        if self.kind is ErrorKind.HTTP:
            suffix = f" {self.reason}" if self.reason else ""
            return f"HTTP {self.status}{suffix}"
        return f"{self.kind.value.replace('_', ' ')} error: {self.reason}"


FetchResult = Union[FetchedPage, CrawlError]


@dataclass(frozen=True, slots=True)
class PageResult:
    """One output record. ``text``/``content`` stay ``None`` unless their mode is on."""

    url: str
    title: Optional[str]
    depth: int
    text: Optional[str] = None
    content: Optional[str] = None
    link_count: int = 0

    def to_record(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {"url": self.url, "title": self.title, "depth": self.depth}
        if self.text is not None:
            record["text"] = self.text
        if self.content is not None:
            record["content"] = self.content
        return record


@dataclass(slots=True)
class CrawlStats:
    """Summary of one crawl run."""

    pages_written: int = 0
    links_discovered: int = 0
    links_skipped: int = 0
    max_depth_reached: int = 0
    duration: float = 0.0
    errors: Counter = field(default_factory=Counter)

    @property
    def error_count(self) -> int:
        return sum(self.errors.values())

    def record_error(self, error: CrawlError) -> None:
        self.errors[error.kind] += 1

    def summary(self) -> str:
        rate = self.pages_written / self.duration if self.duration else 0.0
        parts = [
            f"{self.pages_written} pages in {self.duration:.2f} s ({rate:.2f} pages/s)",
            f"depth {self.max_depth_reached}",
            f"{self.links_skipped} links skipped",
        ]
        if self.errors:
            parts.append(
                "errors: " + ", ".join(f"{kind.value}={count}" for kind, count in sorted(self.errors.items()))
            )
        return ", ".join(parts)
