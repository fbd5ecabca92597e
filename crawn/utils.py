# File: crawn/utils.py
"""crawn.utils: URL helpers shared by the frontier, the page processor and the config layer."""

from __future__ import annotations

from typing import Optional, Sequence
from urllib.parse import urldefrag, urlparse, urlunparse

from crawn.logger import logger

__all__: Sequence[str] = (
    "HTTP_SCHEMES",
    "normalize_url",
    "is_http_url",
    "extract_host",
    "same_host",
)

HTTP_SCHEMES = frozenset(("http", "https"))


def normalize_url(url: str) -> str:
    """Canonical form used for the visited set: no fragment, lower-case scheme/host, non-empty path."""
    url, _ = urldefrag(url)
    parsed = urlparse(url)
    scheme = parsed.scheme.lower()
    netloc = parsed.netloc.lower()
    path = parsed.path or "/"
    normalized = urlunparse((scheme, netloc, path, parsed.params, parsed.query, ""))
    logger.debug("Normalized URL: %s -> %s", url, normalized)
    return normalized


def is_http_url(url: str) -> bool:
    """True for absolute http(s) URLs with a host."""
    parsed = urlparse(url)
    return parsed.scheme.lower() in HTTP_SCHEMES and bool(parsed.hostname)


def extract_host(url: str) -> Optional[str]:
    """Lower-cased host name of *url*, without port or credentials."""
    return urlparse(url).hostname


def same_host(url: str, host: Optional[str]) -> bool:
    return host is not None and extract_host(url) == host
