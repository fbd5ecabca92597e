# === FILE: crawn/parser/html_parser.py ===
"""HTML parsing for crawn.

`parse_html()` is a pure function over markup: it knows nothing about the
page URL, the crawl scope or the output format. It returns a
:class:`ParsedPage` with

* title: text of the document ``<title>``, ``None`` if absent or blank.
* links: raw ``href`` values of ``<a>`` tags, in document order, as written.
* text: visible text of ``<body>`` (whole document if there is no body),
  one text node per line, with ``<script>``, ``<style>`` and friends removed.

Resolving and scoping links is the page processor's job.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__: Sequence[str] = ("ParsedPage", "parse_html")

_INVISIBLE_TAGS = ("script", "style", "noscript", "template", "head")


@dataclass(slots=True)
class ParsedPage:
    """Lightweight representation of an HTML page."""

    title: Optional[str] = None
    links: list[str] = field(default_factory=list)
    text: str = ""

    @classmethod
    def empty(cls) -> ParsedPage:
        return cls()


def parse_html(html: str) -> ParsedPage:
    """Extract title, raw link targets and visible text from *html*."""
    soup = BeautifulSoup(html, "html.parser")

    title_tag = soup.find("title")
    title = title_tag.get_text(strip=True) if title_tag else ""

    links: list[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if isinstance(href, str) and href.strip():
            links.append(href.strip())

    root = soup.body or soup
    for element in root(_INVISIBLE_TAGS):
        element.decompose()
    text = "\n".join(root.stripped_strings)

    return ParsedPage(title=title or None, links=links, text=text)
