# crawn/crawler/keywords.py
"""
URL-path relevance filter.

A link is judged from its path alone, before anything is fetched: the path is
split into keyword tokens and compared with the tokens of the seed URL.
Paths that yield no keywords at all (``/``, ``/a/12/``) cannot be judged and
are always considered relevant.
"""
from __future__ import annotations

import re
from typing import AbstractSet, FrozenSet, Sequence
from urllib.parse import unquote, urlparse

__all__: Sequence[str] = ("STOP_WORDS", "MIN_KEYWORD_LEN", "extract_keywords", "is_relevant")

MIN_KEYWORD_LEN = 3

STOP_WORDS: FrozenSet[str] = frozenset(
    (
        "how", "to", "the", "and", "for", "with", "from", "about", "by",
        "are", "but", "not", "you", "your", "our", "its", "this", "that",
        "into", "what", "why", "when", "where", "who", "was", "has", "have",
    )
)

_SEPARATORS = re.compile(r"[/\-_]")
_NON_ALNUM = re.compile(r"[^0-9a-z]")


def extract_keywords(path: str) -> FrozenSet[str]:
    """Split a URL path on ``/``, ``-`` and ``_`` and keep the meaningful tokens.

    >>> sorted(extract_keywords("/rust-tutorials/async"))
    ['async', 'rust', 'tutorials']
    >>> extract_keywords("/a/12/to")
    frozenset()
    """
    keywords = set()
    for raw in _SEPARATORS.split(unquote(path).lower()):
        token = _NON_ALNUM.sub("", raw)
        if len(token) < MIN_KEYWORD_LEN or token.isdigit() or token in STOP_WORDS:
            continue
        keywords.add(token)
    return frozenset(keywords)


def is_relevant(candidate_url: str, base_keywords: AbstractSet[str]) -> bool:
    """True when the candidate shares a keyword with the seed, or has no keywords."""
    candidate = extract_keywords(urlparse(candidate_url).path)
    if not candidate:
        return True
    return not candidate.isdisjoint(base_keywords)
