"""Hierarchical tag matching.

Tags are slash-delimited paths such as ``math/topology``.  A query tag
matches every tag it is a path-prefix of, so ``#math`` selects notes tagged
``math`` as well as ``math/topology`` but not ``mathematics``.
"""

from __future__ import annotations

from collections.abc import Iterable


def normalize_tag(raw: str) -> str:
    """Strip surrounding whitespace and a single leading ``#``."""
    tag = raw.strip()
    if tag.startswith("#"):
        tag = tag[1:]
    return tag


def tag_matches(tag: str, query: str) -> bool:
    """Return ``True`` when *query* equals *tag* or is a ``/``-prefix of it."""
    return tag == query or tag.startswith(query + "/")


def tag_prefixes(tag: str) -> list[str]:
    """Return every ``/``-boundary prefix of *tag*, ending with *tag* itself.

    >>> tag_prefixes("a/b/c")
    ['a', 'a/b', 'a/b/c']
    """
    prefixes = [tag[:i] for i, ch in enumerate(tag) if ch == "/"]
    prefixes.append(tag)
    return prefixes


def has_tag(tags: Iterable[str], query: str) -> bool:
    """Return ``True`` if any of *tags* matches *query*."""
    return any(tag_matches(tag, query) for tag in tags)
