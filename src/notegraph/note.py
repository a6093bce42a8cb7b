"""Core Note dataclass and name helpers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any


def normalize_name(name: str) -> str:
    """Collapse whitespace runs to one space and strip the ends."""
    return " ".join(name.split())


def link_key(name: str) -> str:
    """Return the form of *name* used in ``>note`` query tokens.

    Spaces are written as ``-`` in link tokens, so ``Map One`` and
    ``Map-One`` share the key ``Map-One``.
    """
    return normalize_name(name).replace(" ", "-")


@dataclass(frozen=True)
class Note:
    """Metadata of a single markdown note in the vault."""

    name: str
    path: Path | None = None
    word_count: int = 0
    char_count: int = 0
    tags: frozenset[str] = field(default_factory=frozenset)
    #: Raw link targets in document order; duplicates are kept
    links: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", normalize_name(self.name))
        object.__setattr__(self, "tags", frozenset(self.tags))
        object.__setattr__(self, "links", tuple(normalize_name(link) for link in self.links))

    def renamed(self, name: str) -> "Note":
        """Return a copy of this note under a new *name*."""
        return replace(self, name=name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": str(self.path) if self.path is not None else None,
            "word_count": self.word_count,
            "char_count": self.char_count,
            "tags": sorted(self.tags),
            "links": list(self.links),
        }
