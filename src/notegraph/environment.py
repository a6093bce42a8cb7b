"""Environment: an ordered, duplicate-free selection of notes."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from notegraph.graph import LinkGraph


class Environment:
    """Ordered set of note names, optionally carrying a match score per note.

    The *global* environment holds every note of a graph; a *local*
    environment is the result of evaluating a filter query.
    """

    def __init__(self, names: Iterable[str] = (), scores: Mapping[str, int] | None = None) -> None:
        self._names: tuple[str, ...] = tuple(dict.fromkeys(names))
        self._members: frozenset[str] = frozenset(self._names)
        self._scores: dict[str, int] = {name: (scores or {}).get(name, 0) for name in self._names}

    @classmethod
    def of(cls, graph: "LinkGraph") -> "Environment":
        """The global environment of *graph*, in name order."""
        return cls(graph)

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    def score(self, name: str) -> int:
        """Match score of *name* (``0`` when it was not ranked)."""
        return self._scores[name]

    def issubset(self, other: "Environment") -> bool:
        return self._members <= other._members

    def __contains__(self, name: object) -> bool:
        return name in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Environment):
            return NotImplemented
        return self._names == other._names and self._scores == other._scores

    def __repr__(self) -> str:
        return f"Environment({list(self._names)!r})"
