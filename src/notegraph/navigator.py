"""Graph navigator: neighbourhood lists and back-navigation for one note."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING

from notegraph.errors import LinkTargetMissingError, NotLinkedError
from notegraph.note import normalize_name

if TYPE_CHECKING:
    from notegraph.graph import LinkGraph

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 50


@dataclass(frozen=True)
class Neighborhood:
    """The four link lists shown for a focused note."""

    name: str
    links: list[str]
    backlinks: list[str]
    links_level2: list[str]
    backlinks_level2: list[str]


def neighborhood_of(graph: "LinkGraph", name: str) -> Neighborhood:
    """Collect depth-1 and depth-2 neighbours of *name* in both directions."""
    return Neighborhood(
        name=graph.get(name).name,
        links=graph.neighborhood(name, "forward", 1),
        backlinks=graph.neighborhood(name, "backward", 1),
        links_level2=graph.neighborhood(name, "forward", 2),
        backlinks_level2=graph.neighborhood(name, "backward", 2),
    )


class Navigator:
    """Tracks a focused note and the notes visited before it."""

    def __init__(self, graph: "LinkGraph", history_limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        self.graph = graph
        self._focus: str | None = None
        self._history: deque[str] = deque(maxlen=history_limit)

    @property
    def focus(self) -> str | None:
        return self._focus

    @property
    def history(self) -> tuple[str, ...]:
        """Previously focused notes, oldest first."""
        return tuple(self._history)

    def select(self, name: str) -> Neighborhood:
        """Focus *name* directly, leaving the history untouched."""
        note = self.graph.get(name)
        self._focus = note.name
        return neighborhood_of(self.graph, note.name)

    def neighborhood(self) -> Neighborhood:
        if self._focus is None:
            raise RuntimeError("No note selected - call select() first.")
        return neighborhood_of(self.graph, self._focus)

    def follow(self, target: str) -> Neighborhood:
        """Move the focus along a link to *target*.

        Raises :class:`LinkTargetMissingError` without moving when no note
        called *target* exists right now, and :class:`NotLinkedError` when
        *target* is neither referenced by the focus nor in one of its four
        neighbourhood lists.
        """
        target = normalize_name(target)
        if target not in self.graph:
            raise LinkTargetMissingError(target, source=self._focus)
        if self._focus in self.graph and target not in self._reachable():
            raise NotLinkedError(target, self._focus)
        if self._focus is not None:
            self._history.append(self._focus)
        self._focus = target
        logger.debug("Followed link to %r (history depth %d)", target, len(self._history))
        return neighborhood_of(self.graph, target)

    def _reachable(self) -> set[str]:
        hood = self.neighborhood()
        reachable = set(self.graph.get(hood.name).links)
        for names in (hood.links, hood.backlinks, hood.links_level2, hood.backlinks_level2):
            reachable.update(names)
        return reachable

    def back(self) -> str | None:
        """Return to the most recent history entry that still exists.

        Entries for notes deleted since they were visited are dropped.
        Returns the new focus, or ``None`` if there is nothing to go back to.
        """
        while self._history:
            previous = self._history.pop()
            if previous in self.graph:
                self._focus = previous
                return previous
            logger.debug("Skipping deleted note %r in history", previous)
        return None

    def clear(self) -> None:
        self._history.clear()
