"""LinkGraph: in-memory directed graph of notes and their resolved links.

The graph is stored in a :class:`networkx.DiGraph` whose nodes are exactly
the indexed note names and whose edges are exactly the resolved links.  A
reverse reference index (``target name -> Counter(source name)``) remembers
every reference, resolved or broken, so that a note appearing under a name
instantly resolves the references already pointing at it, and a note
disappearing instantly breaks them.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Iterator
from typing import Literal

import networkx as nx
import polars as pl

from notegraph.errors import NameCollisionError, NoteNotFoundError
from notegraph.note import Note, normalize_name
from notegraph.tags import has_tag

logger = logging.getLogger(__name__)

Direction = Literal["forward", "backward"]


class LinkGraph:
    """All indexed notes plus their forward and backward link adjacency."""

    def __init__(self, notes: Iterable[Note] = ()) -> None:
        self._notes: dict[str, Note] = {}
        self._graph: nx.DiGraph = nx.DiGraph()
        self._referrers: dict[str, Counter[str]] = {}
        #: Bumped on every successful mutation
        self.version = 0
        for note in notes:
            self.upsert(note)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def upsert(self, note: Note) -> Note:
        """Insert *note*, or replace the note already indexed under its name."""
        name = note.name
        old = self._notes.get(name)
        if old is None:
            self._graph.add_node(name)
            # References that were broken until now resolve to the new note.
            for source in self._referrers.get(name, ()):
                self._graph.add_edge(source, name)
        else:
            self._retract(old)
        self._notes[name] = note
        self._record(note)
        self.version += 1
        logger.debug("Upserted note %r (%d links)", name, len(note.links))
        return note

    def create(self, note: Note) -> Note:
        """Insert a brand-new note; raise :class:`NameCollisionError` if taken."""
        if note.name in self._notes:
            raise NameCollisionError(note.name)
        return self.upsert(note)

    def remove(self, name: str) -> bool:
        """Delete the note called *name* and every edge touching it.

        Returns ``False`` (and changes nothing) when no such note exists, so
        repeated delete notifications are harmless.
        """
        name = normalize_name(name)
        note = self._notes.pop(name, None)
        if note is None:
            logger.debug("Ignoring removal of unknown note %r", name)
            return False
        self._retract(note)
        self._graph.remove_node(name)
        self.version += 1
        logger.debug("Removed note %r", name)
        return True

    def rename(self, old: str, new: str) -> Note:
        """Re-index the note *old* under the name *new*.

        The note keeps its own links.  References elsewhere that name *old*
        become broken, references that name *new* become resolved.
        """
        old = normalize_name(old)
        new = normalize_name(new)
        note = self.get(old)
        if new == old:
            return note
        if new in self._notes:
            raise NameCollisionError(new)
        self.remove(old)
        return self.upsert(note.renamed(new))

    def _record(self, note: Note) -> None:
        for target in note.links:
            self._referrers.setdefault(target, Counter())[note.name] += 1
            if target in self._notes:
                self._graph.add_edge(note.name, target)

    def _retract(self, note: Note) -> None:
        for target in note.links:
            sources = self._referrers[target]
            sources[note.name] -= 1
            if sources[note.name] <= 0:
                del sources[note.name]
            if not sources:
                del self._referrers[target]
        self._graph.remove_edges_from(list(self._graph.out_edges(note.name)))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._notes

    def __len__(self) -> int:
        return len(self._notes)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._notes))

    def get(self, name: str) -> Note:
        try:
            return self._notes[normalize_name(name)]
        except KeyError:
            raise NoteNotFoundError(name) from None

    def notes(self) -> list[Note]:
        """Return every note, ordered by name."""
        return [self._notes[name] for name in sorted(self._notes)]

    @property
    def digraph(self) -> nx.DiGraph:
        """Read-only view of the resolved link graph."""
        return self._graph.copy(as_view=True)

    # ------------------------------------------------------------------
    # Links
    # ------------------------------------------------------------------

    def outlinks(self, name: str) -> set[str]:
        """Names of the notes *name* links to (resolved links only)."""
        return set(self._graph.successors(self.get(name).name))

    def inlinks(self, name: str) -> set[str]:
        """Names of the notes linking to *name*."""
        return set(self._graph.predecessors(self.get(name).name))

    def broken(self, name: str) -> int:
        """Number of references owned by *name* whose target does not exist."""
        return sum(1 for target in self.get(name).links if target not in self._notes)

    def edges(self) -> list[tuple[str, str]]:
        """Return ``(source, target)`` pairs for every resolved link."""
        return sorted(self._graph.edges())

    def neighborhood(self, name: str, direction: Direction, depth: int) -> list[str]:
        """Return the notes reachable from *name* in exactly *depth* steps.

        Depth 2 is the union of the depth-1 neighbours' own neighbours minus
        *name* itself; it may share members with depth 1.
        """
        origin = self.get(name).name
        if direction == "forward":
            step = self._graph.successors
        elif direction == "backward":
            step = self._graph.predecessors
        else:
            raise ValueError(f"Unknown direction {direction!r}")

        first = set(step(origin))
        if depth == 1:
            return sorted(first)
        if depth == 2:
            second: set[str] = set()
            for neighbour in first:
                second.update(step(neighbour))
            second.discard(origin)
            return sorted(second)
        raise ValueError(f"Neighbourhood depth must be 1 or 2, not {depth}")

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    def notes_with_tag(self, tag: str) -> list[Note]:
        """Notes carrying *tag* or one of its subtags."""
        return [note for note in self.notes() if has_tag(note.tags, tag)]

    def tag_counts(self) -> pl.DataFrame:
        """Return a tag -> note count table sorted by frequency."""
        counts: Counter[str] = Counter()
        for note in self._notes.values():
            counts.update(note.tags)
        rows = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return pl.DataFrame(
            {
                "tag": [tag for tag, _ in rows],
                "note_count": [count for _, count in rows],
            },
            schema={"tag": pl.Utf8, "note_count": pl.Int64},
        )
