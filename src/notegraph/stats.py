"""Aggregate statistics over an environment of notes.

In *global* mode (no reference environment) the figures simply describe
the notes of the environment.  In *local* mode the environment is compared
against a reference superset: every resolved link between the environment
and the reference falls into exactly one of three buckets

* **internal** - both ends inside the environment,
* **incoming** - from the rest of the reference into the environment,
* **outgoing** - from the environment into the rest of the reference,

and every aggregate figure can be expressed as a share of the reference.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import polars as pl

from notegraph.environment import Environment

if TYPE_CHECKING:
    from notegraph.graph import LinkGraph

#: Aggregate figures that can be compared against a reference environment
FIGURES = ("note_count", "word_count", "char_count", "tag_count", "link_count", "broken_links")


def percentage(part: int, whole: int) -> float:
    """``part / whole * 100``; an empty *whole* counts as 0 %."""
    if whole == 0:
        return 0.0
    return part / whole * 100


@dataclass(frozen=True)
class NoteStats:
    """Link figures of one note relative to its environment."""

    name: str
    match_score: int
    #: Links pointing to this note from anywhere
    inlinks_global: int
    #: Links pointing to this note from inside the environment
    inlinks_local: int
    #: Resolved links going out of this note
    outlinks_global: int
    #: Resolved links going out of this note into the environment
    outlinks_local: int
    #: References of this note without an existing target
    broken_links: int


@dataclass(frozen=True)
class LinkPartition:
    internal: int
    incoming: int
    outgoing: int

    @property
    def total(self) -> int:
        return self.internal + self.incoming + self.outgoing


@dataclass(frozen=True)
class EnvironmentStats:
    note_count: int
    word_count: int
    char_count: int
    #: Number of distinct tags
    tag_count: int
    broken_links: int
    #: Resolved links leaving members, wherever they point
    link_count: int
    members: tuple[NoteStats, ...] = ()
    partition: LinkPartition | None = None
    reference: "EnvironmentStats | None" = field(default=None, repr=False)

    def share(self, figure: str) -> float:
        """Return *figure* as a percentage of the reference environment's."""
        if self.reference is None:
            raise ValueError("share() needs statistics computed against a reference")
        if figure not in FIGURES:
            raise ValueError(f"Unknown figure {figure!r}")
        return percentage(getattr(self, figure), getattr(self.reference, figure))

    def to_frame(self) -> pl.DataFrame:
        """Return the per-note figures as a Polars DataFrame."""
        schema = {
            "name": pl.Utf8,
            "match_score": pl.Int64,
            "inlinks_global": pl.Int64,
            "inlinks_local": pl.Int64,
            "outlinks_global": pl.Int64,
            "outlinks_local": pl.Int64,
            "broken_links": pl.Int64,
        }
        columns: dict[str, list] = {key: [] for key in schema}
        for member in self.members:
            for key in schema:
                columns[key].append(getattr(member, key))
        return pl.DataFrame(columns, schema=schema)


def compute(
    graph: "LinkGraph",
    env: Environment,
    reference: Environment | None = None,
) -> EnvironmentStats:
    """Compute :class:`EnvironmentStats` for *env*.

    Pass *reference* (a superset of *env*, usually the global environment)
    to get the link partition and percentage shares.
    """
    if reference is not None and not env.issubset(reference):
        raise ValueError("The reference environment must contain every note of the environment")

    members: list[NoteStats] = []
    tags: set[str] = set()
    words = chars = broken = links = 0
    internal = incoming = outgoing = 0

    for name in env:
        note = graph.get(name)
        outs = graph.outlinks(name)
        ins = graph.inlinks(name)
        note_broken = graph.broken(name)

        words += note.word_count
        chars += note.char_count
        tags.update(note.tags)
        broken += note_broken
        links += len(outs)

        outs_local = sum(1 for target in outs if target in env)
        ins_local = sum(1 for source in ins if source in env)
        if reference is not None:
            internal += outs_local
            outgoing += sum(1 for target in outs if target not in env and target in reference)
            incoming += sum(1 for source in ins if source not in env and source in reference)

        members.append(
            NoteStats(
                name=name,
                match_score=env.score(name),
                inlinks_global=len(ins),
                inlinks_local=ins_local,
                outlinks_global=len(outs),
                outlinks_local=outs_local,
                broken_links=note_broken,
            )
        )

    partition = None
    reference_stats = None
    if reference is not None:
        partition = LinkPartition(internal=internal, incoming=incoming, outgoing=outgoing)
        reference_stats = compute(graph, reference)

    return EnvironmentStats(
        note_count=len(env),
        word_count=words,
        char_count=chars,
        tag_count=len(tags),
        broken_links=broken,
        link_count=links,
        members=tuple(members),
        partition=partition,
        reference=reference_stats,
    )
