"""Filter query language.

A query is a whitespace-separated list of tokens, each classified by its
prefix (``!#`` and ``!>`` are checked before ``#`` and ``>``):

========== ============================================================
``#tag``   the note carries ``tag`` or one of its subtags
``!#tag``  the note carries neither ``tag`` nor any of its subtags
``>note``  the note links to ``note`` (write spaces in the name as ``-``)
``!>note`` the note does not link to ``note``
other      fuzzy term: its characters appear in order in the note name
========== ============================================================

Token order does not matter.  Every token is valid, so there is no syntax
error state.  Fuzzy scores only decide the order of the result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from notegraph.environment import Environment
from notegraph.note import Note, link_key
from notegraph.tags import has_tag

if TYPE_CHECKING:
    from notegraph.graph import LinkGraph

_MATCH_SCORE = 16
_CONSECUTIVE_BONUS = 8
_WORD_START_BONUS = 8
_GAP_PENALTY = 1
_MAX_GAP_PENALTY = 8


def _fold(name: str) -> tuple[str, list[int]]:
    """Casefold *name*, mapping each folded character back to its source index."""
    folded = []
    origin = []
    for index, ch in enumerate(name):
        for part in ch.casefold():
            folded.append(part)
            origin.append(index)
    return "".join(folded), origin


def fuzzy_score(term: str, name: str) -> int | None:
    """Score *term* as a case-insensitive subsequence of *name*.

    Returns ``None`` when the characters of *term* do not all appear in
    *name* in order.  Consecutive runs and matches at the start of a word
    score higher; skipped characters between matches cost a little.
    """
    haystack, origin = _fold(name)
    score = 0
    pos = 0
    previous = -1
    for ch in term.casefold():
        found = haystack.find(ch, pos)
        if found < 0:
            return None
        score += _MATCH_SCORE
        if found == previous + 1 and previous >= 0:
            score += _CONSECUTIVE_BONUS
        elif previous >= 0:
            score -= min(found - previous - 1, _MAX_GAP_PENALTY) * _GAP_PENALTY
        at = origin[found]
        starts_char = found == 0 or origin[found - 1] != at
        if starts_char and (
            at == 0
            or not name[at - 1].isalnum()
            or (name[at].isupper() and name[at - 1].islower())
        ):
            score += _WORD_START_BONUS
        previous = found
        pos = found + 1
    return score


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TagInclude:
    tag: str

    def holds(self, graph: "LinkGraph", note: Note) -> bool:
        return has_tag(note.tags, self.tag)


@dataclass(frozen=True)
class TagExclude:
    tag: str

    def holds(self, graph: "LinkGraph", note: Note) -> bool:
        return not has_tag(note.tags, self.tag)


def _links_to(graph: "LinkGraph", note: Note, target: str) -> bool:
    key = link_key(target)
    return any(link_key(name) == key for name in graph.outlinks(note.name))


@dataclass(frozen=True)
class LinkInclude:
    target: str

    def holds(self, graph: "LinkGraph", note: Note) -> bool:
        return _links_to(graph, note, self.target)


@dataclass(frozen=True)
class LinkExclude:
    target: str

    def holds(self, graph: "LinkGraph", note: Note) -> bool:
        return not _links_to(graph, note, self.target)


@dataclass(frozen=True)
class FuzzyTerm:
    text: str

    def score(self, name: str) -> int | None:
        return fuzzy_score(self.text, name)


Predicate = Union[TagInclude, TagExclude, LinkInclude, LinkExclude, FuzzyTerm]


def parse_token(token: str) -> Predicate:
    """Classify a single query token."""
    if token.startswith("!#"):
        return TagExclude(token[2:])
    if token.startswith("!>"):
        return LinkExclude(token[2:])
    if token.startswith("#"):
        return TagInclude(token[1:])
    if token.startswith(">"):
        return LinkInclude(token[1:])
    return FuzzyTerm(token)


# ---------------------------------------------------------------------------
# Query
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Query:
    """A parsed filter: structured predicates plus fuzzy name terms.

    With ``match_any`` a note needs to satisfy only one of the structured
    predicates instead of all of them; fuzzy terms are always required.
    """

    predicates: tuple[Predicate, ...] = ()
    match_any: bool = False

    @property
    def structured(self) -> tuple[Predicate, ...]:
        return tuple(p for p in self.predicates if not isinstance(p, FuzzyTerm))

    @property
    def fuzzy_terms(self) -> tuple[FuzzyTerm, ...]:
        return tuple(p for p in self.predicates if isinstance(p, FuzzyTerm))

    def match(self, graph: "LinkGraph", note: Note) -> int | None:
        """Return the match score of *note*, or ``None`` if it is filtered out."""
        structured = self.structured
        if structured:
            results = (p.holds(graph, note) for p in structured)
            if not (any(results) if self.match_any else all(results)):
                return None
        total = 0
        for term in self.fuzzy_terms:
            score = term.score(note.name)
            if score is None:
                return None
            total += score
        return total

    def evaluate(self, graph: "LinkGraph") -> Environment:
        """Return the local environment of *graph* selected by this query.

        Ordered by descending score, ties broken by name.
        """
        scored = []
        for note in graph.notes():
            score = self.match(graph, note)
            if score is not None:
                scored.append((note.name, score))
        scored.sort(key=lambda item: (-item[1], item[0]))
        return Environment((name for name, _ in scored), dict(scored))


def parse_query(text: str, match_any: bool = False) -> Query:
    """Parse a filter string into a :class:`Query`."""
    return Query(tuple(parse_token(token) for token in text.split()), match_any=match_any)


def filter_notes(graph: "LinkGraph", text: str, match_any: bool = False) -> Environment:
    """Parse *text* and evaluate it against *graph* in one step."""
    return parse_query(text, match_any=match_any).evaluate(graph)
