"""Unit tests for notegraph.query."""

import pytest

from notegraph.graph import LinkGraph
from notegraph.note import Note
from notegraph.query import (
    FuzzyTerm,
    LinkExclude,
    LinkInclude,
    Query,
    TagExclude,
    TagInclude,
    filter_notes,
    fuzzy_score,
    parse_query,
)


def _note(name: str, *links: str, tags: tuple[str, ...] = ()) -> Note:
    return Note(name=name, tags=frozenset(tags), links=links)


@pytest.fixture()
def graph() -> LinkGraph:
    return LinkGraph([
        _note("Manifold", "Chart", "Topology", tags=("math/diffgeo",)),
        _note("Chart", "Smooth Map", tags=("math/diffgeo",)),
        _note("Lie Group", "Manifold", tags=("math/diffgeo", "math/lietheo")),
        _note("Smooth Map", "Manifold", tags=("math/diffgeo",)),
        _note("Topology", tags=("math/topology",)),
        _note("Linux", tags=("os",)),
        _note("Windows", tags=("os/win",)),
    ])


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParseQuery:
    def test_token_classification(self):
        query = parse_query("!#lietheo #diffgeo >Manifold !>atlas chart")
        assert query.predicates == (
            TagExclude("lietheo"),
            TagInclude("diffgeo"),
            LinkInclude("Manifold"),
            LinkExclude("atlas"),
            FuzzyTerm("chart"),
        )

    def test_whitespace_tokenisation(self):
        query = parse_query("  #a\t\tfoo\n>b ")
        assert query.predicates == (TagInclude("a"), FuzzyTerm("foo"), LinkInclude("b"))

    def test_empty_query(self):
        assert parse_query("   ") == Query()

    def test_bare_prefixes_are_still_classified(self):
        query = parse_query("# ! >")
        assert query.predicates == (TagInclude(""), FuzzyTerm("!"), LinkInclude(""))

    def test_structured_and_fuzzy_split(self):
        query = parse_query("#x foo !>y bar")
        assert query.structured == (TagInclude("x"), LinkExclude("y"))
        assert query.fuzzy_terms == (FuzzyTerm("foo"), FuzzyTerm("bar"))


# ---------------------------------------------------------------------------
# Fuzzy matching
# ---------------------------------------------------------------------------


class TestFuzzyScore:
    def test_subsequence_matches(self):
        assert fuzzy_score("mfd", "Manifold") is not None

    def test_case_insensitive(self):
        assert fuzzy_score("LIE", "Lie Group") is not None

    def test_order_matters(self):
        assert fuzzy_score("dfm", "Manifold") is None

    def test_missing_character(self):
        assert fuzzy_score("x", "Manifold") is None

    def test_contiguous_beats_scattered(self):
        assert fuzzy_score("man", "Manifold") > fuzzy_score("mfd", "Manifold")

    def test_word_start_beats_inner_match(self):
        assert fuzzy_score("g", "Lie Group") > fuzzy_score("g", "Ring")

    def test_empty_term(self):
        assert fuzzy_score("", "anything") == 0

    def test_name_with_expanding_case_matches_itself(self):
        assert fuzzy_score("İst", "İstanbul") is not None

    def test_casefold_matches_sharp_s(self):
        assert fuzzy_score("strasse", "Straße") is not None

    def test_folded_scores_like_plain_ascii(self):
        assert fuzzy_score("İst", "İstanbul") > fuzzy_score("İst", "Mİst")


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


class TestEvaluate:
    def test_empty_query_returns_all_notes_in_name_order(self, graph: LinkGraph):
        env = filter_notes(graph, "")
        assert list(env) == sorted(graph)

    def test_tag_inclusion_is_hierarchical(self, graph: LinkGraph):
        assert set(filter_notes(graph, "#os")) == {"Linux", "Windows"}
        assert set(filter_notes(graph, "#math/topology")) == {"Topology"}
        assert list(filter_notes(graph, "#topology")) == []

    def test_tag_exclusion(self, graph: LinkGraph):
        assert set(filter_notes(graph, "#os !#os/win")) == {"Linux"}

    def test_link_predicates(self, graph: LinkGraph):
        env = filter_notes(graph, "!#lietheo #diffgeo >Manifold !>atlas")
        assert list(env) == ["Smooth Map"]

    def test_dash_stands_for_space_in_link_tokens(self, graph: LinkGraph):
        assert list(filter_notes(graph, ">Smooth-Map")) == ["Chart"]

    def test_link_to_missing_note_never_matches(self):
        graph = LinkGraph([_note("A", "Ghost")])
        assert list(filter_notes(graph, ">Ghost")) == []
        assert list(filter_notes(graph, "!>Ghost")) == ["A"]

    def test_fuzzy_and_link_combined(self):
        graph = LinkGraph([_note("Map1", "B"), _note("Map2", "Z"), _note("B")])
        assert list(filter_notes(graph, ">B map")) == ["Map1"]

    def test_every_fuzzy_term_must_match(self, graph: LinkGraph):
        assert list(filter_notes(graph, "lie grp")) == ["Lie Group"]
        assert list(filter_notes(graph, "lie xyz")) == []

    def test_results_ordered_by_score(self, graph: LinkGraph):
        env = filter_notes(graph, "ma")
        assert env.names[0] == "Manifold"
        scores = [env.score(name) for name in env]
        assert scores == sorted(scores, reverse=True)

    def test_contradictory_query_is_empty(self, graph: LinkGraph):
        assert list(filter_notes(graph, "#math !#math")) == []

    def test_match_any(self, graph: LinkGraph):
        env = filter_notes(graph, "#os #math/topology", match_any=True)
        assert set(env) == {"Linux", "Windows", "Topology"}
        assert list(filter_notes(graph, "#os #math/topology")) == []

    def test_idempotent(self, graph: LinkGraph):
        first = filter_notes(graph, "#math a")
        second = filter_notes(graph, "#math a")
        assert first == second
        assert first.names == second.names

    def test_token_order_does_not_matter(self, graph: LinkGraph):
        assert filter_notes(graph, "#diffgeo >Manifold") == filter_notes(graph, ">Manifold #diffgeo")
