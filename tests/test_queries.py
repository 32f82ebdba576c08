"""Tests for graph queries."""

import pytest

from manuscript_graph.graph import entities_in_range, find_entity, related_entities
from manuscript_graph.models import EntityGraph


class TestGraphQueries:
    """Tests for lookups over an entity graph."""

    @pytest.fixture
    def graph(self, make_node, make_edge):
        elizabeth = make_node("Elizabeth", offsets=(0, 120), aliases=["The Healer"])
        marcus = make_node("Marcus", offsets=(40,))
        elena = make_node("Elena", offsets=(300,))
        return EntityGraph(
            nodes=[elizabeth, marcus, elena],
            edges=[
                make_edge(elizabeth, marcus, co_occurrences=1),
                make_edge(elena, elizabeth, co_occurrences=4),
            ],
        )

    def test_exact_name(self, graph):
        node, confidence = find_entity(graph, "elizabeth's")
        assert node.name == "Elizabeth"
        assert confidence == 1.0

    def test_alias(self, graph):
        node, confidence = find_entity(graph, "the healer")
        assert node.name == "Elizabeth"
        assert confidence == 0.95

    def test_fuzzy(self, graph):
        node, confidence = find_entity(graph, "Elizabth")
        assert node.name == "Elizabeth"
        assert 0.85 <= confidence < 1.0

    def test_no_match(self, graph):
        assert find_entity(graph, "Zzyzx") == (None, 0.0)
        assert find_entity(graph, "") == (None, 0.0)
        assert find_entity(EntityGraph(), "Marcus") == (None, 0.0)

    def test_entities_in_range(self, graph):
        assert [n.name for n in entities_in_range(graph, 30, 130)] == ["Elizabeth", "Marcus"]
        assert [n.name for n in entities_in_range(graph, 0, 40)] == ["Elizabeth"]
        assert entities_in_range(graph, 500, 600) == []

    def test_related_entities(self, graph):
        elizabeth = graph.nodes[0]
        related = related_entities(graph, elizabeth.id)

        assert [(node.name, edge.co_occurrences) for node, edge in related] == [
            ("Elena", 4),
            ("Marcus", 1),
        ]

    def test_related_entities_unknown_id(self, graph):
        assert related_entities(graph, "missing") == []
