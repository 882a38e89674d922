"""Unit tests for the relationship graph."""

from bookmark_tag_store.core.graph import RelationshipGraph


class TestAddRelationship:
    def test_symmetric(self) -> None:
        graph = RelationshipGraph()
        graph.add_relationship("a", "b")

        assert graph.neighbors("a") == {"b"}
        assert graph.neighbors("b") == {"a"}

    def test_idempotent(self) -> None:
        """2回呼んでも辺が重複しないこと."""
        graph = RelationshipGraph()
        graph.add_relationship("a", "b")
        graph.add_relationship("a", "b")
        graph.add_relationship("b", "a")

        assert graph.to_dict() == {"a": {"b": True}, "b": {"a": True}}

    def test_unknown_key_has_no_neighbors(self) -> None:
        graph = RelationshipGraph()

        assert graph.neighbors("missing") == set()
        assert "missing" not in graph

    def test_neighbors_returns_copy(self) -> None:
        graph = RelationshipGraph()
        graph.add_relationship("a", "b")
        graph.neighbors("a").add("c")

        assert graph.neighbors("a") == {"b"}

    def test_add_node_without_edges(self) -> None:
        graph = RelationshipGraph()
        graph.add_node("solo")

        assert list(graph) == ["solo"]
        assert graph.to_dict() == {"solo": {}}

    def test_clear(self) -> None:
        graph = RelationshipGraph()
        graph.add_relationship("a", "b")
        graph.clear()

        assert len(graph) == 0
