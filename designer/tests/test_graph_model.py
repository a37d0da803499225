"""Tests for the graph model, its value types and topology helpers."""

import pytest
from pydantic import ValidationError

from designer.errors import CycleDetected
from designer.graph.model import GraphChange, GraphModel
from designer.graph.topology import (
    check_acyclic,
    entry_point,
    sink_nodes,
    source_nodes,
    topological_order,
)
from designer.models.pipeline_edge import PipelineEdge
from designer.models.pipeline_node import NodeConfig, NodeKind, PipelineNode, Position


def make_node(node_id: str, latency: float = 10, active: bool = True) -> PipelineNode:
    return PipelineNode(
        id=node_id,
        kind=NodeKind.PROCESSING,
        label=f"Step {node_id}",
        model="Default Model",
        active=active,
        base_latency_ms=latency,
        base_cost_per_million=0.1,
    )


def make_edge(source: str, target: str) -> PipelineEdge:
    return PipelineEdge(id=f"e-{source}-{target}", source=source, target=target)


class TestPipelineNode:
    """Test node value semantics."""

    def test_nodes_are_frozen(self):
        """Nodes are values; assigning a field should fail."""
        node = make_node("a")
        with pytest.raises(ValidationError):
            node.active = False

    def test_negative_latency_rejected(self):
        """base_latency_ms must be non-negative."""
        with pytest.raises(ValidationError):
            make_node("a", latency=-1)

    def test_inactive_node_contributes_nothing(self):
        """effective latency/cost are zero while inactive."""
        node = make_node("a", latency=120, active=False)
        assert node.effective_latency_ms == 0
        assert node.effective_cost_per_million == 0

    def test_camel_case_wire_format(self):
        """Dumping by alias should produce the published key names."""
        node = make_node("a").model_copy(update={"position": Position(x=1, y=2)})
        data = node.model_dump(mode="json", by_alias=True)
        assert data["baseLatencyMs"] == 10
        assert data["baseCostPerMillion"] == 0.1
        assert data["kind"] == "PROCESSING"
        assert data["position"] == {"x": 1.0, "y": 2.0}

    def test_config_requires_all_fields(self):
        """NodeConfig missing a required field is a validation error."""
        with pytest.raises(ValidationError) as exc_info:
            NodeConfig.model_validate({"kind": "RERANK", "label": "x", "model": "m", "base_latency_ms": 5})
        assert [err["type"] for err in exc_info.value.errors()] == ["missing"]


class TestGraphModel:
    """Test structural invariants and change notification."""

    def test_duplicate_node_ids_rejected(self):
        """Node ids are unique within a graph."""
        with pytest.raises(ValueError, match="Duplicate node id"):
            GraphModel([make_node("a"), make_node("a")])

    def test_dangling_edge_rejected(self):
        """Edges must reference existing nodes."""
        with pytest.raises(ValueError, match="unknown node"):
            GraphModel([make_node("a")], [make_edge("a", "ghost")])

    def test_outgoing_keeps_insertion_order(self):
        """outgoing() lists edges oldest first."""
        graph = GraphModel(
            [make_node("a"), make_node("b"), make_node("c")],
            [make_edge("a", "c"), make_edge("a", "b")],
        )
        assert [e.target for e in graph.outgoing("a")] == ["c", "b"]

    def test_remove_nodes_drops_incident_edges_only(self):
        """Removing b removes a->b and b->c but keeps a->c."""
        graph = GraphModel(
            [make_node("a"), make_node("b"), make_node("c")],
            [make_edge("a", "b"), make_edge("b", "c"), make_edge("a", "c")],
        )
        removed, dropped = graph.remove_nodes({"b"})
        assert removed == ["b"]
        assert sorted(dropped) == ["e-a-b", "e-b-c"]
        assert [e.id for e in graph.edges] == ["e-a-c"]

    def test_listener_receives_change_kind(self):
        """Listeners are told whether nodes and/or edges changed."""
        graph = GraphModel([make_node("a"), make_node("b")])
        changes = []
        graph.subscribe(lambda g, change: changes.append(change))

        graph.add_edge(make_edge("a", "b"))
        graph.put_node(make_node("c"))

        assert changes == [GraphChange(edges=True), GraphChange(nodes=True)]

    def test_batch_collapses_notifications(self):
        """Changes inside batch() arrive as one notification."""
        graph = GraphModel([make_node("a")])
        changes = []
        graph.subscribe(lambda g, change: changes.append(change))

        with graph.batch():
            graph.put_node(make_node("b"))
            graph.put_node(make_node("c"))
            graph.add_edge(make_edge("b", "c"))

        assert changes == [GraphChange(nodes=True, edges=True)]

    def test_unsubscribe(self):
        """The function returned by subscribe() detaches the listener."""
        graph = GraphModel()
        changes = []
        unsubscribe = graph.subscribe(lambda g, change: changes.append(change))
        unsubscribe()
        graph.put_node(make_node("a"))
        assert changes == []

    def test_restore_round_trips_snapshot(self):
        """restore(snapshot()) after edits gives back the captured state."""
        graph = GraphModel([make_node("a"), make_node("b")], [make_edge("a", "b")])
        before = graph.snapshot()
        graph.remove_nodes({"a"})
        graph.restore(before)
        assert graph.snapshot() == before

    def test_default_graph_is_a_chain(self):
        """The built-in pipeline has eight steps and seven links."""
        graph = GraphModel.default()
        assert len(graph) == 8
        assert len(graph.edges) == 7
        assert graph.get_node("n3").active is False


class TestTopology:
    """Test entry point selection and cycle detection."""

    def test_source_and_sink_nodes(self):
        graph = GraphModel(
            [make_node("a"), make_node("b"), make_node("c")],
            [make_edge("a", "b")],
        )
        assert source_nodes(graph) == ["a", "c"]
        assert sink_nodes(graph) == ["b", "c"]

    def test_entry_point_prefers_first_source(self):
        """The first zero in-degree node in node order is the entry."""
        graph = GraphModel([make_node("b"), make_node("a")], [make_edge("b", "a")])
        assert entry_point(graph) == "b"

    def test_entry_point_of_empty_graph(self):
        assert entry_point(GraphModel()) is None

    def test_entry_point_falls_back_to_first_node(self):
        """With no source node at all, the first node is used."""
        graph = GraphModel([make_node("a"), make_node("b")], [make_edge("a", "b"), make_edge("b", "a")])
        assert entry_point(graph) == "a"

    def test_topological_order(self):
        graph = GraphModel(
            [make_node("c"), make_node("b"), make_node("a")],
            [make_edge("a", "b"), make_edge("b", "c")],
        )
        assert topological_order(graph) == ["a", "b", "c"]

    def test_cycle_detected(self):
        """A->B->A cannot be ordered."""
        graph = GraphModel(
            [make_node("x"), make_node("a"), make_node("b")],
            [make_edge("x", "a"), make_edge("a", "b"), make_edge("b", "a")],
        )
        with pytest.raises(CycleDetected) as exc_info:
            check_acyclic(graph)
        assert set(exc_info.value.cycle_nodes) == {"a", "b"}

    def test_self_loop_is_a_cycle(self):
        graph = GraphModel([make_node("a")], [make_edge("a", "a")])
        with pytest.raises(CycleDetected):
            check_acyclic(graph)
