"""Tests for publication of the node set and reading it back."""

import json

import httpx
import pytest

from designer.adapters.bridge import PersistenceBridge
from designer.adapters.publishers import FilePublisher, HttpPublisher, ListPublisher
from designer.adapters.reader import (
    count_active,
    has_pipeline,
    load_graph,
    read_pipeline_file,
    read_published_pipeline,
)
from designer.graph.editor import PipelineEditor
from designer.graph.model import GraphModel
from designer.models.pipeline_edge import PipelineEdge
from designer.models.pipeline_node import NodeKind


class FailingPublisher:
    def __init__(self) -> None:
        self.calls = 0

    def publish(self, nodes, timestamp):
        self.calls += 1
        raise OSError("disk full")


def fixed_clock() -> int:
    return 1_700_000_000_000


class TestPersistenceBridge:
    """Test when and what the bridge publishes."""

    def test_publishes_on_attach(self):
        publisher = ListPublisher()
        PersistenceBridge(GraphModel.default(), publisher, clock=fixed_clock)
        assert len(publisher.published) == 1
        assert publisher.latest.updated_at == 1_700_000_000_000
        assert [n.id for n in publisher.latest.nodes][:2] == ["n0", "n7"]

    def test_node_change_publishes_latest_state(self):
        """Published nodes always equal the graph's nodes after the change."""
        graph = GraphModel.default()
        publisher = ListPublisher()
        PersistenceBridge(graph, publisher, clock=fixed_clock)
        editor = PipelineEditor(graph)

        editor.toggle_active("n3")

        assert publisher.latest.nodes == graph.nodes
        assert publisher.latest.nodes[4].active is True

    def test_edge_only_change_does_not_publish(self):
        graph = GraphModel.default()
        publisher = ListPublisher()
        PersistenceBridge(graph, publisher)
        PipelineEditor(graph).connect("n6", "n0")
        assert len(publisher.published) == 1

    def test_undo_publishes(self):
        graph = GraphModel.default()
        publisher = ListPublisher()
        PersistenceBridge(graph, publisher)
        editor = PipelineEditor(graph)
        editor.toggle_active("n0")
        editor.undo()
        assert len(publisher.published) == 3
        assert publisher.latest.nodes[0].active is True

    def test_empty_graph_is_not_published(self):
        graph = GraphModel.default()
        publisher = ListPublisher()
        PersistenceBridge(graph, publisher)
        graph.remove_nodes([n.id for n in graph.nodes])
        assert len(publisher.published) == 1

    def test_preset_publishes_once(self):
        """A preset is one batch, so one publication."""
        graph = GraphModel.default()
        publisher = ListPublisher()
        PersistenceBridge(graph, publisher)
        PipelineEditor(graph).apply_preset("PRECISION")
        assert len(publisher.published) == 2

    def test_publisher_failure_is_swallowed(self):
        """The editor never sees a publish error."""
        graph = GraphModel.default()
        publisher = FailingPublisher()
        bridge = PersistenceBridge(graph, publisher)
        editor = PipelineEditor(graph)

        assert editor.toggle_active("n0") is True
        assert bridge.failures == 2
        assert publisher.calls == 2

    def test_close_stops_publishing(self):
        graph = GraphModel.default()
        publisher = ListPublisher()
        bridge = PersistenceBridge(graph, publisher)
        bridge.close()
        PipelineEditor(graph).toggle_active("n0")
        assert len(publisher.published) == 1


class TestFilePublisher:
    """Test the JSON file round trip."""

    def test_writes_camel_case_json(self, tmp_path):
        path = tmp_path / "store" / "active_pipeline.json"
        FilePublisher(path).publish(GraphModel.default().nodes, 42)

        data = json.loads(path.read_text())
        assert data["updatedAt"] == 42
        assert data["nodes"][0]["baseLatencyMs"] == 30
        assert data["nodes"][0]["kind"] == "GUARDRAIL"
        assert not (tmp_path / "store" / "active_pipeline.json.tmp").exists()

    def test_read_back(self, tmp_path):
        path = tmp_path / "active_pipeline.json"
        nodes = GraphModel.default().nodes
        FilePublisher(path).publish(nodes, 42)

        published = read_pipeline_file(path)
        assert published.nodes == nodes
        assert published.updated_at == 42

    def test_missing_file(self, tmp_path):
        assert read_pipeline_file(tmp_path / "nope.json") is None


class TestHttpPublisher:
    def test_put_to_pipeline_route(self, monkeypatch):
        """The projection is PUT to /api/pipelines/<key> as camelCase JSON."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"ok": True})

        real_client = httpx.Client
        monkeypatch.setattr(
            httpx, "Client", lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs)
        )

        HttpPublisher("http://designer.local/", key="demo").publish(GraphModel.default().nodes, 7)

        assert seen["method"] == "PUT"
        assert seen["url"] == "http://designer.local/api/pipelines/demo"
        assert seen["body"]["updatedAt"] == 7

    def test_http_error_raises(self, monkeypatch):
        real_client = httpx.Client
        transport = httpx.MockTransport(lambda request: httpx.Response(500))
        monkeypatch.setattr(httpx, "Client", lambda **kwargs: real_client(transport=transport, **kwargs))

        with pytest.raises(httpx.HTTPStatusError):
            HttpPublisher("http://designer.local").publish(GraphModel.default().nodes, 7)


class TestReader:
    """Consumers tolerate absence and malformed data."""

    @pytest.mark.parametrize(
        "raw",
        [None, "", b"", "{not json", "[]", '{"nodes": "x", "updatedAt": 1}', {"nodes": [{"id": "a"}]}],
    )
    def test_malformed_is_absent(self, raw):
        assert read_published_pipeline(raw) is None

    def test_dict_input(self):
        raw = {
            "nodes": [
                {
                    "id": "n9",
                    "kind": "RERANK",
                    "label": "Reranker",
                    "model": "ColBERTv2",
                    "active": True,
                    "baseLatencyMs": 80,
                    "baseCostPerMillion": 0.2,
                }
            ],
            "updatedAt": 1,
        }
        published = read_published_pipeline(raw)
        assert has_pipeline(published)
        assert count_active(published, NodeKind.RERANK) == 1
        assert count_active(published, NodeKind.GENERATION) == 0

    def test_count_active_ignores_inactive(self, tmp_path):
        path = tmp_path / "p.json"
        FilePublisher(path).publish(GraphModel.default().nodes, 1)
        published = read_pipeline_file(path)
        # n2 active, n3 (Knowledge Graph) inactive
        assert count_active(published, NodeKind.RETRIEVAL) == 1
        assert count_active(None, NodeKind.RETRIEVAL) == 0

    def test_has_pipeline(self):
        assert has_pipeline(None) is False
        assert has_pipeline(read_published_pipeline('{"nodes": [], "updatedAt": 1}')) is False


class TestLoadGraph:
    """Test building the startup graph from a stored projection."""

    def test_absent_gives_default(self):
        graph = load_graph(None)
        assert graph.snapshot() == GraphModel.default().snapshot()

    def test_malformed_gives_default(self):
        assert len(load_graph("garbage")) == 8

    def test_reattaches_default_edges(self, tmp_path):
        """Stored nodes come back with built-in edges whose endpoints survived."""
        graph = GraphModel.default()
        graph.remove_nodes({"n3"})
        path = tmp_path / "p.json"
        FilePublisher(path).publish(graph.nodes, 1)

        loaded = load_graph(read_pipeline_file(path))

        assert [n.id for n in loaded.nodes] == [n.id for n in graph.nodes]
        assert {e.id for e in loaded.edges} == {"e0-7", "e7-1", "e1-2", "e4-5", "e5-6"}

    def test_duplicate_ids_give_default(self):
        node = GraphModel.default().nodes[0].model_dump(mode="json", by_alias=True)
        raw = {"nodes": [node, node], "updatedAt": 1}
        loaded = load_graph(raw)
        assert loaded.snapshot() == GraphModel.default().snapshot()

    def test_loaded_edges_are_plain(self):
        loaded = load_graph(None)
        assert all(isinstance(e, PipelineEdge) for e in loaded.edges)
