"""The pipeline graph: nodes and edges keyed by id, in insertion order.

GraphModel only enforces structural invariants (unique ids, no dangling
edges). Anything a user does goes through PipelineEditor, which pairs each
change with a history snapshot.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator

from designer.defaults import default_edges, default_nodes
from designer.models.pipeline_edge import PipelineEdge
from designer.models.pipeline_node import PipelineNode
from designer.models.snapshot import HistorySnapshot


@dataclass(frozen=True)
class GraphChange:
    """What kind of state a change touched."""

    nodes: bool = False
    edges: bool = False

    def __or__(self, other: "GraphChange") -> "GraphChange":
        return GraphChange(nodes=self.nodes or other.nodes, edges=self.edges or other.edges)

    def __bool__(self) -> bool:
        return self.nodes or self.edges


GraphListener = Callable[["GraphModel", GraphChange], None]


class GraphModel:
    """Node/edge collection with change notification."""

    def __init__(
        self,
        nodes: Iterable[PipelineNode] = (),
        edges: Iterable[PipelineEdge] = (),
    ) -> None:
        self._nodes: dict[str, PipelineNode] = {}
        self._edges: dict[str, PipelineEdge] = {}
        self._listeners: list[GraphListener] = []
        self._batch_depth = 0
        self._pending = GraphChange()

        for node in nodes:
            if node.id in self._nodes:
                raise ValueError(f"Duplicate node id: {node.id}")
            self._nodes[node.id] = node
        for edge in edges:
            self._check_edge(edge)
            self._edges[edge.id] = edge

    @classmethod
    def default(cls) -> "GraphModel":
        """The built-in eight-step RAG pipeline."""
        return cls(default_nodes(), default_edges())

    @classmethod
    def from_snapshot(cls, snapshot: HistorySnapshot) -> "GraphModel":
        return cls(snapshot.nodes, snapshot.edges)

    # --- reading ---

    @property
    def nodes(self) -> list[PipelineNode]:
        return list(self._nodes.values())

    @property
    def edges(self) -> list[PipelineEdge]:
        return list(self._edges.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def get_node(self, node_id: str) -> PipelineNode | None:
        return self._nodes.get(node_id)

    def get_edge(self, edge_id: str) -> PipelineEdge | None:
        return self._edges.get(edge_id)

    def outgoing(self, node_id: str) -> list[PipelineEdge]:
        """Edges leaving node_id, oldest first."""
        return [e for e in self._edges.values() if e.source == node_id]

    def incoming_counts(self) -> dict[str, int]:
        counts = {node_id: 0 for node_id in self._nodes}
        for edge in self._edges.values():
            counts[edge.target] += 1
        return counts

    def snapshot(self) -> HistorySnapshot:
        return HistorySnapshot(nodes=tuple(self._nodes.values()), edges=tuple(self._edges.values()))

    # --- change notification ---

    def subscribe(self, listener: GraphListener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @contextmanager
    def batch(self) -> Iterator[None]:
        """Collapse every change made inside the block into one notification."""
        self._batch_depth += 1
        try:
            yield
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0 and self._pending:
                change, self._pending = self._pending, GraphChange()
                self._notify(change)

    def _changed(self, change: GraphChange) -> None:
        if self._batch_depth:
            self._pending = self._pending | change
        else:
            self._notify(change)

    def _notify(self, change: GraphChange) -> None:
        for listener in list(self._listeners):
            listener(self, change)

    # --- writing (PipelineEditor is the intended caller) ---

    def put_node(self, node: PipelineNode) -> None:
        """Insert a node, or replace the node with the same id in place."""
        self._nodes[node.id] = node
        self._changed(GraphChange(nodes=True))

    def add_edge(self, edge: PipelineEdge) -> None:
        self._check_edge(edge)
        if edge.id in self._edges:
            raise ValueError(f"Duplicate edge id: {edge.id}")
        self._edges[edge.id] = edge
        self._changed(GraphChange(edges=True))

    def remove_nodes(self, node_ids: Iterable[str]) -> tuple[list[str], list[str]]:
        """Remove nodes and every edge touching them.

        Unknown ids are ignored. Returns (removed node ids, removed edge ids).
        """
        doomed = {node_id for node_id in node_ids if node_id in self._nodes}
        if not doomed:
            return [], []
        dropped_edges = [
            edge_id
            for edge_id, edge in self._edges.items()
            if edge.source in doomed or edge.target in doomed
        ]
        for edge_id in dropped_edges:
            del self._edges[edge_id]
        removed = [node_id for node_id in self._nodes if node_id in doomed]
        for node_id in removed:
            del self._nodes[node_id]
        self._changed(GraphChange(nodes=True, edges=bool(dropped_edges)))
        return removed, dropped_edges

    def restore(self, snapshot: HistorySnapshot) -> GraphChange:
        """Replace the whole state with a snapshot's contents."""
        change = GraphChange(
            nodes=tuple(self._nodes.values()) != snapshot.nodes,
            edges=tuple(self._edges.values()) != snapshot.edges,
        )
        self._nodes = {node.id: node for node in snapshot.nodes}
        self._edges = {edge.id: edge for edge in snapshot.edges}
        if change:
            self._changed(change)
        return change

    def _check_edge(self, edge: PipelineEdge) -> None:
        for endpoint in (edge.source, edge.target):
            if endpoint not in self._nodes:
                raise ValueError(f"Edge {edge.id} references unknown node: {endpoint}")

    def __repr__(self) -> str:
        return f"GraphModel(nodes={len(self._nodes)}, edges={len(self._edges)})"
