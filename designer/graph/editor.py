"""Mutation API: the only legal way to change a pipeline graph.

Each public call is one undoable action. A call that changes nothing
(unknown id, value already set) records nothing, so undo never steps
through meaningless states.
"""

import logging
from typing import Any, Iterable

from designer.errors import InvalidEndpoint
from designer.graph.history import HistoryManager
from designer.graph.model import GraphModel
from designer.graph.rules import Preset, apply_rule, model_profile, resolve_preset
from designer.models.pipeline_edge import PipelineEdge
from designer.models.pipeline_node import NodeConfig, PipelineNode, Position
from designer.utils.identifiers import generate_edge_id, generate_node_id

logger = logging.getLogger(__name__)

# fields an inspector edit may touch
EDITABLE_FIELDS = frozenset({"label", "model", "base_latency_ms", "base_cost_per_million"})


class PipelineEditor:
    """Applies user gestures to a GraphModel and records them in a HistoryManager."""

    def __init__(self, graph: GraphModel, history: HistoryManager | None = None) -> None:
        self.graph = graph
        self.history = history if history is not None else HistoryManager()
        if not len(self.history):
            self.history.seed(graph.snapshot())
        self.active_preset: Preset | None = None

    def _commit(self, action: str) -> None:
        self.history.push(self.graph.snapshot())
        logger.debug("%s committed (history pointer=%d)", action, self.history.pointer)

    # --- nodes ---

    def add_node(self, config: NodeConfig | dict[str, Any]) -> str:
        """Create an active node without a position; returns its id.

        Raises pydantic.ValidationError if config is missing a field or
        carries a negative latency/cost.
        """
        if not isinstance(config, NodeConfig):
            config = NodeConfig.model_validate(config)
        node = PipelineNode(id=generate_node_id(), active=True, **config.model_dump())
        self.graph.put_node(node)
        self.active_preset = None
        self._commit(f"add_node {node.id}")
        return node.id

    def delete_nodes(self, node_ids: Iterable[str]) -> list[str]:
        """Remove nodes and their incident edges; unknown ids are skipped.

        A single id may be passed as a plain string.
        """
        if isinstance(node_ids, str):
            node_ids = [node_ids]
        removed, dropped_edges = self.graph.remove_nodes(node_ids)
        if not removed:
            return []
        self.active_preset = None
        self._commit(f"delete_nodes {removed} (+{len(dropped_edges)} edges)")
        return removed

    def toggle_active(self, node_id: str) -> bool:
        node = self.graph.get_node(node_id)
        if node is None:
            return False
        self.graph.put_node(node.model_copy(update={"active": not node.active}))
        self.active_preset = None
        self._commit(f"toggle_active {node_id}")
        return True

    def set_model(self, node_id: str, model: str, reprice: bool = False) -> bool:
        """Swap the backing model.

        With reprice=True, latency and cost follow the model's tier as well.
        """
        node = self.graph.get_node(node_id)
        if node is None:
            return False
        update: dict[str, Any] = {"model": model}
        if reprice:
            update["base_latency_ms"], update["base_cost_per_million"] = model_profile(model)
        return self._replace(node, node.model_copy(update=update), f"set_model {node_id}={model!r}")

    def update_node(self, node_id: str, **fields: Any) -> bool:
        """Inspector edit of label/model/latency/cost as a single step.

        Raises ValueError for fields outside EDITABLE_FIELDS and
        pydantic.ValidationError for invalid values; the graph is left as it was.
        """
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not editable: {sorted(unknown)}")
        node = self.graph.get_node(node_id)
        if node is None:
            return False
        # re-validate so a negative latency never reaches the graph
        changed = PipelineNode.model_validate({**node.model_dump(), **fields})
        return self._replace(node, changed, f"update_node {node_id}")

    def _replace(self, node: PipelineNode, changed: PipelineNode, action: str) -> bool:
        if changed == node:
            return False
        self.graph.put_node(changed)
        self.active_preset = None
        self._commit(action)
        return True

    def move_node(self, node_id: str, position: Position) -> bool:
        """Store a layout position. Not an undoable step of its own."""
        node = self.graph.get_node(node_id)
        if node is None or node.position == position:
            return False
        self.graph.put_node(node.model_copy(update={"position": position}))
        self.history.replace_current(self.graph.snapshot())
        return True

    # --- edges ---

    def connect(self, source: str, target: str) -> str:
        """Add source -> target; duplicates and cycles are accepted here.

        Raises InvalidEndpoint if either id is not in the graph.
        """
        for endpoint in (source, target):
            if endpoint not in self.graph:
                raise InvalidEndpoint(endpoint)
        edge = PipelineEdge(id=generate_edge_id(source, target), source=source, target=target)
        self.graph.add_edge(edge)
        self.active_preset = None
        self._commit(f"connect {source}->{target}")
        return edge.id

    # --- bulk ---

    def apply_preset(self, name: Preset | str) -> bool:
        """Rewrite every node per the named preset, recorded as one step.

        Raises UnknownPreset for names outside the preset table.
        """
        preset = resolve_preset(name)
        changed = False
        with self.graph.batch():
            for node in self.graph.nodes:
                updated = apply_rule(preset, node)
                if updated != node:
                    self.graph.put_node(updated)
                    changed = True
        self.active_preset = preset
        if changed:
            self._commit(f"apply_preset {preset.value}")
        return changed

    # --- history ---

    def undo(self) -> bool:
        snapshot = self.history.undo()
        if snapshot is None:
            return False
        self.graph.restore(snapshot)
        return True

    def redo(self) -> bool:
        snapshot = self.history.redo()
        if snapshot is None:
            return False
        self.graph.restore(snapshot)
        return True

    # --- queries ---

    def label_matches(self, query: str) -> list[str]:
        """Ids of nodes whose label contains query (case-insensitive)."""
        needle = query.strip().lower()
        return [node.id for node in self.graph.nodes if needle in node.label.lower()]
