"""Pipeline graph, its mutation API and undo/redo history."""

from designer.graph.editor import PipelineEditor
from designer.graph.history import HistoryManager
from designer.graph.model import GraphChange, GraphModel
from designer.graph.rules import Preset
from designer.graph.topology import (
    check_acyclic,
    entry_point,
    sink_nodes,
    source_nodes,
    topological_order,
)

__all__ = [
    "GraphChange",
    "GraphModel",
    "HistoryManager",
    "PipelineEditor",
    "Preset",
    "check_acyclic",
    "entry_point",
    "sink_nodes",
    "source_nodes",
    "topological_order",
]
