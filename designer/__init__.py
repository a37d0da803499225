"""RAG pipeline designer - graph editing, undo/redo history and latency simulation."""

from designer.errors import (
    AlreadyRunning,
    CycleDetected,
    DesignerError,
    InvalidEndpoint,
    UnknownPreset,
)
from designer.graph import (
    GraphModel,
    HistoryManager,
    PipelineEditor,
    Preset,
)
from designer.models import (
    HistorySnapshot,
    NodeConfig,
    NodeKind,
    PipelineEdge,
    PipelineNode,
    Position,
    PublishedPipeline,
    SimulationEvent,
    SimulationEventType,
)
from designer.adapters import PersistenceBridge
from designer.simulation import SimulationEngine, SimulationState
from designer.session import PipelineDesigner

__all__ = [
    # Errors
    "AlreadyRunning",
    "CycleDetected",
    "DesignerError",
    "InvalidEndpoint",
    "UnknownPreset",
    # Graph
    "GraphModel",
    "HistoryManager",
    "PipelineEditor",
    "Preset",
    # Data models
    "HistorySnapshot",
    "NodeConfig",
    "NodeKind",
    "PipelineEdge",
    "PipelineNode",
    "Position",
    "PublishedPipeline",
    "SimulationEvent",
    "SimulationEventType",
    # High-level APIs
    "PersistenceBridge",
    "SimulationEngine",
    "SimulationState",
    "PipelineDesigner",
]
