"""Core data models for the pipeline designer."""

from designer.models.pipeline_node import (
    NodeConfig,
    NodeKind,
    PipelineNode,
    Position,
)
from designer.models.pipeline_edge import PipelineEdge
from designer.models.snapshot import (
    HistorySnapshot,
    PublishedPipeline,
)
from designer.models.simulation_event import (
    SimulationEvent,
    SimulationEventType,
)
from designer.models.metrics import (
    LatencyShare,
    PipelineStatus,
    SimulationMetrics,
)

__all__ = [
    # Graph values
    "NodeConfig",
    "NodeKind",
    "PipelineNode",
    "Position",
    "PipelineEdge",
    # Snapshots
    "HistorySnapshot",
    "PublishedPipeline",
    # Simulation
    "SimulationEvent",
    "SimulationEventType",
    # Metrics
    "LatencyShare",
    "PipelineStatus",
    "SimulationMetrics",
]
