"""Immutable graph captures: history snapshots and the published projection."""

from pydantic import BaseModel

from designer.models.pipeline_edge import PipelineEdge
from designer.models.pipeline_node import WIRE_CONFIG, PipelineNode


class HistorySnapshot(BaseModel):
    """the full graph state at one point in history.

    Tuples of frozen models, so holding a snapshot never aliases live state.
    """

    model_config = {"frozen": True}

    nodes: tuple[PipelineNode, ...] = ()
    edges: tuple[PipelineEdge, ...] = ()


class PublishedPipeline(BaseModel):
    """Read-only projection of the node set shared with other features.

    Serialized with camelCase keys:
        {"nodes": [{"id": ..., "kind": ..., "baseLatencyMs": ...}], "updatedAt": 1700000000000}
    """

    model_config = WIRE_CONFIG

    nodes: list[PipelineNode]
    updated_at: int  # epoch milliseconds
