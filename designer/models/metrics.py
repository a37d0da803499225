"""Static performance estimate for the current pipeline."""

from enum import Enum

from pydantic import BaseModel


class PipelineStatus(str, Enum):
    OPTIMAL = "OPTIMAL"
    DEGRADED = "DEGRADED"
    CRITICAL = "CRITICAL"


class LatencyShare(BaseModel):
    """one row of the latency breakdown."""

    node_id: str
    label: str
    latency_ms: float
    share: float  # 0..1, relative to the reference latency


class SimulationMetrics(BaseModel):
    """Totals over the active nodes of a pipeline."""

    total_latency_ms: float
    total_cost_per_million: float
    bottleneck: str  # label of the slowest active node, "" if none
    status: PipelineStatus
    breakdown: list[LatencyShare] = []
