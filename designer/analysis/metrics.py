"""
Static latency/cost estimate of a pipeline.

Sums over active nodes only; inactive steps stay in the graph but cost
nothing. The thresholds follow the usual RAG latency budget of < 800 ms
end to end.
"""

from typing import Iterable

from designer.models.metrics import LatencyShare, PipelineStatus, SimulationMetrics
from designer.models.pipeline_node import PipelineNode


OPTIMAL_BELOW_MS = 800
DEGRADED_BELOW_MS = 1500

# latency that fills a breakdown bar completely
REFERENCE_LATENCY_MS = 300


def classify_latency(total_latency_ms: float) -> PipelineStatus:
    if total_latency_ms < OPTIMAL_BELOW_MS:
        return PipelineStatus.OPTIMAL
    if total_latency_ms < DEGRADED_BELOW_MS:
        return PipelineStatus.DEGRADED
    return PipelineStatus.CRITICAL


def compute_metrics(nodes: Iterable[PipelineNode]) -> SimulationMetrics:
    """Totals, bottleneck, status and per-node breakdown for active nodes."""
    active = [node for node in nodes if node.active]
    total_latency = sum(node.base_latency_ms for node in active)
    total_cost = sum(node.base_cost_per_million for node in active)

    bottleneck = ""
    if active:
        # max() keeps the first of equal candidates
        bottleneck = max(active, key=lambda node: node.base_latency_ms).label

    breakdown = [
        LatencyShare(
            node_id=node.id,
            label=node.label,
            latency_ms=node.base_latency_ms,
            share=min(1.0, node.base_latency_ms / REFERENCE_LATENCY_MS),
        )
        for node in active
    ]

    return SimulationMetrics(
        total_latency_ms=total_latency,
        total_cost_per_million=total_cost,
        bottleneck=bottleneck,
        status=classify_latency(total_latency),
        breakdown=breakdown,
    )
