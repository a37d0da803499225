"""Tests for the static latency/cost estimate."""

import pytest

from designer.analysis.metrics import classify_latency, compute_metrics
from designer.defaults import default_nodes
from designer.models.metrics import PipelineStatus
from designer.models.pipeline_node import NodeKind, PipelineNode


def step(node_id: str, latency: float, cost: float = 0.1, active: bool = True) -> PipelineNode:
    return PipelineNode(
        id=node_id,
        kind=NodeKind.RETRIEVAL,
        label=node_id.upper(),
        model="m",
        active=active,
        base_latency_ms=latency,
        base_cost_per_million=cost,
    )


class TestComputeMetrics:
    def test_default_pipeline(self):
        """Knowledge Graph is inactive, so 640 ms and OPTIMAL."""
        metrics = compute_metrics(default_nodes())
        assert metrics.total_latency_ms == 640
        assert metrics.total_cost_per_million == pytest.approx(1.08)
        assert metrics.bottleneck == "Synthesis Core"
        assert metrics.status == PipelineStatus.OPTIMAL
        assert len(metrics.breakdown) == 7

    def test_inactive_nodes_are_ignored(self):
        metrics = compute_metrics([step("a", 100), step("b", 900, cost=5, active=False)])
        assert metrics.total_latency_ms == 100
        assert metrics.total_cost_per_million == pytest.approx(0.1)
        assert metrics.bottleneck == "A"

    def test_ties_keep_first_node(self):
        assert compute_metrics([step("a", 50), step("b", 50)]).bottleneck == "A"

    def test_no_active_nodes(self):
        metrics = compute_metrics([step("a", 100, active=False)])
        assert metrics.bottleneck == ""
        assert metrics.total_latency_ms == 0
        assert metrics.breakdown == []

    def test_breakdown_share_is_capped(self):
        metrics = compute_metrics([step("a", 150), step("b", 600)])
        assert [row.share for row in metrics.breakdown] == [0.5, 1.0]


class TestClassifyLatency:
    @pytest.mark.parametrize(
        "latency,status",
        [
            (0, PipelineStatus.OPTIMAL),
            (799, PipelineStatus.OPTIMAL),
            (800, PipelineStatus.DEGRADED),
            (1499, PipelineStatus.DEGRADED),
            (1500, PipelineStatus.CRITICAL),
        ],
    )
    def test_thresholds(self, latency, status):
        assert classify_latency(latency) == status
