"""Analysis helpers for pipeline graphs."""

from designer.analysis.metrics import classify_latency, compute_metrics

__all__ = [
    "classify_latency",
    "compute_metrics",
]
