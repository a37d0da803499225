"""Utility functions for the pipeline designer."""

from designer.utils.identifiers import (
    generate_node_id,
    generate_edge_id,
    generate_session_id,
    epoch_millis,
)

__all__ = [
    "generate_node_id",
    "generate_edge_id",
    "generate_session_id",
    "epoch_millis",
]
