"""ID generation and timestamp utilities."""

import time
import uuid


def generate_node_id() -> str:
    """Generate a node ID ("n" + 12-char hex string)."""
    return f"n{uuid.uuid4().hex[:12]}"


def generate_edge_id(source: str, target: str) -> str:
    """Generate an edge ID; unique even for parallel edges between the same pair."""
    return f"e{source}-{target}-{uuid.uuid4().hex[:6]}"


def generate_session_id() -> str:
    """Generate a unique designer session ID (UUID4)."""
    return str(uuid.uuid4())


def epoch_millis() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)
