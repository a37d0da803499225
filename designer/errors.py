"""Errors raised by the pipeline designer core.

All of them are local and recoverable; none leaves the graph or the
history in a changed state.
"""


class DesignerError(Exception):
    """Base class for designer errors."""


class InvalidEndpoint(DesignerError):
    """connect() was given a node id that is not in the graph."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Node not found: {node_id}")
        self.node_id = node_id


class AlreadyRunning(DesignerError):
    """start() was called while a simulation is in progress."""


class CycleDetected(DesignerError):
    """The graph contains a directed cycle, so a walk would never end."""

    def __init__(self, cycle_nodes: list[str]) -> None:
        super().__init__(f"Graph contains a cycle through: {', '.join(cycle_nodes)}")
        self.cycle_nodes = cycle_nodes


class UnknownPreset(DesignerError, ValueError):
    """apply_preset() was given a name outside the preset table."""
