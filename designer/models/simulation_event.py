"""
Events emitted while a simulation walks the pipeline graph.

The renderer consumes these to highlight the active node/edge and to show
the running clock. They are observational only.
"""

from enum import Enum
from typing import Self

from pydantic import BaseModel, model_validator


class SimulationEventType(str, Enum):
    """Types of events in a simulation run."""

    node_active = "node_active"
    edge_active = "edge_active"
    elapsed_ms_updated = "elapsed_ms_updated"
    finished = "finished"


class SimulationEvent(BaseModel):
    """A single step of a simulation run."""

    model_config = {"extra": "forbid", "frozen": True}

    run_id: str
    sequence: int  # monotonic ordering within a run
    event_type: SimulationEventType
    elapsed_ms: float

    node_id: str | None = None
    edge_id: str | None = None
    cancelled: bool = False  # only meaningful on "finished"

    @model_validator(mode="after")
    def validate_targets(self) -> Self:
        """node_active needs a node_id, edge_active needs an edge_id."""
        if self.event_type == SimulationEventType.node_active and not self.node_id:
            raise ValueError("node_active event must carry 'node_id'")
        if self.event_type == SimulationEventType.edge_active and not self.edge_id:
            raise ValueError("edge_active event must carry 'edge_id'")
        if self.cancelled and self.event_type != SimulationEventType.finished:
            raise ValueError("only a finished event can be marked cancelled")
        return self
