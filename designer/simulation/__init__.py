"""Step-wise latency simulation."""

from designer.simulation.engine import SimulationEngine, SimulationResult, SimulationState

__all__ = [
    "SimulationEngine",
    "SimulationResult",
    "SimulationState",
]
