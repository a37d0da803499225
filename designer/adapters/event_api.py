"""Simulation event emission API."""

from designer.adapters.sinks import EventSink
from designer.models.simulation_event import SimulationEvent, SimulationEventType


class EventEmitter:
    """Builds sequenced events for one simulation run and hands them to a sink."""

    def __init__(self, run_id: str, event_sink: EventSink) -> None:
        self.run_id = run_id
        self.event_sink = event_sink
        self._sequence = 0

    def _next_sequence(self) -> int:
        """Get the next sequence number."""
        seq = self._sequence
        self._sequence += 1
        return seq

    def emit(
        self,
        event_type: SimulationEventType,
        elapsed_ms: float,
        node_id: str | None = None,
        edge_id: str | None = None,
        cancelled: bool = False,
    ) -> SimulationEvent:
        """Emit a simulation event with the given parameters."""
        event = SimulationEvent(
            run_id=self.run_id,
            sequence=self._next_sequence(),
            event_type=event_type,
            elapsed_ms=elapsed_ms,
            node_id=node_id,
            edge_id=edge_id,
            cancelled=cancelled,
        )
        self.event_sink.append(event)
        return event

    def emit_node_active(self, node_id: str, elapsed_ms: float) -> SimulationEvent:
        """The walk arrived at node_id."""
        return self.emit(SimulationEventType.node_active, elapsed_ms, node_id=node_id)

    def emit_edge_active(self, edge_id: str, elapsed_ms: float) -> SimulationEvent:
        """The walk is travelling along edge_id."""
        return self.emit(SimulationEventType.edge_active, elapsed_ms, edge_id=edge_id)

    def emit_elapsed(self, node_id: str, elapsed_ms: float) -> SimulationEvent:
        """One dwell tick at node_id has passed."""
        return self.emit(SimulationEventType.elapsed_ms_updated, elapsed_ms, node_id=node_id)

    def emit_finished(self, elapsed_ms: float, cancelled: bool = False) -> SimulationEvent:
        """The run is over, either naturally or because it was cancelled."""
        return self.emit(SimulationEventType.finished, elapsed_ms, cancelled=cancelled)
