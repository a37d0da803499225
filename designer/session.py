"""Convenience wrapper for a designer session.

Wires graph, editor, history, simulation and publication together so a
host view needs a single object.
"""

from pathlib import Path

from designer.adapters.bridge import PersistenceBridge
from designer.adapters.publishers import FilePublisher, ListPublisher, PipelinePublisher
from designer.adapters.reader import load_graph, read_pipeline_file
from designer.adapters.sinks import EventSink, ListSink
from designer.analysis.metrics import compute_metrics
from designer.config import DesignerSettings, SimulationSettings
from designer.graph.editor import PipelineEditor
from designer.graph.history import HistoryManager
from designer.graph.model import GraphModel
from designer.models.metrics import SimulationMetrics
from designer.simulation.engine import SimulationEngine
from designer.utils.identifiers import generate_session_id


class PipelineDesigner:
    """High-level interface for one pipeline designer view.

    Usage:
        from designer import PipelineDesigner

        session = PipelineDesigner(store_path="./data/active_pipeline.json")
        node_id = session.editor.add_node({...})
        session.editor.connect("n6", node_id)
        result = await session.engine.run()
    """

    def __init__(
        self,
        graph: GraphModel | None = None,
        publisher: PipelinePublisher | None = None,
        store_path: str | Path | None = None,
        sink: EventSink | None = None,
        settings: DesignerSettings | None = None,
        simulation_settings: SimulationSettings | None = None,
    ) -> None:
        """Initialize a new designer session.

        Args:
            graph: starting graph. If None it is loaded from store_path,
                falling back to the built-in default graph.
            publisher: where the node projection goes. Defaults to a
                FilePublisher on store_path, or an in-memory ListPublisher.
            store_path: JSON file holding the published projection.
            sink: receiver for simulation events (in-memory if None).
        """
        self.session_id = generate_session_id()
        self.settings = settings or DesignerSettings()

        if graph is None:
            graph = load_graph(read_pipeline_file(store_path) if store_path else None)
        if publisher is None:
            publisher = FilePublisher(store_path) if store_path else ListPublisher()

        self._graph = graph
        self._editor = PipelineEditor(graph, HistoryManager(self.settings.history_capacity))
        self._bridge = PersistenceBridge(graph, publisher)
        self._sink: EventSink = sink if sink is not None else ListSink()
        self._engine = SimulationEngine(graph, self._sink, simulation_settings)

    @property
    def graph(self) -> GraphModel:
        return self._graph

    @property
    def editor(self) -> PipelineEditor:
        """Mutation API; every call is one undoable step."""
        return self._editor

    @property
    def history(self) -> HistoryManager:
        return self._editor.history

    @property
    def engine(self) -> SimulationEngine:
        return self._engine

    @property
    def bridge(self) -> PersistenceBridge:
        return self._bridge

    @property
    def sink(self) -> EventSink:
        return self._sink

    def metrics(self) -> SimulationMetrics:
        """Static latency/cost estimate of the current graph."""
        return compute_metrics(self._graph.nodes)

    def close(self) -> None:
        """Stop any running simulation and detach the publisher."""
        self._engine.cancel()
        self._bridge.close()

    def __repr__(self) -> str:
        return f"PipelineDesigner(session_id={self.session_id!r}, graph={self._graph!r})"
